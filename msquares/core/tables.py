"""
Marching squares case tables.

The tables are stored as compact digit runs. Each run starts with a count N
followed by N items of slot digits. Slots number the points of a cell
counter-clockwise from the lower-left corner::

    6 --- 5 --- 4
    |           |
    7     8     3
    |           |
    0 --- 1 --- 2

Odd slots are edge midpoints and slot 8 (the center) only occurs in the
quaternary tables. The binary table is indexed by the 4-bit inside code; the
quaternary tables are indexed by the compressed 6-bit color code and hold
one list per cell corner (SW, SE, NE, NW).
"""

import logging
import threading
from dataclasses import dataclass
from typing import Tuple

from ..exceptions import TableIntegrityError

# Set up logging
logger = logging.getLogger(__name__)

Triangle = Tuple[int, int, int]

BINARY_SLOTS = 8
QUATERNARY_SLOTS = 9

BINARY_TABLE = (
    "0"
    "1017"
    "1123"
    "2023370"
    "1756"
    "2015560"
    "2123756"
    "3023035056"
    "1345"
    "4013034045057"
    "2124451"
    "3024045057"
    "2734467"
    "3013034046"
    "3124146167"
    "2024460"
)

QUATERNARY_TABLE = (
    "2024046000"
    "3346360301112300"
    "3346360301112300"
    "3346360301112300"
    "3560502523013450"
    "2015056212414500"
    "4018087785756212313828348450"
    "4018087785756212313828348450"
    "3560502523013450"
    "4018087785756212313828348450"
    "2015056212414500"
    "4018087785756212313828348450"
    "3560502523013450"
    "4018087785756212313828348450"
    "4018087785756212313828348450"
    "2015056212414500"
    "3702724745001756"
    "2018087212313828348452785756"
    "4013034045057112301756"
    "4013034045057112301756"
    "2023037027347460"
    "1701312414616700"
    "2018087212313847857568348450"
    "2018087212313847857568348450"
    "4018087123138028348452785756"
    "1701467161262363513450"
    "2018087412313883484502785756"
    "2018087212313828348452785756"
    "4018087123138028348452785756"
    "1701467161262363513450"
    "2018087212313828348452785756"
    "2018087412313883484502785756"
    "3702724745001756"
    "4013034045057112301756"
    "2018087212313828348452785756"
    "4013034045057112301756"
    "4018087123138028348452785756"
    "2018087412313883484502785756"
    "1701467161262363513450"
    "2018087212313828348452785756"
    "2023037027347460"
    "2018087212313847857568348450"
    "1701312414616700"
    "2018087212313847857568348450"
    "4018087123138028348452785756"
    "2018087212313828348452785756"
    "1701467161262363513450"
    "2018087412313883484502785756"
    "3702724745001756"
    "4013034045057112301756"
    "4013034045057112301756"
    "2018087212313828348452785756"
    "4018087123138028348452785756"
    "2018087412313883484502785756"
    "2018087212313828348452785756"
    "1701467161262363513450"
    "4018087123138028348452785756"
    "2018087212313828348452785756"
    "2018087412313883484502785756"
    "1701467161262363513450"
    "2023037027347460"
    "2018087212313847857568348450"
    "2018087212313847857568348450"
    "1701312414616700"
)

QUATERNARY_EDGES = (
    "0000"
    "21323100"
    "21323100"
    "21323100"
    "23502530"
    "21525100"
    "3185338135830"
    "3185338135830"
    "23502530"
    "3185338135830"
    "21525100"
    "3185338135830"
    "23502530"
    "3185338135830"
    "3185338135830"
    "21525100"
    "25700275"
    "3187338135833785"
    "413572310275"
    "413572310275"
    "23702730"
    "21727100"
    "3187338137830"
    "3187338137830"
    "3387035833785"
    "217471352530"
    "3187358103785"
    "3187338135833785"
    "3387035833785"
    "217471352530"
    "3187338135833785"
    "3187358103785"
    "25700275"
    "413572310275"
    "3187338135833785"
    "413572310275"
    "3387035833785"
    "3187358103785"
    "217471352530"
    "3187338135833785"
    "23702730"
    "3187338137830"
    "21727100"
    "3187338137830"
    "3387035833785"
    "3187338135833785"
    "217471352530"
    "3187358103785"
    "25700275"
    "413572310275"
    "413572310275"
    "3187338135833785"
    "3387035833785"
    "3187358103785"
    "3187338135833785"
    "217471352530"
    "3387035833785"
    "3187338135833785"
    "3187358103785"
    "217471352530"
    "23702730"
    "3187338137830"
    "3187338137830"
    "21727100"
)


@dataclass(frozen=True)
class CaseTables:
    """Decoded lookup tables shared by every marcher."""
    binary_points: Tuple[Tuple[int, ...], ...]
    binary_triangles: Tuple[Tuple[Triangle, ...], ...]
    quaternary_triangles: Tuple[Tuple[Tuple[Triangle, ...], ...], ...]
    quaternary_boundaries: Tuple[Tuple[Tuple[int, ...], ...], ...]


class _DigitReader:
    """Sequential reader over a digit-run literal."""

    def __init__(self, literal: str, nslots: int):
        self.literal = literal
        self.nslots = nslots
        self.pos = 0

    def count(self) -> int:
        if self.pos >= len(self.literal):
            raise TableIntegrityError(
                f"Table literal ended early at offset {self.pos}"
            )
        value = int(self.literal[self.pos])
        self.pos += 1
        return value

    def slot(self) -> int:
        value = self.count()
        if not 0 <= value < self.nslots:
            raise TableIntegrityError(
                f"Slot {value} at offset {self.pos - 1} is outside 0..{self.nslots - 1}"
            )
        return value

    def finish(self) -> None:
        if self.pos != len(self.literal):
            raise TableIntegrityError(
                f"Table literal has {len(self.literal) - self.pos} unread digits"
            )


def decode_binary_table(
    literal: str = BINARY_TABLE
) -> Tuple[Tuple[Tuple[int, ...], ...], Tuple[Tuple[Triangle, ...], ...]]:
    """
    Decode the 16-case binary table.

    Args:
        literal: Digit-run encoding with one triangle list per case

    Returns:
        Tuple of (points, triangles). ``points[code]`` lists the slots a case
        needs in order of first use; ``triangles[code]`` lists slot triples.

    Raises:
        TableIntegrityError: If a slot is out of range or the length is off
    """
    reader = _DigitReader(literal, BINARY_SLOTS)
    points = []
    triangles = []
    for _ in range(16):
        ntris = reader.count()
        case_tris = []
        case_pts = []
        for _ in range(ntris):
            tri = (reader.slot(), reader.slot(), reader.slot())
            case_tris.append(tri)
            for slot in tri:
                if slot not in case_pts:
                    case_pts.append(slot)
        triangles.append(tuple(case_tris))
        points.append(tuple(case_pts))
    reader.finish()
    return tuple(points), tuple(triangles)


def decode_quaternary_table(literal: str, per_item: int) -> Tuple[Tuple[tuple, ...], ...]:
    """
    Decode a 64-case quaternary table with four lists per case.

    Args:
        literal: Digit-run encoding
        per_item: Slots per item, 3 for triangles and 1 for boundary points

    Returns:
        ``table[code][corner]`` is a tuple of slot triples (``per_item=3``) or
        of slots (``per_item=1``)

    Raises:
        TableIntegrityError: If a slot is out of range or the length is off
    """
    reader = _DigitReader(literal, QUATERNARY_SLOTS)
    table = []
    for _ in range(64):
        corners = []
        for _ in range(4):
            nitems = reader.count()
            if per_item == 1:
                items = tuple(reader.slot() for _ in range(nitems))
            else:
                items = tuple(
                    tuple(reader.slot() for _ in range(per_item))
                    for _ in range(nitems)
                )
            corners.append(items)
        table.append(tuple(corners))
    reader.finish()
    return tuple(table)


def build_case_tables() -> CaseTables:
    """Decode every literal into a fresh CaseTables instance."""
    binary_points, binary_triangles = decode_binary_table(BINARY_TABLE)
    tables = CaseTables(
        binary_points=binary_points,
        binary_triangles=binary_triangles,
        quaternary_triangles=decode_quaternary_table(QUATERNARY_TABLE, 3),
        quaternary_boundaries=decode_quaternary_table(QUATERNARY_EDGES, 1),
    )
    logger.debug("Decoded marching squares case tables")
    return tables


_TABLES = None
_TABLES_LOCK = threading.Lock()


def get_case_tables() -> CaseTables:
    """
    Get the process-wide case tables, building them on first use.

    Returns:
        The shared CaseTables instance
    """
    global _TABLES
    if _TABLES is None:
        with _TABLES_LOCK:
            if _TABLES is None:
                _TABLES = build_case_tables()
    return _TABLES
