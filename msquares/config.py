"""
Configuration for marching squares runs.

This module provides the configuration class shared by the marchers, with
validation, derived grid geometry, and dictionary serialization.
"""

import logging
from dataclasses import dataclass, field, asdict, fields
from typing import Dict, Any

from .exceptions import GridError, FlagError
from .flags import Flags

# Set up logging
logger = logging.getLogger(__name__)


@dataclass
class MarchConfig:
    """
    Grid geometry and flags for a single marching squares run.

    The grid holds ``width x height`` samples split into square cells of
    ``cellsize`` samples. Both dimensions must be exact multiples of the
    cell size.
    """
    width: int
    height: int
    cellsize: int = 1
    flags: Flags = Flags.NONE

    # Optional parameters (stored as dict)
    extra: Dict[str, Any] = field(default_factory=dict)

    def __post_init__(self):
        """Validate configuration after initialization."""
        self.flags = Flags(int(self.flags))
        self.validate()

    def validate(self) -> None:
        """
        Validate configuration parameters.

        Raises:
            GridError: If the grid dimensions are invalid
        """
        for name in ('width', 'height', 'cellsize'):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int):
                raise GridError(f"{name} must be an integer, got {value!r}")
            if value <= 0:
                raise GridError(f"{name} must be positive, got {value}")

        if self.width % self.cellsize != 0:
            raise GridError(
                f"width {self.width} is not a multiple of cellsize {self.cellsize}"
            )
        if self.height % self.cellsize != 0:
            raise GridError(
                f"height {self.height} is not a multiple of cellsize {self.cellsize}"
            )

    def validate_multicolor(self) -> None:
        """
        Check that the flags are usable with the multi-color marcher.

        Raises:
            FlagError: If INVERT, DUAL or SNAP is set
        """
        for flag in (Flags.INVERT, Flags.DUAL, Flags.SNAP):
            if self.has(flag):
                raise FlagError(f"{flag.name} is not supported with color_multi")

    def has(self, flag: Flags) -> bool:
        """Return True if every bit of ``flag`` is set."""
        return (self.flags & flag) == flag

    def effective_flags(self) -> Flags:
        """
        Get the flags with SNAP and CONNECT removed when HEIGHTS is missing.

        Returns:
            Flags actually honoured by the marchers
        """
        flags = self.flags
        if flags & Flags.HEIGHTS:
            return flags
        dropped = flags & (Flags.SNAP | Flags.CONNECT)
        if dropped:
            logger.warning(f"Ignoring {dropped!r}: HEIGHTS flag is not set")
        return flags & ~(Flags.SNAP | Flags.CONNECT)

    def replace(self, **changes) -> 'MarchConfig':
        """Return a validated copy with the given fields replaced."""
        values = {f.name: getattr(self, f.name) for f in fields(self)}
        values['extra'] = dict(self.extra)
        values.update(changes)
        return MarchConfig(**values)

    @property
    def ncols(self) -> int:
        return self.width // self.cellsize

    @property
    def nrows(self) -> int:
        return self.height // self.cellsize

    @property
    def ncells(self) -> int:
        return self.ncols * self.nrows

    @property
    def normalization(self) -> float:
        """Scale factor mapping sample space to unit output space."""
        return 1.0 / max(self.width, self.height)

    @property
    def cell_extent(self) -> float:
        """Side length of one cell in output space."""
        return self.cellsize * self.normalization

    @property
    def dim(self) -> int:
        """Number of coordinates per output point."""
        return 3 if self.flags & Flags.HEIGHTS else 2

    def as_dict(self) -> Dict[str, Any]:
        """
        Get configuration as a dictionary.

        Returns:
            Dictionary representation of configuration
        """
        result = asdict(self)
        result['flags'] = int(self.flags)
        # Remove extra if empty
        if not result['extra']:
            del result['extra']
        return result

    @classmethod
    def from_dict(cls, config_dict: Dict[str, Any]) -> 'MarchConfig':
        """
        Create configuration from a dictionary.

        Args:
            config_dict: Dictionary of configuration parameters

        Returns:
            New MarchConfig instance
        """
        names = [f.name for f in fields(cls)]
        known_params = {k: v for k, v in config_dict.items() if k in names}
        extra_params = {k: v for k, v in config_dict.items() if k not in names}

        config = cls(**known_params)
        config.extra.update(extra_params)
        return config
