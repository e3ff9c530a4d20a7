"""
Tests for MarchConfig.
"""
import logging

import pytest

from msquares.config import MarchConfig
from msquares.exceptions import FlagError, GridError
from msquares.flags import Flags


class TestMarchConfig:
    """Test cases for configuration validation and derived values."""

    def test_derived_geometry(self):
        config = MarchConfig(8, 4, 2)
        assert config.ncols == 4
        assert config.nrows == 2
        assert config.ncells == 8
        assert config.normalization == pytest.approx(1 / 8)
        assert config.cell_extent == pytest.approx(0.25)
        assert config.dim == 2

    def test_heights_dimension(self):
        assert MarchConfig(4, 4, 2, Flags.HEIGHTS).dim == 3

    def test_flags_coerced(self):
        config = MarchConfig(4, 4, 1, 5)
        assert config.flags == Flags.INVERT | Flags.HEIGHTS
        assert isinstance(config.flags, Flags)

    @pytest.mark.parametrize("width,height,cellsize", [
        (0, 4, 1),
        (4, -4, 1),
        (4, 4, 0),
        (5, 4, 2),
        (4, 6, 4),
        (4.0, 4, 1),
    ])
    def test_invalid_grid(self, width, height, cellsize):
        with pytest.raises(GridError):
            MarchConfig(width, height, cellsize)

    def test_effective_flags_without_heights(self, caplog):
        config = MarchConfig(4, 4, 1, Flags.SNAP | Flags.CONNECT | Flags.SIMPLIFY)
        with caplog.at_level(logging.WARNING, logger="msquares.config"):
            flags = config.effective_flags()
        assert flags == Flags.SIMPLIFY
        assert "HEIGHTS" in caplog.text

    def test_effective_flags_with_heights(self):
        flags = Flags.HEIGHTS | Flags.SNAP | Flags.CONNECT
        assert MarchConfig(4, 4, 1, flags).effective_flags() == flags

    @pytest.mark.parametrize("flag", [Flags.INVERT, Flags.DUAL, Flags.SNAP])
    def test_multicolor_rejects(self, flag):
        with pytest.raises(FlagError):
            MarchConfig(4, 4, 1, flag).validate_multicolor()

    def test_replace_validates(self):
        config = MarchConfig(4, 4, 2)
        assert config.replace(flags=Flags.DUAL).flags == Flags.DUAL
        with pytest.raises(GridError):
            config.replace(cellsize=3)

    def test_dict_round_trip_keeps_extra(self):
        config = MarchConfig.from_dict({"width": 4, "height": 2, "cellsize": 2,
                                        "flags": 32, "label": "demo"})
        assert config.extra == {"label": "demo"}
        data = config.as_dict()
        assert data["flags"] == 32
        assert data["extra"] == {"label": "demo"}
        assert "extra" not in MarchConfig(4, 4).as_dict()
