#!/usr/bin/env python3
"""
Tests for the msquares exceptions module.

This module checks the exception hierarchy and that precondition errors
remain catchable as ValueError.
"""

import pytest
from msquares.exceptions import (
    MSquaresError,
    PreconditionError,
    GridError,
    FlagError,
    SampleFormatError,
    ColorLimitError,
    MeshIndexError,
    MeshValidationError,
    TableIntegrityError
)


class TestMSquaresExceptions:
    """Test cases for msquares exception classes."""

    def test_base_exception(self):
        """Test that MSquaresError can be raised and caught properly."""
        error_msg = "Base msquares exception"
        with pytest.raises(MSquaresError) as excinfo:
            raise MSquaresError(error_msg)

        assert str(excinfo.value) == error_msg
        assert isinstance(excinfo.value, Exception)

    @pytest.mark.parametrize("cls", [GridError, FlagError, SampleFormatError, ColorLimitError])
    def test_precondition_errors(self, cls):
        """Test that every precondition error is a PreconditionError and a ValueError."""
        with pytest.raises(PreconditionError) as excinfo:
            raise cls("bad input")

        assert isinstance(excinfo.value, MSquaresError)
        assert isinstance(excinfo.value, ValueError)

    def test_mesh_index_error(self):
        """Test that MeshIndexError is also an IndexError."""
        with pytest.raises(IndexError):
            raise MeshIndexError("Mesh index 3 out of range")

    def test_non_precondition_errors(self):
        """Test that data errors are not ValueErrors."""
        for cls in (MeshValidationError, TableIntegrityError):
            error = cls("broken")
            assert isinstance(error, MSquaresError)
            assert not isinstance(error, ValueError)

    def test_exception_hierarchy(self):
        """Test catching exceptions through the hierarchy."""
        try:
            raise ColorLimitError("Too many colors")
        except MSquaresError as e:
            assert isinstance(e, ColorLimitError)
            assert not isinstance(e, GridError)
