#!/usr/bin/env python3
"""
msquares Exceptions

This module defines custom exceptions used throughout the msquares library.
"""


class MSquaresError(Exception):
    """Base class for all msquares exceptions."""
    pass


class PreconditionError(MSquaresError, ValueError):
    """Exception raised when a caller violates a tessellation precondition."""
    pass


class GridError(PreconditionError):
    """Exception raised when grid dimensions or sample buffers are invalid."""
    pass


class FlagError(PreconditionError):
    """Exception raised when a flag combination is not supported by a mode."""
    pass


class SampleFormatError(PreconditionError):
    """Exception raised when sample data has an unsupported layout."""
    pass


class ColorLimitError(PreconditionError):
    """Exception raised when a grid holds more distinct ids than supported."""
    pass


class MeshIndexError(MSquaresError, IndexError):
    """Exception raised when a mesh list is indexed out of range."""
    pass


class MeshValidationError(MSquaresError):
    """Raised when mesh data fails validation."""
    pass


class TableIntegrityError(MSquaresError):
    """Raised when a case-table literal does not decode cleanly."""
    pass
