"""Exceptions raised by the pathloft geometry engines.

All of them are structural failures: the input could not be turned into
a mesh.  Callers are expected to skip the geometry rather than retry.
"""


class GeometryError(ValueError):
    """Base class for loft and triangulation failures."""

    def __init__(self, message, details=None):
        super().__init__(message)
        self.details = details or {}


class DegeneratePathError(GeometryError):
    """Raised for paths with fewer than three vertices or no usable plane."""


class NoStartingConnection(GeometryError):
    """Raised when the first row of a loft adjacency matrix is empty."""


class BrokenConnectivityPath(GeometryError):
    """Raised when the loft strip walk cannot advance from a cell."""


class NoEarFound(GeometryError):
    """Raised when ear clipping runs out of ears before finishing."""


__all__ = [
    'GeometryError',
    'DegeneratePathError',
    'NoStartingConnection',
    'BrokenConnectivityPath',
    'NoEarFound',
]
