class TAMEError(Exception):
    """Base class for errors raised while computing an alignment."""


class DimensionMismatch(TAMEError, ValueError):
    """A vector or matrix does not have the size implied by the two graphs."""


class OutOfRange(TAMEError, IndexError):
    """A vertex index is outside of ``[0, n)``."""


class NumericDegenerate(TAMEError, FloatingPointError):
    """A vector that has to be normalized has zero (or non-finite) L1 norm."""
