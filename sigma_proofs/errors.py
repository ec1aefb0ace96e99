"""
Error Taxonomy
==============

Every failure of the protocol engine is a subclass of ``SigmaError``.

- InvalidResponse: the proof was rejected by a verification equation
- VectorTooShort, VectorLenMismatch, NotPowerOfTwo: parameter/witness
  sizing errors, detected before any arithmetic is attempted
- WrongRecursionLevel, FaultyParameterSize: sizing errors of the
  recursive (compressed) variant and of linear-form padding
- SerializationError: wraps a failure of the canonical encoding layer

Sizing errors are usage errors; retrying without changing the inputs will
fail the same way. A rejected proof is final.
"""


class SigmaError(Exception):
    """Base class for all sigma protocol errors."""


class InvalidResponse(SigmaError):
    """The response does not satisfy the verification equations."""


class VectorTooShort(SigmaError):
    pass


class VectorLenMismatch(SigmaError):
    pass


class NotPowerOfTwo(SigmaError):
    pass


class WrongRecursionLevel(SigmaError):
    pass


class FaultyParameterSize(SigmaError):
    pass


class SerializationError(SigmaError):
    """
    Canonical encoding or decoding of a group element, scalar or proof failed.

    The backend exception is kept as ``__cause__``.
    """
