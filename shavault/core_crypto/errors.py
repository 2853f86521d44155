"""
Internal Fault Exceptions

Every error in this module signals a defect in the hashing code itself.
Any byte string is a legal message or key, so none of these can be
triggered by caller input.
"""


class InternalConsistencyError(Exception):
    """Raised when an internal invariant of SHA-256 or HMAC is broken."""
    pass


class FramingError(InternalConsistencyError):
    """Raised when padding or block iteration produced a malformed buffer."""
    pass


class HmacError(InternalConsistencyError):
    """Raised when HMAC key normalization or the inner hash has a bad length."""
    pass
