class InvalidInputShapeError(Exception):
    """Raised when an entity collection handed to an engine is not a list of records."""

    pass


class AllocationBlockedError(Exception):
    """Raised when allocation is gated on validation and error-level findings remain."""

    pass


class RuleClassificationError(Exception):
    """Raised when the external rule classifier returns an unusable answer."""

    pass


class FileReadingError(Exception):
    """Raised when there is an error reading a file."""

    pass


class FileContentError(Exception):
    """Raised when the content of a file is not as expected."""

    pass


# Mapping of custom exceptions to HTTP status codes
CUSTOM_ERRORS = {
    InvalidInputShapeError: 400,
    AllocationBlockedError: 409,
    RuleClassificationError: 502,
    FileReadingError: 500,
    FileContentError: 400,
}
