"""Error classes"""

__all__ = ["RangeError"]


class RangeError(IndexError):
    """Index or slice bounds that a value cannot satisfy.

    Raised for negative indices and malformed slice ranges. These are
    never converted into a fallback value, the evaluator is expected to
    validate lower bounds before indexing.

    Args:
        message: (str) Error description
        bounds: (tuple | None) The offending bounds

    Attributes:
        message: (str) Error description
        bounds: (tuple | None) The offending bounds
    """

    def __init__(self, message, bounds=None):
        self.message = message
        self.bounds = bounds
        super().__init__(message)
