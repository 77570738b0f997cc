class GenerationError(Exception):
    """Board configuration cannot produce a valid pairing."""


class MalformedBoardError(ValueError):
    """Board rows have inconsistent lengths."""
