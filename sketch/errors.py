"""Error types raised by the sketch filters."""


class InvalidInput(ValueError):
    """An image or filter parameter was rejected before any pixel work.

    The message is meant to be shown to the user as-is.
    """
