class MonosplitError(Exception):
    """Base class for every error raised by monosplit."""
