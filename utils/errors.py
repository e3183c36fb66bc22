class UnmarkError(Exception):
    """Base class for errors raised while handling a removal request."""


class InvalidImageError(UnmarkError):
    """Uploaded bytes are not a supported image (or mask)."""


class RemovalError(UnmarkError):
    """A removal backend could not produce a result."""
