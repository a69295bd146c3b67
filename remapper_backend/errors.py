""" Errors raised by the remapping operations. The CLI decides how to present them. """

from typing import Dict, Optional, Tuple


class RemapError(Exception):
    """Base class for every failure of a remapping operation."""
    pass


class DecodeError(RemapError):
    """Raised when a source path is missing, unreadable or not an image."""

    def __init__(self, path: str, reason: Optional[str] = None):
        self.path = path
        self.reason = reason
        message = f"'{path}' is not a readable image"
        super().__init__(f"{message}: {reason}" if reason else message)


class EncodeError(RemapError):
    """Raised when a generated image cannot be written."""

    def __init__(self, path: str, reason: Optional[str] = None):
        self.path = path
        self.reason = reason
        message = f"could not write '{path}'"
        super().__init__(f"{message}: {reason}" if reason else message)


class DimensionMismatchError(RemapError):
    """Raised when the join inputs do not share one width and height."""

    def __init__(self, sizes: Dict[str, Tuple[int, int]]):
        self.sizes = sizes
        listed = ", ".join(f"{role}: {width}x{height}" for role, (width, height) in sizes.items())
        super().__init__(f"Multi channels do not match in size ({listed}).")


class SelectionError(RemapError):
    pass


class InvalidCommand(RemapError):
    pass


class ConfigError(RemapError):
    pass
