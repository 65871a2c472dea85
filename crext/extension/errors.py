"""
Extension Errors.

Exception hierarchy shared by the extension store modules.
"""


class ExtensionError(Exception):
    """Base exception for extension-related errors."""

    pass


class UnsafePathError(ExtensionError, ValueError):
    """Raised when a path segment could escape the install root."""

    pass


class ManifestError(ExtensionError):
    """Raised when a manifest file cannot be read or parsed."""

    pass


class RemovalError(ExtensionError):
    """Raised when an extension cannot be flagged for removal."""

    pass
