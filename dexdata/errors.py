"""Error taxonomy shared by the compiler and the runtime store."""

from __future__ import annotations


class DexDataError(ValueError):
    """Base class for every data error raised by the dex packages."""


class MalformedLocator(DexDataError):
    """Raised when a cross-reference URL carries no usable numeric identifier."""

    def __init__(self, locator: str) -> None:
        super().__init__(f"No trailing numeric identifier in locator {locator!r}.")
        self.locator = locator


class UnknownEnumValue(DexDataError):
    """Raised by strict parsers when a name is outside a closed enumeration."""

    def __init__(self, *, domain: str, value: object) -> None:
        """Initialize the error.

        Args:
            domain: Enumeration name (e.g. "element type").
            value: The rejected raw value.
        """

        super().__init__(f"Unknown {domain}: {value!r}.")
        self.domain = domain
        self.value = value


class MissingSourceFile(DexDataError):
    """Raised when a required snapshot document does not exist."""

    def __init__(self, path: object) -> None:
        super().__init__(f"Snapshot document not found: {path}.")
        self.path = path


class MalformedSourceDocument(DexDataError):
    """Raised when a snapshot document is not valid JSON or lacks a required field."""

    def __init__(self, path: object, detail: str) -> None:
        super().__init__(f"Malformed snapshot document {path}: {detail}")
        self.path = path
        self.detail = detail


class OverlayOrderError(DexDataError):
    """Raised when historical overlays are not strictly ascending within the era range."""


class TableFormatError(DexDataError):
    """Raised when a compiled table cannot be loaded."""
