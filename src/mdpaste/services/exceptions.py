"""Custom exceptions for mdpaste services."""


class MdPasteError(Exception):
    """Base class for errors raised by mdpaste."""


class EmptyInputError(MdPasteError):
    """Raised when the clipboard (or input file) holds no usable text."""

    def __init__(self, message: str = "Copy some markdown text first!"):
        self.message = message
        super().__init__(message)


class ClipboardUnavailableError(MdPasteError):
    """Raised when the system clipboard cannot be read.

    Attributes:
        message: Human-readable error message
    """

    def __init__(self, message: str = "Could not read clipboard."):
        self.message = message
        super().__init__(message)


class PageNotFoundError(MdPasteError):
    """Raised when a page requested as paste target doesn't exist.

    Attributes:
        page_name: Name of the missing page
    """

    def __init__(self, page_name: str):
        self.page_name = page_name
        super().__init__(f"Page not found: {page_name}")


class FileModifiedError(MdPasteError):
    """Raised when a page file is modified between loading and writing it.

    Writing anyway would overwrite the external edit, so the write is
    aborted instead.

    Attributes:
        path: Path to the file that was modified
        message: Human-readable error message
    """

    def __init__(self, path: str, message: str = "File was modified during write operation"):
        """Initialize FileModifiedError.

        Args:
            path: Path to the file that was modified
            message: Human-readable error message
        """
        self.path = path
        self.message = message
        super().__init__(f"{message}: {path}")
