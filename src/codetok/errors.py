"""Custom exception hierarchy for codetok tokenization errors."""


class CodeTokError(Exception):
    """Base exception for all codetok errors."""


class LoadError(CodeTokError):
    """Raised when fetching or parsing a tokenizer artifact fails."""

    def __init__(
        self,
        message: str,
        *,
        source: str | None = None,
        field: str | None = None,
    ) -> None:
        """Initialize with optional source and field that get appended to the message."""
        extra = " "
        if source:
            extra += f"(source: {source}) "
        # structural errors: name the offending artifact field
        if field:
            extra += f"(field: {field}) "
        super().__init__(message + extra.rstrip())
        self.source = source
        self.field = field


class NotLoadedError(CodeTokError):
    """Raised when encoding or decoding before a tokenizer artifact is loaded."""


class TokenizationError(CodeTokError):
    """Raised when tokenization fails."""

    def __init__(self, message: str, *, position: int | None = None) -> None:
        if position is not None:
            message = f"{message} (position: {position})"
        super().__init__(message)
        self.position = position
