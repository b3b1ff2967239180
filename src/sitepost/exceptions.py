"""Centralized exceptions for sitepost."""


class SitePostError(Exception):
    """Base exception for all sitepost errors."""


class MalformedDocumentError(SitePostError):
    """Raised when a document does not follow the front matter grammar."""


class PostLoadError(SitePostError):
    """Raised when a post file cannot be turned into a post record."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to load post at '{path}': {reason}")


class UnreadableFrontMatterError(PostLoadError, MalformedDocumentError):
    """Raised when the front matter of a post file cannot be decoded."""

    def __init__(self, path: str) -> None:
        super().__init__(path, "unreadable front matter")


class MissingPostIdError(PostLoadError):
    """Raised when a decoded post carries no usable id."""

    def __init__(self, path: str) -> None:
        super().__init__(path, "missing id")


class PostNotFoundError(SitePostError):
    """Raised when no file in the content tree backs a post id."""

    def __init__(self, identifier: str) -> None:
        self.identifier = identifier
        super().__init__(f"Post with id '{identifier}' not found.")


class UnsupportedPostKindError(SitePostError):
    """Raised when an operation is not available for a kind of item."""

    def __init__(self, kind: str, operation: str) -> None:
        self.kind = kind
        self.operation = operation
        super().__init__(f"Operation '{operation}' is not supported for {kind} items")


class ConfigLoadError(SitePostError):
    """Raised when a site configuration file cannot be loaded or parsed."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to load or parse config at '{path}': {reason}")


class DateTimeError(SitePostError):
    """Base exception for datetime parsing errors."""


class InvalidDateTimeInputError(DateTimeError):
    """Raised when the input to a datetime function is invalid."""

    def __init__(self, value: str, reason: str) -> None:
        self.value = value
        self.reason = reason
        super().__init__(f"Invalid datetime input '{value}': {reason}")


class DateTimeParsingError(DateTimeError):
    """Raised when a string cannot be parsed into a datetime."""

    def __init__(self, value: str, original_exception: Exception) -> None:
        self.value = value
        self.original_exception = original_exception
        super().__init__(f"Failed to parse datetime from '{value}': {original_exception}")


class MissingPublishDateError(SitePostError):
    """Raised when a file path is needed for a post that has no publish date."""

    def __init__(self, identifier: str) -> None:
        self.identifier = identifier
        super().__init__(f"Post '{identifier}' has no publish date; call ensure_date_published() first.")
