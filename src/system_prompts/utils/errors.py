"""
Custom exception hierarchy for the system prompt store.

Every error carries an HTTP status code so the API layer can map it without
inspecting message text.
"""


class SystemPromptError(Exception):
    """
    Base exception for all system prompt store errors.

    All application errors should inherit from this class.
    """

    status_code: int = 500

    def __init__(self, message: str, error_code: str | None = None) -> None:
        """
        Initialize a system prompt error.

        Args:
            message: Human-readable error message
            error_code: Optional error code for categorization
        """
        super().__init__(message)
        self.message = message
        self.error_code = error_code or self.__class__.__name__


class ConfigurationError(SystemPromptError):
    """
    Raised when there's an error in application configuration.

    Typically thrown during startup when settings are invalid.
    """


class DirectoryError(SystemPromptError):
    """Raised when the configuration directory cannot be created."""

    def __init__(self, path: str, reason: str) -> None:
        super().__init__(
            f"Failed to create config directory {path}: {reason}",
            error_code="DIRECTORY_ERROR",
        )
        self.path = path


class PromptFileError(SystemPromptError):
    """
    Raised when reading or writing a file fails.

    Wraps the underlying OSError, which is chained as __cause__.
    """

    def __init__(self, path: str, operation: str, reason: str) -> None:
        """
        Initialize a file error.

        Args:
            path: File that could not be accessed
            operation: "read" or "write"
            reason: Description of the underlying failure
        """
        super().__init__(f"Failed to {operation} {path}: {reason}", error_code="FILE_ERROR")
        self.path = path
        self.operation = operation


class DeserializeError(SystemPromptError):
    """Raised when the prompts collection file is malformed."""

    def __init__(self, path: str, reason: str) -> None:
        super().__init__(
            f"Malformed system prompts file {path}: {reason}",
            error_code="DESERIALIZE_ERROR",
        )
        self.path = path


class ValidationError(SystemPromptError):
    """
    Raised when a request violates a store rule.

    Indicates that provided data doesn't meet requirements.
    """

    status_code = 400


class DefaultPromptDeletionError(ValidationError):
    """Raised when deleting the prompt currently marked as default."""

    def __init__(self, prompt_id: str) -> None:
        super().__init__(
            "Cannot delete the default system prompt. Set another prompt as default first.",
            error_code="DEFAULT_PROMPT_DELETION",
        )
        self.prompt_id = prompt_id


class RequestSizeError(ValidationError):
    """Raised when request body exceeds size limit."""

    status_code = 413

    def __init__(self, actual_size: int, max_size: int) -> None:
        """
        Initialize a request size error.

        Args:
            actual_size: Actual size of request body in bytes
            max_size: Maximum allowed size in bytes
        """
        message = (
            f"Request body size ({actual_size} bytes) exceeds maximum allowed ({max_size} bytes)"
        )
        super().__init__(message, error_code="REQUEST_TOO_LARGE")
        self.actual_size = actual_size
        self.max_size = max_size


class NotFoundError(SystemPromptError):
    """Raised when a prompt required by an operation does not exist."""

    status_code = 404

    def __init__(self, identifier: str, message: str | None = None) -> None:
        super().__init__(
            message or f"System prompt with ID {identifier} not found",
            error_code="NOT_FOUND",
        )
        self.identifier = identifier
