"""Application exception hierarchy.

Each error carries the HTTP status the API layer reports for it, so routes can
translate service failures without re-classifying them.
"""


class AppError(Exception):
    """Base exception for application errors."""

    status_code: int = 500
    title: str = "Internal Server Error"

    def __init__(self, message: str, original_error: Exception = None):
        super().__init__(message)
        self.message = message
        self.original_error = original_error


class APIClientError(AppError):
    """Raised when an external API call fails."""

    status_code = 502
    title = "Upstream Service Error"


class APITimeoutError(APIClientError):
    """Raised when an external API call times out."""

    status_code = 504
    title = "Upstream Service Timeout"


class ValidationError(AppError):
    """Raised when input validation fails."""

    status_code = 400
    title = "Invalid Request"


class ConfigurationError(AppError):
    """Raised when configuration is invalid or missing."""

    title = "Configuration Error"


class DocumentAnalysisError(AppError):
    """Raised when the document analyzer cannot produce a result."""

    status_code = 502
    title = "Document Analysis Failed"
