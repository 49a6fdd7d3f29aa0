"""
Exceptions shared by services and API routes.
"""


class ChaptgenError(Exception):
    """Base class for application errors."""
    pass


class InvalidRequestError(ChaptgenError):
    """Raised when a caller supplies a missing or malformed argument."""
    pass


class ConfigurationError(ChaptgenError):
    """Raised when configuration is invalid or a required key is missing."""
    pass


class UpstreamServiceError(ChaptgenError):
    """Raised when the transcript provider or the model endpoint fails."""

    def __init__(self, service: str, message: str, status_code: int = 0):
        super().__init__(f"{service} error: {message}")
        self.service = service
        self.status_code = status_code


class DuplicateGenerationError(ChaptgenError):
    """Raised when a user already saved chapters for the same URL."""

    def __init__(self, user_id: int, url: str):
        super().__init__(f"Generation for {url} already exists for user {user_id}")
        self.user_id = user_id
        self.url = url


class DuplicateEmailError(ChaptgenError):
    """Raised when signing up with an email that is already registered."""
    pass
