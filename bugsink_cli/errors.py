"""Custom exception classes for BugSink CLI."""


class BugsinkError(Exception):
    """Base exception for all BugSink CLI errors."""

    def __init__(self, message, suggestion=None, **kwargs):
        super().__init__(message)
        self.message = message
        self.suggestion = suggestion
        self.metadata = kwargs

    def to_dict(self):
        """Convert error to dictionary for JSON output."""
        result = {
            'error': self.__class__.__name__,
            'message': self.message
        }
        if self.suggestion:
            result['suggestion'] = self.suggestion
        result.update(self.metadata)
        return result


class ConfigError(BugsinkError):
    """Required configuration (the API key) is missing."""

    def __init__(self, message='BUGSINK_API_KEY environment variable is required'):
        super().__init__(
            message=message,
            suggestion='export BUGSINK_API_KEY="your-token-here"'
        )


class ClientError(BugsinkError):
    """Non-2xx response, transport failure, or a request rejected locally.

    Attributes:
        code: HTTP status code, or None when no response was received
        response: Raw response body text, if any
    """

    default_suggestion = None

    def __init__(self, message, code=None, response=None, suggestion=None):
        super().__init__(
            message=message,
            suggestion=suggestion or self.default_suggestion,
        )
        self.code = code
        self.response = response

    def to_dict(self):
        result = super().to_dict()
        if self.code is not None:
            result['code'] = self.code
        return result


class AuthenticationError(ClientError):
    """Authentication failed (401)."""

    default_suggestion = "Check that BUGSINK_API_KEY holds a valid API token."


class AuthorizationError(ClientError):
    """Authorization failed (403)."""

    default_suggestion = "The token is valid but lacks access to this resource."


class NotFoundError(ClientError):
    """Resource not found (404)."""

    default_suggestion = "Check the ID and try again. Use the 'list' action to see valid IDs."


class RateLimitError(ClientError):
    """Rate limit exceeded (429)."""

    default_suggestion = "Wait before retrying."


class ValidationError(ClientError, ValueError):
    """Invalid caller input, detected before any request is sent."""

    def __init__(self, message='Invalid request', field=None):
        super().__init__(message=message)
        if field:
            self.metadata['field'] = field
