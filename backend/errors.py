"""
Error taxonomy for the Obsidian Labs API

Every error that can reach an HTTP caller derives from LabelApiError and
knows the status code it is surfaced with.
"""


class LabelApiError(Exception):
    """Base class for errors surfaced to API callers"""
    status_code = 500

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class ConfigurationError(LabelApiError):
    """Raised when a required setting is missing"""
    status_code = 400


class UpstreamAuthError(LabelApiError):
    """Raised when the Spotify token exchange does not succeed"""


class UpstreamFetchError(LabelApiError):
    """Raised when a Spotify playlist page request does not succeed"""


class ValidationError(LabelApiError):
    """Raised when a form submission is missing a required field"""
    status_code = 400

    def __init__(self, message: str, field: str = None):
        self.field = field
        super().__init__(message)


class NotificationDeliveryError(LabelApiError):
    """Raised when a message could not be forwarded to the webhook"""
