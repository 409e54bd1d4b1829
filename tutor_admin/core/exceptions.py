class ServiceError(Exception):
    """Base exception for console errors. `message` is safe to show to the admin."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class AuthError(ServiceError):
    """The admin code was rejected by the server."""


class FieldValidationError(ServiceError):
    """A form failed local validation; never reaches the server."""


class ServerError(ServiceError):
    """The server accepted the request but refused the operation."""


class NetworkError(ServiceError):
    """Transport failure or a response that is not a JSON object."""

    def __init__(self, message: str = "Connection error.") -> None:
        super().__init__(message)


class NavigationError(ServiceError):
    """Requested screen transition is not allowed from the current screen."""


class WorkflowStateError(ServiceError):
    """Operation not allowed in the workflow's current status."""
