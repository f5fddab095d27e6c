from __future__ import annotations


class WorkbenchError(Exception):
    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ValidationError(WorkbenchError):
    """Local, pre-network rejection of a form; ``field`` names the offending input."""

    def __init__(self, message: str, *, field: str | None = None) -> None:
        super().__init__(message)
        self.field = field


class RequestError(WorkbenchError):
    """A backend call failed.

    ``status_code`` is None when no response arrived at all (DNS, refused
    connection, timeout). ``backend_message`` carries the ``error`` field of
    the response body when the backend sent one.
    """

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        backend_message: str | None = None,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.backend_message = backend_message

    @property
    def is_network_error(self) -> bool:
        return self.status_code is None


class FetchError(RequestError):
    pass
