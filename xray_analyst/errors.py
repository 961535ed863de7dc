"""Error taxonomy. Every message is safe to show to an end user."""
from enum import Enum
from typing import Optional

from xray_analyst.constants import TRANSIENT_MARKERS, TRANSIENT_STATUS_CODES


class ErrorKind(Enum):
    TRANSIENT = "transient"
    PERMANENT = "permanent"


class AnalysisError(Exception):
    """Base class for every failure surfaced to the caller."""


class InvalidRequestError(AnalysisError):
    pass


class EncodingError(AnalysisError):
    pass


class FetchError(AnalysisError):
    def __init__(self, message: str, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class EmptyResponseError(AnalysisError):
    pass


class RemoteServiceError(AnalysisError):
    """Failure reported by the remote model, tagged once by the backend that saw it."""

    def __init__(
        self,
        message: str,
        kind: ErrorKind = ErrorKind.PERMANENT,
        status_code: Optional[int] = None,
    ) -> None:
        super().__init__(message)
        self.kind = kind
        self.status_code = status_code

    @property
    def transient(self) -> bool:
        return self.kind is ErrorKind.TRANSIENT


class TransientServiceError(RemoteServiceError):
    def __init__(self, message: str, status_code: Optional[int] = None) -> None:
        super().__init__(message, ErrorKind.TRANSIENT, status_code)


class PermanentError(RemoteServiceError):
    def __init__(self, message: str, status_code: Optional[int] = None) -> None:
        super().__init__(message, ErrorKind.PERMANENT, status_code)


class RetriesExhausted(AnalysisError):
    pass


class ConnectivityError(AnalysisError):
    pass


def classify_failure(status_code: Optional[int], message: str) -> ErrorKind:
    """Tag an upstream failure from its HTTP status; the text is consulted only without one."""
    match status_code:
        case int() as code if code in TRANSIENT_STATUS_CODES:
            return ErrorKind.TRANSIENT
        case int():
            return ErrorKind.PERMANENT
        case _:
            lowered = message.lower()
            return (
                ErrorKind.TRANSIENT
                if any(marker in lowered for marker in TRANSIENT_MARKERS)
                else ErrorKind.PERMANENT
            )


def remote_error(exc: Exception, status_code: Optional[int] = None) -> RemoteServiceError:
    """Wrap an SDK exception into a classified RemoteServiceError."""
    message = str(exc) or type(exc).__name__
    match classify_failure(status_code, message):
        case ErrorKind.TRANSIENT:
            return TransientServiceError(message, status_code)
        case _:
            return PermanentError(message, status_code)
