from __future__ import annotations

import traceback
from typing import Any, ClassVar, Optional


class StructuredError(Exception):
    """
    Base class for errors that render to a machine-readable form.

    `types` is declared on every concrete class, most specific label first,
    and is reported verbatim by `to_structured_form()`.
    """

    types: ClassVar[tuple[str, ...]] = ("StructuredError", "Exception")

    def __init__(self, message: str, source: Any = None) -> None:
        super().__init__(message)
        self.message = message
        self.source = source
        self._backtrace: Optional[list[str]] = None

    @property
    def backtrace(self) -> list[str]:
        if self._backtrace is not None:
            return list(self._backtrace)
        if self.__traceback__ is None:
            return []
        return [
            f"{frame.filename}:{frame.lineno}:in {frame.name}"
            for frame in traceback.extract_tb(self.__traceback__)
        ]

    def set_backtrace(self, frames: list[str]) -> None:
        self._backtrace = list(frames)

    def to_structured_form(self) -> dict[str, Any]:
        return {
            "description": self.message,
            "error": {
                "types": list(self.types),
                "backtrace": self.backtrace,
                "error": self.source,
            },
        }


class HttpError(StructuredError):
    types: ClassVar[tuple[str, ...]] = ("HttpError", "StructuredError", "Exception")

    def __init__(
        self,
        message: str,
        endpoint: str,
        status: Optional[int] = None,
        reason: Optional[str] = None,
        source: Any = None,
    ) -> None:
        super().__init__(message, source=source)
        self.endpoint = endpoint
        self.status = status
        self.reason = reason


class ServiceBrokerApiUnreachable(HttpError):
    """Raised when the broker host cannot be resolved or connected to."""

    types = ("ServiceBrokerApiUnreachable", "HttpError", "StructuredError", "Exception")

    def __init__(self, endpoint: str, cause: Optional[BaseException] = None) -> None:
        super().__init__(f"The service broker API could not be reached: {endpoint}", endpoint)
        self.cause = cause


class ServiceBrokerApiTimeout(HttpError):
    """Raised when the broker accepted the connection but did not answer in time."""

    types = ("ServiceBrokerApiTimeout", "HttpError", "StructuredError", "Exception")

    def __init__(self, endpoint: str, cause: Optional[BaseException] = None) -> None:
        super().__init__(f"The service broker API timed out: {endpoint}", endpoint)
        self.cause = cause


class ServiceBrokerBadResponse(HttpError):
    """Raised for any unexpected status code the broker returns."""

    types = ("ServiceBrokerBadResponse", "HttpError", "StructuredError", "Exception")

    def __init__(self, endpoint: str, status: int, reason: str, source: Any = None) -> None:
        status_line = f"{status} {reason or ''}".strip()
        super().__init__(
            f"The service broker API returned an error from {endpoint}: {status_line}",
            endpoint,
            status=status,
            reason=reason,
            source={} if source is None else source,
        )


class ServiceBrokerConflict(ServiceBrokerBadResponse):
    """Raised when a provision request collides with an existing instance."""

    types = (
        "ServiceBrokerConflict",
        "ServiceBrokerBadResponse",
        "HttpError",
        "StructuredError",
        "Exception",
    )


class ServiceBrokerApiAuthenticationFailed(HttpError):
    """Raised when the broker rejects the client credentials."""

    types = ("ServiceBrokerApiAuthenticationFailed", "HttpError", "StructuredError", "Exception")

    def __init__(self, endpoint: str, status: int = 401, reason: str = "Unauthorized") -> None:
        super().__init__(
            "Authentication failed for the service broker API. "
            f"Double-check that the username and password are correct: {endpoint}",
            endpoint,
            status=status,
            reason=reason,
        )


class ServiceBrokerResponseMalformed(HttpError):
    """Raised when a successful response body cannot be understood."""

    types = ("ServiceBrokerResponseMalformed", "HttpError", "StructuredError", "Exception")

    def __init__(
        self,
        endpoint: str,
        status: Optional[int] = None,
        reason: Optional[str] = None,
        source: Any = None,
    ) -> None:
        super().__init__(
            f"The service broker response was not understood: {endpoint}",
            endpoint,
            status=status,
            reason=reason,
            source=source,
        )
