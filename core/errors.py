from __future__ import annotations

from enum import Enum
from typing import Any


class ErrorCode(str, Enum):
    GATEWAY_TRANSPORT_ERROR = "GATEWAY_TRANSPORT_ERROR"
    GATEWAY_RESPONSE_MALFORMED = "GATEWAY_RESPONSE_MALFORMED"
    GATEWAY_NOT_CONFIGURED = "GATEWAY_NOT_CONFIGURED"
    VALIDATION_FAILED = "VALIDATION_FAILED"


class AppException(Exception):
    def __init__(
        self,
        *,
        code: ErrorCode,
        message: str,
        details: Any | None = None,
    ) -> None:
        self.code = code
        self.message = message
        self.details = details
        self.detail = {
            "message": message,
            "code": code.value,
            "details": details,
        }
        super().__init__(message)


class TransportError(AppException):
    """Connection failure, timeout or structurally malformed gateway response.

    Gateway declines are never raised; they come back as unsuccessful results.
    """


def transport_failure(endpoint: str, err: Exception) -> TransportError:
    return TransportError(
        code=ErrorCode.GATEWAY_TRANSPORT_ERROR,
        message=f"Gateway request to '{endpoint}' failed",
        details={"endpoint": endpoint, "error": str(err), "error_type": type(err).__name__},
    )


def malformed_response(reason: str, body: str | None = None) -> TransportError:
    details: dict[str, Any] = {"reason": reason}
    if body is not None:
        details["body_preview"] = body[:200]
    return TransportError(
        code=ErrorCode.GATEWAY_RESPONSE_MALFORMED,
        message="Gateway returned a malformed response body",
        details=details,
    )


def missing_required_options(action: str, missing: list[str]) -> AppException:
    return AppException(
        code=ErrorCode.VALIDATION_FAILED,
        message=f"Missing required options for {action}: {', '.join(missing)}",
        details={"action": action, "missing": missing},
    )


def gateway_not_configured(details: Any | None = None) -> AppException:
    return AppException(
        code=ErrorCode.GATEWAY_NOT_CONFIGURED,
        message="Payment gateways are not configured",
        details=details,
    )
