from __future__ import annotations

from typing import Any, Mapping

from pydantic import ValidationError

from core.errors import AppException, ErrorCode, gateway_not_configured
from core.gateways import ComposedResult, GatewayManager, Money, OperationResult, PaymentGateway
from core.validation_errors import format_validation_error_details
from schemas.operation_options import OperationOptions


def _get_gateway(gateway: str | None) -> PaymentGateway:
    try:
        manager = GatewayManager.get_instance()
    except RuntimeError as err:
        raise gateway_not_configured(str(err)) from err
    return manager.get_gateway(gateway)


def parse_options(options: Mapping[str, Any] | OperationOptions | None) -> OperationOptions:
    if isinstance(options, OperationOptions):
        return options
    try:
        return OperationOptions.model_validate(dict(options or {}))
    except ValidationError as err:
        raise AppException(
            code=ErrorCode.VALIDATION_FAILED,
            message="Invalid operation options",
            details=format_validation_error_details(err.errors()),
        ) from err


def authorize(
    *,
    money: Money,
    instrument: Any,
    options: Mapping[str, Any] | OperationOptions | None = None,
    gateway: str | None = None,
) -> OperationResult:
    return _get_gateway(gateway).authorize(money, instrument, parse_options(options))


def capture(
    *,
    money: Money,
    authorization: str,
    options: Mapping[str, Any] | OperationOptions | None = None,
    gateway: str | None = None,
) -> OperationResult:
    return _get_gateway(gateway).capture(money, authorization, parse_options(options))


def refund(
    *,
    money: Money | None,
    authorization: str,
    options: Mapping[str, Any] | OperationOptions | None = None,
    gateway: str | None = None,
) -> OperationResult:
    return _get_gateway(gateway).refund(money, authorization, parse_options(options))


def void(
    *,
    authorization: str,
    options: Mapping[str, Any] | OperationOptions | None = None,
    gateway: str | None = None,
) -> OperationResult:
    return _get_gateway(gateway).void(authorization, parse_options(options))


def purchase(
    *,
    money: Money,
    instrument: Any,
    options: Mapping[str, Any] | OperationOptions | None = None,
    gateway: str | None = None,
) -> ComposedResult:
    return _get_gateway(gateway).purchase(money, instrument, parse_options(options))


def verify(
    *,
    instrument: Any,
    options: Mapping[str, Any] | OperationOptions | None = None,
    gateway: str | None = None,
) -> ComposedResult:
    return _get_gateway(gateway).verify(instrument, parse_options(options))
