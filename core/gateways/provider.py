from __future__ import annotations

from typing import Any, ContextManager, Protocol

from core.gateways.types import Action, GatewayRequest, Money, RawResponse
from schemas.operation_options import OperationOptions


class Transport(Protocol):
    def dispatch(self, endpoint: str, payload: dict[str, Any]) -> ContextManager[RawResponse]:
        ...


class ResponseParser(Protocol):
    def parse(self, body: str) -> dict[str, Any]:
        ...


class FieldMapper(Protocol):
    def build(
        self,
        action: Action,
        *,
        money: Money | None,
        instrument: Any | None,
        authorization: str | None,
        options: OperationOptions,
    ) -> GatewayRequest:
        ...
