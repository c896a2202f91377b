from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class Action(str, Enum):
    AUTHORIZE = "authorize"
    CAPTURE = "capture"
    REFUND = "refund"
    VOID = "void"


class StandardErrorKind(str, Enum):
    INCORRECT_NUMBER = "incorrect_number"
    INVALID_NUMBER = "invalid_number"
    INVALID_EXPIRY_DATE = "invalid_expiry_date"
    INVALID_CVC = "invalid_cvc"
    EXPIRED_CARD = "expired_card"
    INCORRECT_CVC = "incorrect_cvc"
    INCORRECT_ZIP = "incorrect_zip"
    INCORRECT_ADDRESS = "incorrect_address"
    INCORRECT_PIN = "incorrect_pin"
    CARD_DECLINED = "card_declined"
    PROCESSING_ERROR = "processing_error"
    CALL_ISSUER = "call_issuer"
    PICKUP_CARD = "pickup_card"
    CONFIG_ERROR = "config_error"
    TEST_MODE_LIVE_CARD = "test_mode_live_card"
    UNSUPPORTED_FEATURE = "unsupported_feature"


class SurfacePolicy(str, Enum):
    LAST_STEP = "last_step"
    FIRST_STEP = "first_step"


@dataclass(frozen=True)
class Money:
    amount_minor: int
    currency: str

    def __post_init__(self) -> None:
        if self.amount_minor < 0:
            raise ValueError("amount_minor must not be negative")
        object.__setattr__(self, "currency", self.currency.upper())


@dataclass(frozen=True)
class GatewayRequest:
    action: Action
    fields: dict[str, Any] = field(default_factory=dict, hash=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "fields", dict(self.fields or {}))

    def to_payload(self) -> dict[str, Any]:
        return dict(self.fields)


@dataclass(frozen=True)
class RawResponse:
    status_code: int
    body: str

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 300


@dataclass(frozen=True)
class OperationResult:
    success: bool
    message: str = ""
    raw_data: dict[str, Any] = field(default_factory=dict, hash=False)
    authorization: str | None = None
    test_mode: bool = False
    standard_error_kind: StandardErrorKind | None = None
    action: Action | None = None

    def __post_init__(self) -> None:
        if self.success and self.standard_error_kind is not None:
            raise ValueError("standard_error_kind must be empty on a successful result")
        object.__setattr__(self, "raw_data", dict(self.raw_data or {}))


@dataclass(frozen=True)
class ComposedResult:
    """Outcome of a multi-step run.

    ``overall`` is the first failing step's result, or the last step's result
    when every step succeeded. ``primary`` is what the caller sees: ``overall``
    for purchase-style runs, the first step's result for verify-style runs.
    The result attributes (``success``, ``message`` ...) read from ``primary``
    so a composed result can be handled like a single operation result.
    """

    responses: tuple[OperationResult, ...]
    surface: SurfacePolicy = SurfacePolicy.LAST_STEP

    def __post_init__(self) -> None:
        if not self.responses:
            raise ValueError("a composed result needs at least one step result")
        object.__setattr__(self, "responses", tuple(self.responses))

    @property
    def overall(self) -> OperationResult:
        for response in self.responses:
            if not response.success:
                return response
        return self.responses[-1]

    @property
    def primary(self) -> OperationResult:
        if self.surface is SurfacePolicy.FIRST_STEP:
            return self.responses[0]
        return self.overall

    @property
    def authorization(self) -> str | None:
        for response in self.responses:
            if response.authorization is not None:
                return response.authorization
        return None

    @property
    def unsurfaced_failures(self) -> tuple[OperationResult, ...]:
        primary = self.primary
        return tuple(r for r in self.responses if not r.success and r is not primary)

    @property
    def success(self) -> bool:
        return self.primary.success

    @property
    def message(self) -> str:
        return self.primary.message

    @property
    def raw_data(self) -> dict[str, Any]:
        return self.primary.raw_data

    @property
    def test_mode(self) -> bool:
        return self.primary.test_mode

    @property
    def standard_error_kind(self) -> StandardErrorKind | None:
        return self.primary.standard_error_kind

    def with_response(self, response: OperationResult) -> "ComposedResult":
        return ComposedResult(responses=(*self.responses, response), surface=self.surface)


@dataclass(frozen=True)
class GatewayConfig:
    name: str
    test_url: str
    live_url: str
    username: str
    password: str
    merchant_account: str | None = None
    test_mode: bool = True
    timeout_seconds: float = 15.0
    verify_amount_minor: int = 100

    @property
    def endpoint_url(self) -> str:
        return (self.test_url if self.test_mode else self.live_url).rstrip("/")
