from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping

from core.gateways.classifier import ErrorClassifier
from core.gateways.types import Action, StandardErrorKind


@dataclass(frozen=True)
class SuccessRule:
    key: str
    accepted: frozenset[str]

    def matches(self, response: Mapping[str, Any]) -> bool:
        value = response.get(self.key)
        return value is not None and str(value) in self.accepted


@dataclass(frozen=True)
class GatewayProfile:
    """Static description of how one gateway names and reports its actions."""

    name: str
    endpoints: Mapping[Action, str]
    success_rules: Mapping[Action, SuccessRule]
    message_keys: Mapping[Action, tuple[str, ...]]
    authorization_key: str
    error_code_key: str
    classifier: ErrorClassifier
    required_options: Mapping[Action, tuple[str, ...]] = field(default_factory=dict)
    default_currency: str = "USD"

    def endpoint_for(self, action: Action) -> str:
        try:
            return self.endpoints[action]
        except KeyError as err:
            raise ValueError(f"Gateway '{self.name}' does not support action '{action.value}'") from err

    def is_success(self, action: Action, response: Mapping[str, Any]) -> bool:
        rule = self.success_rules.get(action)
        if rule is None:
            return False
        return rule.matches(response)

    def message_from(self, action: Action, response: Mapping[str, Any]) -> str:
        for key in self.message_keys.get(action, ()):
            value = response.get(key)
            if value not in (None, ""):
                return str(value)
        return ""

    def authorization_from(self, response: Mapping[str, Any]) -> str | None:
        value = response.get(self.authorization_key)
        if value in (None, ""):
            return None
        return str(value)

    def error_kind_from(self, response: Mapping[str, Any]) -> StandardErrorKind | None:
        return self.classifier.classify(response.get(self.error_code_key))


def _modification_received(endpoint: str) -> SuccessRule:
    return SuccessRule(key="response", accepted=frozenset({f"[{endpoint}-received]"}))


ADYEN_ERROR_CODES: dict[str, StandardErrorKind] = {
    "101": StandardErrorKind.INCORRECT_NUMBER,
    "103": StandardErrorKind.INVALID_CVC,
    "131": StandardErrorKind.INCORRECT_ADDRESS,
    "132": StandardErrorKind.INCORRECT_ADDRESS,
    "133": StandardErrorKind.INCORRECT_ADDRESS,
    "134": StandardErrorKind.INCORRECT_ADDRESS,
    "135": StandardErrorKind.INCORRECT_ADDRESS,
}

ADYEN_PROFILE = GatewayProfile(
    name="adyen",
    endpoints={
        Action.AUTHORIZE: "authorise",
        Action.CAPTURE: "capture",
        Action.REFUND: "refund",
        Action.VOID: "cancel",
    },
    success_rules={
        Action.AUTHORIZE: SuccessRule(
            key="resultCode",
            accepted=frozenset({"Authorised", "Received", "RedirectShopper"}),
        ),
        Action.CAPTURE: _modification_received("capture"),
        Action.REFUND: _modification_received("refund"),
        Action.VOID: _modification_received("cancel"),
    },
    message_keys={
        Action.AUTHORIZE: ("refusalReason", "resultCode", "message"),
        Action.CAPTURE: ("response", "message"),
        Action.REFUND: ("response", "message"),
        Action.VOID: ("response", "message"),
    },
    authorization_key="pspReference",
    error_code_key="errorCode",
    classifier=ErrorClassifier(ADYEN_ERROR_CODES),
    required_options={Action.AUTHORIZE: ("reference",)},
)

PROFILES: dict[str, GatewayProfile] = {ADYEN_PROFILE.name: ADYEN_PROFILE}
