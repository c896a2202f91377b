from __future__ import annotations

from threading import Lock
from typing import Mapping

from core.gateways.executor import OperationExecutor
from core.gateways.gateway import PaymentGateway
from core.gateways.http_transport import HttpTransport, JsonResponseParser
from core.gateways.profiles import PROFILES
from core.gateways.provider import FieldMapper
from core.gateways.types import GatewayConfig
from core.logging import configure_logging
from core.settings import Settings, get_settings


def _adyen_config(settings: Settings) -> GatewayConfig | None:
    if not (settings.adyen_username and settings.adyen_password):
        return None
    return GatewayConfig(
        name="adyen",
        test_url=settings.adyen_test_url,
        live_url=settings.adyen_live_url,
        username=settings.adyen_username,
        password=settings.adyen_password,
        merchant_account=settings.adyen_merchant_account,
        test_mode=settings.gateway_test_mode,
        timeout_seconds=settings.gateway_timeout_seconds,
        verify_amount_minor=settings.verify_amount_minor,
    )


def build_gateway(config: GatewayConfig, field_mapper: FieldMapper) -> PaymentGateway:
    profile = PROFILES.get(config.name)
    if profile is None:
        raise ValueError(f"No gateway profile registered for '{config.name}'")
    executor = OperationExecutor(
        profile=profile,
        transport=HttpTransport(config),
        parser=JsonResponseParser(),
        test_mode=config.test_mode,
    )
    return PaymentGateway(config=config, executor=executor, field_mapper=field_mapper)


class GatewayManager:
    _instance: "GatewayManager | None" = None
    _lock = Lock()

    def __init__(self, gateways: dict[str, PaymentGateway], default_gateway: str) -> None:
        self._gateways = {name.lower(): gateway for name, gateway in gateways.items()}
        self._default_gateway = default_gateway.lower()

    @classmethod
    def configure(cls, gateways: dict[str, PaymentGateway], default_gateway: str) -> "GatewayManager":
        with cls._lock:
            cls._instance = cls(gateways=gateways, default_gateway=default_gateway)
            return cls._instance

    @classmethod
    def configure_from_settings(cls, field_mappers: Mapping[str, FieldMapper]) -> "GatewayManager":
        settings = get_settings()
        configure_logging(settings.log_level, settings.log_json)
        gateways: dict[str, PaymentGateway] = {}

        adyen_config = _adyen_config(settings)
        if adyen_config is not None and "adyen" in field_mappers:
            gateways["adyen"] = build_gateway(adyen_config, field_mappers["adyen"])

        if not gateways:
            raise RuntimeError(
                "At least one payment gateway must be configured. "
                "Set ADYEN_USERNAME, ADYEN_PASSWORD and provide a field mapper for it."
            )

        default_gateway = settings.gateway_default
        if default_gateway not in gateways:
            default_gateway = next(iter(gateways.keys()))

        return cls.configure(gateways=gateways, default_gateway=default_gateway)

    @classmethod
    def get_instance(cls) -> "GatewayManager":
        if cls._instance is None:
            raise RuntimeError("GatewayManager is not configured")
        return cls._instance

    @classmethod
    def reset(cls) -> None:
        with cls._lock:
            cls._instance = None

    @property
    def default_gateway(self) -> str:
        return self._default_gateway

    def get_gateway(self, gateway: str | None = None) -> PaymentGateway:
        key = (gateway or self._default_gateway).lower()
        if key not in self._gateways:
            raise ValueError(f"Unsupported payment gateway '{key}'")
        return self._gateways[key]
