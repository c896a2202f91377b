from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache

from dotenv import load_dotenv

load_dotenv()

SUPPORTED_GATEWAYS = {"adyen"}
SUPPORTED_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}

ADYEN_TEST_URL_TEMPLATE = "https://pal-test.adyen.com/pal/servlet/Payment/v{version}"
ADYEN_LIVE_URL_TEMPLATE = "https://pal-live.adyen.com/pal/servlet/Payment/v{version}"


def _env(name: str) -> str | None:
    raw_value = os.getenv(name)
    if raw_value is None:
        return None
    normalized = raw_value.strip()
    return normalized or None


def _flag(name: str, default: str) -> bool:
    return (_env(name) or default).lower() in {"1", "true", "yes"}


def _collect_positive_int(name: str, invalid_values: list[str]) -> None:
    value = _env(name)
    if value is None:
        return
    try:
        if int(value) <= 0:
            raise ValueError("must be positive")
    except ValueError:
        invalid_values.append(f"{name} must be a positive integer")


def collect_missing_required_env_vars() -> list[str]:
    missing: list[str] = []

    default_gateway = (_env("GATEWAY_DEFAULT") or "adyen").lower()
    if default_gateway == "adyen":
        for var_name in ("ADYEN_USERNAME", "ADYEN_PASSWORD", "ADYEN_MERCHANT_ACCOUNT"):
            if _env(var_name) is None:
                missing.append(var_name)

    return sorted(set(missing))


def collect_invalid_env_values() -> list[str]:
    invalid_values: list[str] = []

    default_gateway = (_env("GATEWAY_DEFAULT") or "adyen").lower()
    if default_gateway not in SUPPORTED_GATEWAYS:
        invalid_values.append("GATEWAY_DEFAULT must be one of: adyen")

    timeout = _env("GATEWAY_TIMEOUT_SECONDS")
    if timeout is not None:
        try:
            if float(timeout) <= 0:
                raise ValueError("must be positive")
        except ValueError:
            invalid_values.append("GATEWAY_TIMEOUT_SECONDS must be a positive number")

    _collect_positive_int("ADYEN_API_VERSION", invalid_values)
    _collect_positive_int("VERIFY_AMOUNT_MINOR", invalid_values)

    log_level = (_env("LOG_LEVEL") or "INFO").upper()
    if log_level not in SUPPORTED_LOG_LEVELS:
        invalid_values.append("LOG_LEVEL must be one of: CRITICAL, DEBUG, ERROR, INFO, WARNING")

    return invalid_values


def validate_required_environment() -> None:
    missing_vars = collect_missing_required_env_vars()
    invalid_values = collect_invalid_env_values()
    if not missing_vars and not invalid_values:
        return

    message_lines = ["Gateway configuration blocked by invalid environment."]
    if missing_vars:
        message_lines.append("")
        message_lines.append("Missing required environment variables:")
        message_lines.extend(f"- {name}" for name in missing_vars)
    if invalid_values:
        message_lines.append("")
        message_lines.append("Invalid environment values:")
        message_lines.extend(f"- {message}" for message in invalid_values)
    raise RuntimeError("\n".join(message_lines))


@dataclass(frozen=True)
class Settings:
    env: str
    gateway_default: str
    gateway_test_mode: bool
    gateway_timeout_seconds: float
    adyen_username: str | None
    adyen_password: str | None
    adyen_merchant_account: str | None
    adyen_api_version: int
    adyen_test_url: str
    adyen_live_url: str
    verify_amount_minor: int
    log_level: str
    log_json: bool

    @property
    def is_production(self) -> bool:
        return self.env.lower() == "production"


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    validate_required_environment()

    env = os.getenv("ENV", "development")
    api_version = int(_env("ADYEN_API_VERSION") or "18")

    settings = Settings(
        env=env,
        gateway_default=(_env("GATEWAY_DEFAULT") or "adyen").lower(),
        gateway_test_mode=_flag("GATEWAY_TEST_MODE", "true"),
        gateway_timeout_seconds=float(_env("GATEWAY_TIMEOUT_SECONDS") or "15"),
        adyen_username=_env("ADYEN_USERNAME"),
        adyen_password=_env("ADYEN_PASSWORD"),
        adyen_merchant_account=_env("ADYEN_MERCHANT_ACCOUNT"),
        adyen_api_version=api_version,
        adyen_test_url=_env("ADYEN_TEST_URL") or ADYEN_TEST_URL_TEMPLATE.format(version=api_version),
        adyen_live_url=_env("ADYEN_LIVE_URL") or ADYEN_LIVE_URL_TEMPLATE.format(version=api_version),
        verify_amount_minor=int(_env("VERIFY_AMOUNT_MINOR") or "100"),
        log_level=(_env("LOG_LEVEL") or "INFO").upper(),
        log_json=_flag("LOG_JSON", "true"),
    )

    if settings.is_production and settings.gateway_test_mode:
        raise RuntimeError("GATEWAY_TEST_MODE must be disabled when ENV=production")

    return settings
