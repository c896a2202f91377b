from __future__ import annotations

import json
from contextlib import contextmanager
from typing import Any, Iterator

import requests

from core.errors import malformed_response, transport_failure
from core.gateways.types import GatewayConfig, RawResponse
from core.logging import get_logger

logger = get_logger(__name__)


class HttpTransport:
    """JSON-over-HTTPS transport with basic auth, one POST per action."""

    def __init__(self, config: GatewayConfig, session: requests.Session | None = None) -> None:
        self._config = config
        self._session = session or requests.Session()
        self._auth = (config.username, config.password)

    def _headers(self) -> dict[str, str]:
        return {
            "Content-Type": "application/json",
            "Accept": "application/json",
        }

    def _url(self, endpoint: str) -> str:
        return f"{self._config.endpoint_url}/{endpoint}"

    @contextmanager
    def dispatch(self, endpoint: str, payload: dict[str, Any]) -> Iterator[RawResponse]:
        url = self._url(endpoint)
        try:
            response = self._session.post(
                url,
                data=json.dumps(payload),
                headers=self._headers(),
                auth=self._auth,
                timeout=self._config.timeout_seconds,
            )
        except requests.RequestException as err:
            logger.error(
                "gateway_transport_failed",
                gateway=self._config.name,
                endpoint=endpoint,
                error_type=type(err).__name__,
            )
            raise transport_failure(endpoint, err) from err

        try:
            yield RawResponse(status_code=response.status_code, body=response.text or "")
        finally:
            response.close()

    def close(self) -> None:
        self._session.close()


class JsonResponseParser:
    def parse(self, body: str) -> dict[str, Any]:
        if not body or not body.strip():
            return {}
        try:
            parsed = json.loads(body)
        except json.JSONDecodeError as err:
            raise malformed_response(f"invalid JSON: {err.msg}", body) from err
        if not isinstance(parsed, dict):
            raise malformed_response(f"expected a JSON object, got {type(parsed).__name__}", body)
        return parsed
