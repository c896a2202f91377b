from __future__ import annotations

from core.gateways.profiles import GatewayProfile
from core.gateways.provider import ResponseParser, Transport
from core.gateways.types import Action, GatewayRequest, OperationResult
from core.logging import get_logger

logger = get_logger(__name__)


class OperationExecutor:
    """Runs one gateway call and normalizes the reply into an ``OperationResult``.

    Only ``TransportError`` escapes from ``execute``. A gateway that answers
    with an error status but a structured body is normalized from that body,
    because the body carries the decline reason.
    """

    def __init__(
        self,
        *,
        profile: GatewayProfile,
        transport: Transport,
        parser: ResponseParser,
        test_mode: bool,
    ) -> None:
        self._profile = profile
        self._transport = transport
        self._parser = parser
        self._test_mode = test_mode

    @property
    def profile(self) -> GatewayProfile:
        return self._profile

    def execute(self, action: Action, request: GatewayRequest) -> OperationResult:
        if request.action is not action:
            raise ValueError(f"Request built for '{request.action.value}' cannot run as '{action.value}'")

        endpoint = self._profile.endpoint_for(action)
        logger.info("gateway_request_dispatched", gateway=self._profile.name, action=action.value)

        with self._transport.dispatch(endpoint, request.to_payload()) as raw:
            if not raw.ok:
                logger.warning(
                    "gateway_response_non_2xx",
                    gateway=self._profile.name,
                    action=action.value,
                    status_code=raw.status_code,
                )
            response = self._parser.parse(raw.body)

        success = self._profile.is_success(action, response)
        result = OperationResult(
            success=success,
            message=self._profile.message_from(action, response),
            raw_data=response,
            authorization=self._profile.authorization_from(response),
            test_mode=self._test_mode,
            standard_error_kind=None if success else self._profile.error_kind_from(response),
            action=action,
        )
        logger.info(
            "gateway_response_normalized",
            gateway=self._profile.name,
            action=action.value,
            success=result.success,
            error_kind=result.standard_error_kind.value if result.standard_error_kind else None,
        )
        return result
