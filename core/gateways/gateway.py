from __future__ import annotations

from typing import Any

from core.errors import missing_required_options
from core.gateways.executor import OperationExecutor
from core.gateways.orchestrator import Orchestrator
from core.gateways.provider import FieldMapper
from core.gateways.types import (
    Action,
    ComposedResult,
    GatewayConfig,
    Money,
    OperationResult,
    SurfacePolicy,
)
from schemas.operation_options import OperationOptions


class PaymentGateway:
    """Uniform payment operations on top of one configured gateway.

    ``authorize``, ``capture``, ``refund`` and ``void`` are single gateway
    calls. ``purchase`` is authorize followed by capture of the same amount
    and reports the capture. ``verify`` is a small authorization followed by a
    void of it and reports the authorization; a failed void is kept in
    ``unsurfaced_failures`` instead of changing the outcome.

    A purchase whose capture fails or times out leaves the authorization in
    place. Voiding it is up to the caller.
    """

    def __init__(
        self,
        *,
        config: GatewayConfig,
        executor: OperationExecutor,
        field_mapper: FieldMapper,
    ) -> None:
        self._config = config
        self._executor = executor
        self._field_mapper = field_mapper

    @property
    def name(self) -> str:
        return self._config.name

    @property
    def config(self) -> GatewayConfig:
        return self._config

    def _prepare_options(self, action: Action, options: OperationOptions | None) -> OperationOptions:
        options = options or OperationOptions()
        if options.merchant_account is None and self._config.merchant_account:
            options = options.model_copy(update={"merchant_account": self._config.merchant_account})

        required = self._executor.profile.required_options.get(action, ())
        missing = [name for name in required if not options.is_set(name)]
        if missing:
            raise missing_required_options(action.value, missing)
        return options

    def _execute(
        self,
        action: Action,
        *,
        options: OperationOptions | None,
        money: Money | None = None,
        instrument: Any | None = None,
        authorization: str | None = None,
    ) -> OperationResult:
        prepared = self._prepare_options(action, options)
        request = self._field_mapper.build(
            action,
            money=money,
            instrument=instrument,
            authorization=authorization,
            options=prepared,
        )
        return self._executor.execute(action, request)

    def authorize(self, money: Money, instrument: Any, options: OperationOptions | None = None) -> OperationResult:
        return self._execute(Action.AUTHORIZE, options=options, money=money, instrument=instrument)

    def capture(self, money: Money, authorization: str | None, options: OperationOptions | None = None) -> OperationResult:
        return self._execute(Action.CAPTURE, options=options, money=money, authorization=authorization)

    def refund(self, money: Money | None, authorization: str, options: OperationOptions | None = None) -> OperationResult:
        return self._execute(Action.REFUND, options=options, money=money, authorization=authorization)

    def void(self, authorization: str | None, options: OperationOptions | None = None) -> OperationResult:
        return self._execute(Action.VOID, options=options, authorization=authorization)

    def purchase(self, money: Money, instrument: Any, options: OperationOptions | None = None) -> ComposedResult:
        orchestrator = Orchestrator(operation="purchase", surface=SurfacePolicy.LAST_STEP)
        return orchestrator.run(
            [
                lambda _: self.authorize(money, instrument, options),
                lambda running: self.capture(money, running.authorization, options),
            ]
        )

    def verify(self, instrument: Any, options: OperationOptions | None = None) -> ComposedResult:
        currency = (options.currency if options else None) or self._executor.profile.default_currency
        probe = Money(amount_minor=self._config.verify_amount_minor, currency=currency)
        orchestrator = Orchestrator(operation="verify", surface=SurfacePolicy.FIRST_STEP)
        return orchestrator.run(
            [
                lambda _: self.authorize(probe, instrument, options),
                lambda running: self.void(running.authorization, options),
            ]
        )
