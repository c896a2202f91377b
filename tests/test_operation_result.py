from __future__ import annotations

import copy
import dataclasses
import pickle

import pytest

from core.gateways.types import (
    Action,
    ComposedResult,
    GatewayRequest,
    Money,
    OperationResult,
    StandardErrorKind,
    SurfacePolicy,
)


def test_successful_result_rejects_error_kind():
    with pytest.raises(ValueError):
        OperationResult(success=True, standard_error_kind=StandardErrorKind.CARD_DECLINED)


def test_result_is_immutable_and_copies_raw_data():
    raw = {"pspReference": "A1"}
    result = OperationResult(success=True, raw_data=raw, authorization="A1")
    raw["pspReference"] = "changed"

    assert result.raw_data["pspReference"] == "A1"
    with pytest.raises(dataclasses.FrozenInstanceError):
        result.success = False  # type: ignore[misc]


def test_failed_result_may_carry_authorization():
    result = OperationResult(
        success=False,
        message="Refused",
        authorization="8515",
        standard_error_kind=StandardErrorKind.INVALID_CVC,
    )

    assert result.authorization == "8515"
    assert result.standard_error_kind == StandardErrorKind.INVALID_CVC


def test_composed_result_overall_is_first_failure():
    approved = OperationResult(success=True, authorization="A1", action=Action.AUTHORIZE)
    declined = OperationResult(success=False, message="no", action=Action.CAPTURE)

    composed = ComposedResult(responses=(approved, declined))

    assert composed.overall is declined
    assert composed.primary is declined
    assert composed.success is False
    assert composed.message == "no"
    assert composed.authorization == "A1"


def test_composed_result_first_step_surface_reports_first_response():
    approved = OperationResult(success=True, message="Authorised", authorization="A2")
    void_failed = OperationResult(success=False, message="void failed")

    composed = ComposedResult(responses=(approved, void_failed), surface=SurfacePolicy.FIRST_STEP)

    assert composed.overall is void_failed
    assert composed.primary is approved
    assert composed.success is True
    assert composed.message == "Authorised"
    assert composed.unsurfaced_failures == (void_failed,)


def test_composed_result_requires_responses():
    with pytest.raises(ValueError):
        ComposedResult(responses=())


def test_money_normalizes_currency_and_rejects_negative_amounts():
    assert Money(amount_minor=1000, currency="eur").currency == "EUR"
    with pytest.raises(ValueError):
        Money(amount_minor=-1, currency="USD")


def test_gateway_request_payload_is_a_fresh_copy():
    request = GatewayRequest(action=Action.VOID, fields={"originalReference": "A1"})

    payload = request.to_payload()
    payload["originalReference"] = "other"

    assert request.fields["originalReference"] == "A1"


def test_results_can_be_copied_pickled_and_hashed():
    authorized = OperationResult(
        success=True,
        message="Authorised",
        raw_data={"pspReference": "A1", "additionalData": {"cvcResult": "1 Matches"}},
        authorization="A1",
        action=Action.AUTHORIZE,
    )
    composed = ComposedResult(responses=(authorized,), surface=SurfacePolicy.FIRST_STEP)

    copied = copy.deepcopy(authorized)
    assert copied == authorized
    assert copied.raw_data is not authorized.raw_data

    assert pickle.loads(pickle.dumps(authorized)) == authorized
    restored = pickle.loads(pickle.dumps(composed))
    assert restored == composed
    assert restored.authorization == "A1"

    same = OperationResult(
        success=True,
        message="Authorised",
        raw_data={"pspReference": "other"},
        authorization="A1",
        action=Action.AUTHORIZE,
    )
    assert hash(same) == hash(authorized)
    assert hash(composed) == hash(ComposedResult(responses=(authorized,), surface=SurfacePolicy.FIRST_STEP))
    assert len({authorized, copied}) == 1


def test_gateway_request_can_be_pickled_and_hashed():
    request = GatewayRequest(action=Action.CAPTURE, fields={"originalReference": "A1"})

    assert pickle.loads(pickle.dumps(request)) == request
    assert hash(request) == hash(GatewayRequest(action=Action.CAPTURE, fields={"originalReference": "A1"}))
