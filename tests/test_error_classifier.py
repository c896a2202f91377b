from __future__ import annotations

from core.gateways.classifier import ErrorClassifier
from core.gateways.profiles import ADYEN_PROFILE
from core.gateways.types import StandardErrorKind


def test_classify_maps_known_adyen_codes():
    classifier = ADYEN_PROFILE.classifier

    assert classifier.classify("101") == StandardErrorKind.INCORRECT_NUMBER
    assert classifier.classify("103") == StandardErrorKind.INVALID_CVC
    for code in ("131", "132", "133", "134", "135"):
        assert classifier.classify(code) == StandardErrorKind.INCORRECT_ADDRESS


def test_classify_returns_none_for_unknown_or_missing_code():
    classifier = ADYEN_PROFILE.classifier

    assert classifier.classify("999") is None
    assert classifier.classify(None) is None
    assert classifier.classify("") is None


def test_classify_is_repeatable_for_the_same_code():
    classifier = ErrorClassifier({"05": StandardErrorKind.CARD_DECLINED})

    first = classifier.classify("05")
    second = classifier.classify("05")
    assert first == second == StandardErrorKind.CARD_DECLINED
    assert classifier.classify("06") is None
    assert classifier.classify("06") is None


def test_classify_treats_numeric_and_string_codes_alike():
    classifier = ErrorClassifier({101: StandardErrorKind.INCORRECT_NUMBER})

    assert classifier.classify(101) == StandardErrorKind.INCORRECT_NUMBER
    assert classifier.classify("101") == StandardErrorKind.INCORRECT_NUMBER
    assert classifier.classify(" 101 ") == StandardErrorKind.INCORRECT_NUMBER


def test_classifier_table_is_read_only():
    classifier = ErrorClassifier({"101": StandardErrorKind.INCORRECT_NUMBER})

    try:
        classifier.table["102"] = StandardErrorKind.INVALID_NUMBER  # type: ignore[index]
    except TypeError:
        pass
    else:
        raise AssertionError("classifier table should not accept writes")
    assert classifier.classify("102") is None
