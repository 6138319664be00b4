import pytest

from releval.zscores import ZScore, convert_to_zscore

MISSING = -1000.0

REFERENCE = {
    "q1": {
        "map": ZScore(mean=0.25, stddev=0.125),
        "P_10": ZScore(mean=0.3, stddev=0.0),
        "recall": ZScore(mean=0.4, stddev=0.2),
    }
}


def test_values_expressed_in_stddev_units():
    values = {"map": 0.6, "recall": 0.1}
    converted, complete = convert_to_zscore(REFERENCE, "q1", values, MISSING)
    assert complete is True
    for name, value in values.items():
        ref = REFERENCE["q1"][name]
        assert converted[name] * ref.stddev + ref.mean == pytest.approx(value)


def test_value_at_mean_gives_zero():
    converted, complete = convert_to_zscore(REFERENCE, "q1", {"map": 0.25}, MISSING)
    assert converted == {"map": 0.0}
    assert complete


def test_zero_stddev_equal_to_mean_gives_zero():
    converted, complete = convert_to_zscore(REFERENCE, "q1", {"P_10": 0.3}, MISSING)
    assert converted == {"P_10": 0.0}
    assert complete


def test_zero_stddev_different_value_is_missing():
    converted, complete = convert_to_zscore(REFERENCE, "q1", {"P_10": 0.5}, MISSING)
    assert converted == {"P_10": MISSING}
    assert complete is False


def test_unknown_query_marks_everything_missing():
    values = {"map": 0.5, "recall": 0.2}
    converted, complete = convert_to_zscore(REFERENCE, "q9", values, MISSING)
    assert converted == {"map": MISSING, "recall": MISSING}
    assert complete is False


def test_unknown_measure_is_missing_others_converted():
    values = {"map": 0.25, "ndcg": 0.7}
    converted, complete = convert_to_zscore(REFERENCE, "q1", values, MISSING)
    assert converted == {"map": 0.0, "ndcg": MISSING}
    assert complete is False


def test_order_preserved_and_input_untouched():
    values = {"recall": 0.4, "map": 0.25}
    converted, _ = convert_to_zscore(REFERENCE, "q1", values, MISSING)
    assert list(converted) == ["recall", "map"]
    assert values == {"recall": 0.4, "map": 0.25}


def test_no_values_is_complete():
    assert convert_to_zscore(REFERENCE, "q1", {}, MISSING) == ({}, True)