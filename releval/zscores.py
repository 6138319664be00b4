"""Conversion of per-query measure values into z-scores."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass


@dataclass(frozen=True)
class ZScore:
    """Reference mean and standard deviation of a measure on a query."""

    mean: float
    stddev: float


def convert_to_zscore(
    zscores: Mapping[str, Mapping[str, ZScore]],
    qid: str,
    values: Mapping[str, float],
    missing: float,
) -> tuple[dict[str, float], bool]:
    """Express each value of query ``qid`` in standard deviations from its mean.

    ``zscores`` maps qid to measure name to reference statistics. Values with
    no reference statistics, or with a zero deviation and a value different
    from the mean, become ``missing``. Returns the converted values, in the
    order given, and whether every value could be converted.
    """
    query_scores = zscores.get(qid)
    if query_scores is None:
        return {name: missing for name in values}, False

    complete = True
    converted: dict[str, float] = {}
    for name, value in values.items():
        reference = query_scores.get(name)
        if reference is None:
            converted[name] = missing
            complete = False
        elif reference.stddev:
            converted[name] = (value - reference.mean) / reference.stddev
        elif value == reference.mean:
            converted[name] = 0.0
        else:
            converted[name] = missing
            complete = False
    return converted, complete