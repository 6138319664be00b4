"""Preference files: ``qid jg jsg docno rel_level`` judgement lines."""

from __future__ import annotations

import re
from dataclasses import dataclass
from itertools import groupby
from operator import itemgetter

from releval.qrels import PathType, RelInfo, _read_text, _split_records

_LEADING_FLOAT = re.compile(
    r"[ \t\n\r\v\f]*"
    r"([+-]?(?:(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?|inf(?:inity)?|nan))",
    re.IGNORECASE,
)


@dataclass(frozen=True)
class TextPref:
    """One preference judgement of a document within a judgment sub-group."""

    jg: str
    jsg: str
    rel_level: float
    docno: str


def _atof(text: str) -> float:
    """Leading floating point number of ``text``, 0.0 when there is none."""
    match = _LEADING_FLOAT.match(text)
    return float(match.group(1)) if match else 0.0


def _group_prefs(records: list[tuple[str, str, str, str, str]]) -> list[RelInfo]:
    """Build per-query prefs info from ``(qid, jg, jsg, docno, rel)`` tuples."""
    ordered = sorted(records, key=itemgetter(0, 3))
    return [
        RelInfo(
            qid,
            "prefs",
            tuple(
                TextPref(jg, jsg, _atof(rel), docno)
                for _qid, jg, jsg, docno, rel in group
            ),
        )
        for qid, group in groupby(ordered, key=itemgetter(0))
    ]


def parse_prefs(text: str) -> list[RelInfo]:
    """Parse ``qid jg jsg docno rel_level`` lines into per-query preferences.

    Queries come out sorted by qid; each query's preferences are sorted by
    docno. Raises FormatError on empty input or a malformed line.
    """
    records = [tuple(fields) for fields in _split_records(text, 5)]
    return _group_prefs(records)


def read_prefs(path: PathType) -> list[RelInfo]:
    """Read and parse a prefs file."""
    return parse_prefs(_read_text(path, "prefs"))