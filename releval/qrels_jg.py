"""Qrels files whose second field names a user judgment group."""

from __future__ import annotations

from dataclasses import dataclass
from itertools import groupby
from operator import itemgetter

from releval.qrels import (
    FormatError,
    PathType,
    RelInfo,
    TextQrel,
    _atol,
    _read_text,
    _split_records,
)


@dataclass(frozen=True)
class QrelsJudgmentGroup:
    """Judgements of one judgment group, sorted by docno."""

    jg: str
    qrels: tuple[TextQrel, ...]


def parse_qrels_jg(text: str) -> list[RelInfo]:
    """Parse ``qid jg docno rel`` lines into per-query judgment groups.

    Raises FormatError on a malformed line or a document judged twice
    within the same judgment group of a query.
    """
    records = sorted(_split_records(text, 4), key=itemgetter(0, 1, 2))
    for previous, current in zip(records, records[1:]):
        if previous[:3] == current[:3]:
            raise FormatError(f"duplicate docs {current[2]}")

    infos = []
    for qid, query_lines in groupby(records, key=itemgetter(0)):
        groups = tuple(
            QrelsJudgmentGroup(
                jg, tuple(TextQrel(docno, _atol(rel)) for _q, _j, docno, rel in lines)
            )
            for jg, lines in groupby(query_lines, key=itemgetter(1))
        )
        infos.append(RelInfo(qid, "qrels_jg", groups))
    return infos


def read_qrels_jg(path: PathType) -> list[RelInfo]:
    """Read and parse a qrels_jg file."""
    return parse_qrels_jg(_read_text(path, "qrels"))