"""Retrieval results files: ``qid iter docno rank sim run_id`` lines."""

from __future__ import annotations

from itertools import groupby
from operator import itemgetter

from releval.prefs import _atof
from releval.qrels import (
    _FIELD,
    FormatError,
    PathType,
    Results,
    TextResult,
    _read_text,
)

_NUM_FIELDS = 6


def parse_trec_results(text: str) -> list[Results]:
    """Parse retrieval results into per-query results.

    Blank lines are skipped and fields after the run_id are ignored, as are
    the iter and rank fields. The run_id of the last content line is kept for
    every query. Queries come out sorted by qid; each query's documents are
    sorted by docno. Raises FormatError on empty input or a line with fewer
    than six fields.
    """
    if not text:
        raise FormatError("input is empty")

    records: list[tuple[str, str, str]] = []
    run_id = ""
    for line in text.split("\n"):
        fields = _FIELD.findall(line)
        if not fields:
            continue
        if len(fields) < _NUM_FIELDS:
            raise FormatError(f"malformed line {len(records) + 1}")
        qid, _iter, docno, _rank, sim, run_id = fields[:_NUM_FIELDS]
        records.append((qid, docno, sim))

    records.sort(key=itemgetter(0, 1))
    return [
        Results(
            qid,
            run_id,
            "trec_results",
            tuple(TextResult(docno, _atof(sim)) for _qid, docno, sim in group),
        )
        for qid, group in groupby(records, key=itemgetter(0))
    ]


def read_trec_results(path: PathType) -> list[Results]:
    """Read and parse a results file."""
    return parse_trec_results(_read_text(path, "results"))