"""Standard qrels files read as restricted preference judgements."""

from __future__ import annotations

from releval.prefs import _group_prefs
from releval.qrels import PathType, RelInfo, _read_text, _split_records

_SINGLE_SUB_GROUP = "0"


def parse_qrels_prefs(text: str) -> list[RelInfo]:
    """Parse ``qid jg docno rel_level`` lines as preferences.

    The second field names the judgment group. Every line is placed in the
    same judgment sub-group, so each group's preferences are complete
    between documents of different relevance levels. Queries come out
    sorted by qid, each query's preferences sorted by docno, in the "prefs"
    format. Raises FormatError on empty input or a malformed line.
    """
    records = [
        (qid, jg, _SINGLE_SUB_GROUP, docno, rel)
        for qid, jg, docno, rel in _split_records(text, 4)
    ]
    return _group_prefs(records)


def read_qrels_prefs(path: PathType) -> list[RelInfo]:
    """Read and parse a qrels file as preferences."""
    return parse_qrels_prefs(_read_text(path, "prefs"))