"""Standard qrels relevance files, plus the records shared by the evaluators."""

from __future__ import annotations

import re
import sys
from dataclasses import dataclass
from itertools import groupby
from operator import itemgetter
from os import PathLike
from typing import Any, Union

_FIELD = re.compile(r"[^ \t\n\r\v\f]+")
_LEADING_INT = re.compile(r"[ \t\n\r\v\f]*([+-]?\d+)")

PathType = Union[str, "PathLike[str]"]


class FormatError(ValueError):
    """Raised when an input file or its contents cannot be used."""


@dataclass(frozen=True)
class EvalParams:
    """Parameters that control how a query is evaluated."""

    relevance_level: int = 1
    max_num_docs_per_topic: int = sys.maxsize
    judged_docs_only: bool = False
    debug_level: int = 0


@dataclass(frozen=True)
class TextQrel:
    """One relevance judgement: a document and its relevance value."""

    docno: str
    rel: int


@dataclass(frozen=True)
class RelInfo:
    """Relevance information for one query, in the named format."""

    qid: str
    rel_format: str
    q_rel_info: Any


@dataclass(frozen=True)
class TextResult:
    """One retrieved document with its similarity score."""

    docno: str
    sim: float


@dataclass(frozen=True)
class Results:
    """Retrieved documents for one query, in the named format."""

    qid: str
    run_id: str
    ret_format: str
    q_results: Any


def _atol(text: str) -> int:
    """Leading integer of ``text``, 0 when there is none."""
    match = _LEADING_INT.match(text)
    return int(match.group(1)) if match else 0


def _split_records(text: str, num_fields: int) -> list[list[str]]:
    """Split ``text`` into lines of exactly ``num_fields`` whitespace fields."""
    if not text:
        raise FormatError("input is empty")
    lines = text.split("\n")
    if lines[-1] == "":
        lines.pop()
    records = []
    for number, line in enumerate(lines, start=1):
        fields = _FIELD.findall(line)
        if len(fields) != num_fields:
            raise FormatError(f"malformed line {number}")
        records.append(fields)
    return records


def _read_text(path: PathType, kind: str) -> str:
    """Read a whole input file, byte for byte, as text."""
    try:
        with open(path, encoding="latin-1", newline="") as handle:
            text = handle.read()
    except OSError as exc:
        raise FormatError(f"cannot read {kind} file '{path}'") from exc
    if not text:
        raise FormatError(f"cannot read {kind} file '{path}'")
    return text


def parse_qrels(text: str) -> list[RelInfo]:
    """Parse ``qid iter docno rel`` lines into per-query relevance info.

    Queries come out sorted by qid; each query's judgements are sorted by docno.
    """
    records = sorted(
        ((qid, docno, rel) for qid, _iter, docno, rel in _split_records(text, 4)),
        key=itemgetter(0, 1),
    )
    return [
        RelInfo(
            qid,
            "qrels",
            tuple(TextQrel(docno, _atol(rel)) for _qid, docno, rel in group),
        )
        for qid, group in groupby(records, key=itemgetter(0))
    ]


def read_qrels(path: PathType) -> list[RelInfo]:
    """Read and parse a qrels file."""
    return parse_qrels(_read_text(path, "qrels"))