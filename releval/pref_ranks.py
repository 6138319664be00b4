"""Internal document ranks for the preference judgements of one query."""

from __future__ import annotations

from dataclasses import dataclass

from releval.qrels import EvalParams, FormatError, RelInfo, Results

_PREFS_FORMATS = ("prefs", "qrels_prefs")


@dataclass(frozen=True)
class PrefAndRank:
    """A preference judgement together with its document's internal rank."""

    jg: str
    jsg: str
    rel_level: float
    docno: str
    rank: int


@dataclass(frozen=True)
class JudgedRanking:
    """Preferences of a query with internal ranks assigned.

    Judged docs that were retrieved get ranks ``0 .. num_judged_ret - 1`` in
    retrieval order; judged docs that were not retrieved get ranks
    ``num_judged_ret .. num_judged - 1`` in docno order. ``prefs`` is sorted
    by jg, jsg, decreasing rel_level, then rank.
    """

    prefs: tuple[PrefAndRank, ...]
    num_judged: int
    num_judged_ret: int


def _dump(prefs: tuple[PrefAndRank, ...], location: str) -> None:
    print(f"Prefs_and_ranks Dump.  num_pref_lines {len(prefs)},  {location}")
    for p in prefs:
        print(f"  {p.jg}\t{p.jsg}\t{p.rel_level:4.2f}\t{p.docno}\t{p.rank:3d}")


def form_prefs_and_ranks(
    params: EvalParams, rel_info: RelInfo, results: Results
) -> JudgedRanking:
    """Give every judged document of a query its internal rank.

    Retrieved documents are ordered by decreasing sim, ties broken by
    increasing docno, and cut to ``params.max_num_docs_per_topic``. Raises
    FormatError for the wrong formats or a duplicate retrieved document.
    """
    if rel_info.rel_format not in _PREFS_FORMATS or results.ret_format != "trec_results":
        raise FormatError(
            "prefs_info format not (prefs or qrels_prefs) "
            "or results format not trec_results"
        )

    ordered = sorted(results.q_results, key=lambda r: (-r.sim, r.docno))
    retrieved = [r.docno for r in ordered[: params.max_num_docs_per_topic]]
    by_docno = sorted(retrieved)
    for previous, current in zip(by_docno, by_docno[1:]):
        if previous == current:
            raise FormatError(f"duplicate docs {current}")

    judged = {pref.docno for pref in rel_info.q_rel_info}
    ranks = {
        docno: rank
        for rank, docno in enumerate(d for d in retrieved if d in judged)
    }
    num_judged_ret = len(ranks)
    for docno in sorted(judged - ranks.keys()):
        ranks[docno] = len(ranks)

    prefs = tuple(
        sorted(
            (
                PrefAndRank(p.jg, p.jsg, p.rel_level, p.docno, ranks[p.docno])
                for p in rel_info.q_rel_info
            ),
            key=lambda p: (p.jg, p.jsg, -p.rel_level, p.rank),
        )
    )

    if params.debug_level >= 4:
        print(
            f"Form_prefs: num_judged {len(ranks)}, num_judged_ret {num_judged_ret}"
        )
        _dump(prefs, "Final prefs")

    return JudgedRanking(
        prefs=prefs, num_judged=len(ranks), num_judged_ret=num_judged_ret
    )