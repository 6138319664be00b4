"""Counts of judged preferences fulfilled by the retrieved documents of a query."""

from __future__ import annotations

from collections import Counter
from collections.abc import Sequence
from dataclasses import dataclass
from itertools import dropwhile, groupby, takewhile
from operator import attrgetter

from releval.pref_ranks import PrefAndRank, form_prefs_and_ranks
from releval.qrels import EvalParams, FormatError, RelInfo, Results

_FULFILLED_RET = "fulfilled_ret"
_UNFULFILLED_RET = "unfulfilled_ret"
_FULFILLED_IMP = "fulfilled_imp"
_UNFULFILLED_IMP = "unfulfilled_imp"
_NOTOCCUR = "notoccur"


class PrefsInconsistencyError(FormatError):
    """Raised when the preferences of a judgment group contradict each other."""


@dataclass(frozen=True)
class EquivalenceClass:
    """Documents sharing one relevance level within a judgment group."""

    rel_level: float
    docid_ranks: tuple[int, ...]


@dataclass(frozen=True)
class JudgmentGroup:
    """Preferences of one judgment group and how the retrieval honours them.

    A group with a single sub-group is held as equivalence classes ``ecs``;
    one with several sub-groups is held as ``prefs_array``, where entry
    ``[i][j]`` is 1 when doc ``i`` is preferred to doc ``j``, together with
    each doc's ``rel_array`` level (-1.0 for docs the group does not judge).
    """

    jg: str
    ecs: tuple[EquivalenceClass, ...]
    prefs_array: tuple[tuple[int, ...], ...] | None
    rel_array: tuple[float, ...] | None
    num_prefs_fulfilled_ret: int
    num_prefs_possible_ret: int
    num_prefs_fulfilled_imp: int
    num_prefs_possible_imp: int
    num_prefs_possible_notoccur: int
    num_nonrel: int
    num_nonrel_ret: int
    num_rel: int
    num_rel_ret: int

    @property
    def uses_prefs_array(self) -> bool:
        """Whether the preferences are held as a preference array."""
        return self.prefs_array is not None


@dataclass(frozen=True)
class ResultsPrefs:
    """Preference counts of a query over all its judgment groups.

    ``pref_counts[i][j]`` is the number of judgment groups preferring the doc
    with internal rank ``i`` to the doc with internal rank ``j``.
    """

    qid: str
    num_judged: int
    num_judged_ret: int
    jgs: tuple[JudgmentGroup, ...]
    pref_counts: tuple[tuple[int, ...], ...]


def add_transitives(prefs_array: Sequence[Sequence[int]]) -> list[list[int]]:
    """Return the transitive closure of a square preference array.

    The diagonal of the result is zero. Raises PrefsInconsistencyError when
    two documents end up preferred to each other.
    """
    size = len(prefs_array)
    if any(len(row) != size for row in prefs_array):
        raise ValueError("preference array must be square")

    reach = [[bool(value) for value in row] for row in prefs_array]
    for i, row in enumerate(reach):
        row[i] = True
    for k in range(size):
        row_k = reach[k]
        for i, row in enumerate(reach):
            if row[k]:
                reach[i] = [a or b for a, b in zip(row, row_k)]
    for i, row in enumerate(reach):
        row[i] = False

    for i in range(size):
        for j in range(i + 1, size):
            if reach[i][j] and reach[j][i]:
                raise PrefsInconsistencyError(
                    f"Pref inconsistency found: internal rank {i} and "
                    f"internal rank {j} are conflicted"
                )
    return [[int(value) for value in row] for row in reach]


def _classify(preferred: int, other: int, num_judged_ret: int) -> str:
    """Category of the preference ``preferred > other`` given the retrieval."""
    preferred_ret = preferred < num_judged_ret
    other_ret = other < num_judged_ret
    if preferred_ret and other_ret:
        return _FULFILLED_RET if preferred < other else _UNFULFILLED_RET
    if preferred_ret:
        return _FULFILLED_IMP
    if other_ret:
        return _UNFULFILLED_IMP
    return _NOTOCCUR


def _build_group(
    jg: str,
    tally: Counter,
    ecs: tuple[EquivalenceClass, ...] = (),
    prefs_array: tuple[tuple[int, ...], ...] | None = None,
    rel_array: tuple[float, ...] | None = None,
) -> JudgmentGroup:
    return JudgmentGroup(
        jg=jg,
        ecs=ecs,
        prefs_array=prefs_array,
        rel_array=rel_array,
        num_prefs_fulfilled_ret=tally[_FULFILLED_RET],
        num_prefs_possible_ret=tally[_FULFILLED_RET] + tally[_UNFULFILLED_RET],
        num_prefs_fulfilled_imp=tally[_FULFILLED_IMP],
        num_prefs_possible_imp=tally[_FULFILLED_IMP] + tally[_UNFULFILLED_IMP],
        num_prefs_possible_notoccur=tally[_NOTOCCUR],
        num_nonrel=tally["nonrel"],
        num_nonrel_ret=tally["nonrel_ret"],
        num_rel=tally["rel"],
        num_rel_ret=tally["rel_ret"],
    )


def _form_jg_ec(
    jg: str,
    prefs: tuple[PrefAndRank, ...],
    num_judged_ret: int,
    counts: list[list[int]],
) -> JudgmentGroup:
    """Judgment group with a single sub-group, as equivalence classes."""
    ecs = tuple(
        EquivalenceClass(level, tuple(p.rank for p in members))
        for level, members in groupby(prefs, key=attrgetter("rel_level"))
    )
    tally: Counter = Counter()
    for index, ec1 in enumerate(ecs):
        kind = "rel" if ec1.rel_level > 0.0 else "nonrel"
        tally[kind] += len(ec1.docid_ranks)
        tally[kind + "_ret"] += sum(1 for r in ec1.docid_ranks if r < num_judged_ret)
        for ec2 in ecs[index + 1:]:
            for rank1 in ec1.docid_ranks:
                for rank2 in ec2.docid_ranks:
                    if rank1 == rank2:
                        raise FormatError(
                            f"Internal docid {rank1} occurs with different "
                            "rel_level in same jsg"
                        )
                    counts[rank1][rank2] += 1
                    tally[_classify(rank1, rank2, num_judged_ret)] += 1
    return _build_group(jg, tally, ecs=ecs)


def _form_jg_pa(
    jg: str,
    prefs: tuple[PrefAndRank, ...],
    num_judged: int,
    num_judged_ret: int,
    counts: list[list[int]],
) -> JudgmentGroup:
    """Judgment group with several sub-groups, as a preference array."""
    direct = [[0] * num_judged for _ in range(num_judged)]
    rel_array = [-1.0] * num_judged
    for index, pref in enumerate(prefs):
        current = rel_array[pref.rank]
        if (current > 0.0 and pref.rel_level == 0.0) or (
            current == 0.0 and pref.rel_level > 0.0
        ):
            raise FormatError(
                f"doc '{pref.docno}' has both 0 and non-0 rel_level assigned"
            )
        rel_array[pref.rank] = pref.rel_level
        same_jsg = takewhile(lambda o, p=pref: o.jsg == p.jsg, prefs[index + 1:])
        for other in dropwhile(lambda o, p=pref: o.rel_level == p.rel_level, same_jsg):
            direct[pref.rank][other.rank] = 1

    closure = add_transitives(direct)

    tally: Counter = Counter()
    for rank, level in enumerate(rel_array):
        if level > 0.0:
            kind = "rel"
        elif level == 0.0:
            kind = "nonrel"
        else:
            continue
        tally[kind] += 1
        if rank < num_judged_ret:
            tally[kind + "_ret"] += 1
    for i, row in enumerate(closure):
        for j, value in enumerate(row):
            if value:
                counts[i][j] += 1
                tally[_classify(i, j, num_judged_ret)] += 1

    return _build_group(
        jg,
        tally,
        prefs_array=tuple(tuple(row) for row in closure),
        rel_array=tuple(rel_array),
    )


def _dump(results_prefs: ResultsPrefs) -> None:
    print(f"Results_prefs Dump.  {len(results_prefs.jgs)} Judgment Groups")
    print(
        f"  num_judged_ret {results_prefs.num_judged_ret},  "
        f"num_judged {results_prefs.num_judged}"
    )
    for group in results_prefs.jgs:
        kind = "Prefs_array" if group.uses_prefs_array else "EC"
        print(f"  JG Dump.  Type {kind}")
        for name in (
            "num_prefs_fulfilled_ret",
            "num_prefs_possible_ret",
            "num_prefs_fulfilled_imp",
            "num_prefs_possible_imp",
            "num_prefs_possible_notoccur",
            "num_nonrel",
            "num_nonrel_ret",
            "num_rel",
            "num_rel_ret",
        ):
            print(f"    {name} {getattr(group, name)}")
    print(f"  Counts_Array Dump. Num_judged {results_prefs.num_judged}")
    for row in results_prefs.pref_counts:
        print("    " + " ".join(f"{value:2d}" for value in row))


def form_prefs_counts(
    params: EvalParams, rel_info: RelInfo, results: Results
) -> ResultsPrefs:
    """Count the preferences of each judgment group observed in the results.

    Preferences are split into retrieved (both docs retrieved), implied (one
    retrieved) and not occurring (neither retrieved). Raises FormatError for
    the wrong formats, duplicate retrieved docs or inconsistent judgements,
    and PrefsInconsistencyError for contradictory preferences within a group.
    """
    if params.debug_level >= 3:
        print(f"Debug: Form_prefs starting query '{results.qid}'")

    ranking = form_prefs_and_ranks(params, rel_info, results)
    num_judged = ranking.num_judged
    num_judged_ret = ranking.num_judged_ret
    counts = [[0] * num_judged for _ in range(num_judged)]

    groups = []
    for jg, members in groupby(ranking.prefs, key=attrgetter("jg")):
        prefs = tuple(members)
        if len({p.jsg for p in prefs}) > 1:
            groups.append(_form_jg_pa(jg, prefs, num_judged, num_judged_ret, counts))
        else:
            groups.append(_form_jg_ec(jg, prefs, num_judged_ret, counts))

    results_prefs = ResultsPrefs(
        qid=results.qid,
        num_judged=num_judged,
        num_judged_ret=num_judged_ret,
        jgs=tuple(groups),
        pref_counts=tuple(tuple(row) for row in counts),
    )
    if params.debug_level >= 3:
        _dump(results_prefs)
    return results_prefs