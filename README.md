# releval

`releval` reads the text files used in ranked-retrieval evaluation and turns
them into per-query Python structures. For preference judgements it also
counts, for each query and judgment group, how many preferences the retrieved
ranking fulfils.

## Reading relevance information

Each reader has a `parse_*` function that takes the file's text and a `read_*`
function that takes a path. Both return a list of `releval.qrels.RelInfo`, one
per query, sorted by qid.

- **qrels**: lines `qid iter docno rel`. `releval.qrels.parse_qrels` /
  `read_qrels`. The iter field is ignored. Each query holds a tuple of
  `TextQrel(docno, rel)`, sorted by docno.
- **qrels_jg**: lines `qid jg docno rel`. `releval.qrels_jg.parse_qrels_jg` /
  `read_qrels_jg`. Each query holds a tuple of `QrelsJudgmentGroup(jg, qrels)`.
  A document judged twice in the same group of a query is an error.
- **prefs**: lines `qid jg jsg docno rel_level`. `releval.prefs.parse_prefs` /
  `read_prefs`. Each query holds a tuple of `TextPref(jg, jsg, rel_level, docno)`,
  sorted by docno.
- **qrels_prefs**: a qrels-shaped file, `qid jg docno rel_level`, read as
  preferences. `releval.qrels_prefs.parse_qrels_prefs` / `read_qrels_prefs`.
  Every line goes into the single sub-group `"0"`, and the result is in the
  `"prefs"` format.

Every line must have exactly the expected number of whitespace-separated
fields. Empty input, an unreadable file or a malformed line raises
`releval.qrels.FormatError`, which is a `ValueError`.

## Reading retrieval results

`releval.trec_results.parse_trec_results` / `read_trec_results` read lines of the
form `qid iter docno rank sim run_id`. They skip blank lines and ignore any
fields after the run_id. A line with fewer than six fields raises `FormatError`.
The iter and rank fields are ignored. The run_id of the last content line is
stored on every query's `releval.qrels.Results`. Each query holds a tuple of
`TextResult(docno, sim)`, sorted by docno.

## Preference counting

`releval.pref_ranks.form_prefs_and_ranks(params, rel_info, results)` gives each
judged document of a query an internal rank:

- Retrieved documents are ordered by decreasing `sim`, with ties broken by
  docno, and cut to `params.max_num_docs_per_topic`.
- Judged documents among them are ranked `0 .. num_judged_ret - 1`.
- Judged documents that were not retrieved follow, in docno order.

It returns a `JudgedRanking`. It raises `FormatError` if the formats are wrong
or if a retrieved document appears twice.

`releval.pref_counts.form_prefs_counts(params, rel_info, results)` builds a
`ResultsPrefs` with one `JudgmentGroup` per judgment group. The group's form
depends on how many sub-groups it has:

- **One sub-group:** the group is held as `EquivalenceClass`es by relevance level.
- **Several sub-groups:** the group is held as a preference array, closed under
  transitivity.

Each group counts its preferences in three classes:

- **Retrieved:** both documents were retrieved. These are counted as fulfilled
  or not.
- **Implied:** only one document was retrieved.
- **Not occurring:** neither document was retrieved.

Each group also counts relevant and non-relevant documents, in total and
retrieved. A `rel_level` of 0.0 means non-relevant. `pref_counts[i][j]` holds
the number of groups that prefer document `i` to document `j`.

Errors:

- Contradictory preferences within a group raise `PrefsInconsistencyError`
  (a `FormatError`).
- A document given both 0 and non-0 levels in one group raises `FormatError`.

`releval.pref_counts.add_transitives(prefs_array)` returns the transitive
closure of a square 0/1 array, with a zero diagonal.

`releval.qrels.EvalParams` holds four settings:

- `relevance_level`
- `max_num_docs_per_topic`
- `judged_docs_only`
- `debug_level`

Preference counting uses only `max_num_docs_per_topic` and `debug_level`.
A `debug_level` of 3 or more prints dumps to standard output.

## Z-scores

`releval.zscores.convert_to_zscore(zscores, qid, values, missing)` takes:

- `zscores`: a mapping from qid to measure name to `ZScore(mean, stddev)`;
- `values`: a mapping from measure name to value for one query.

For each measure it returns `(value - mean) / stddev`. A value equal to the
mean with a zero deviation becomes 0.0. Values without reference statistics,
or with a zero deviation and a different value, become `missing`.

It returns `(converted_values, all_converted)`.

## Example

```python
from releval.qrels import EvalParams
from releval.prefs import read_prefs
from releval.trec_results import read_trec_results
from releval.pref_counts import form_prefs_counts

params = EvalParams()
prefs = {info.qid: info for info in read_prefs("prefs.txt")}
for results in read_trec_results("run.txt"):
    if results.qid in prefs:
        counts = form_prefs_counts(params, prefs[results.qid], results)
        for group in counts.jgs:
            print(results.qid, group.jg,
                  group.num_prefs_fulfilled_ret, group.num_prefs_possible_ret)
```

## What this package does not do

The package has no command-line program and computes no evaluation measures.
It also does not rank the relevance values of retrieved documents for
qrels-style judgements, and it has no registry of input formats. It provides
readers, preference counting and z-score conversion, for use from your own
code.

## Tests

The test suite lives in `tests/` and runs under pytest. pytest is available
through the `test` extra.