import pytest

from releval.qrels import (
    EvalParams,
    FormatError,
    RelInfo,
    Results,
    TextQrel,
    TextResult,
    parse_qrels,
    read_qrels,
)

SAMPLE = """\
q2 0 docB 1
q1 0 docZ 0
q1 0 docA 1
q2 0 docA -1
"""


def test_queries_sorted_by_qid():
    infos = parse_qrels(SAMPLE)
    assert [info.qid for info in infos] == ["q1", "q2"]


def test_format_name_is_qrels():
    assert {info.rel_format for info in parse_qrels(SAMPLE)} == {"qrels"}


def test_judgements_sorted_by_docno():
    infos = parse_qrels(SAMPLE)
    assert infos[0].q_rel_info == (TextQrel("docA", 1), TextQrel("docZ", 0))
    assert infos[1].q_rel_info == (TextQrel("docA", -1), TextQrel("docB", 1))


def test_missing_final_newline_is_accepted():
    assert parse_qrels("q1 0 d1 1") == parse_qrels("q1 0 d1 1\n")


def test_extra_whitespace_between_fields():
    assert parse_qrels("  q1\t0   d1  \t 1  \n") == parse_qrels("q1 0 d1 1\n")


def test_carriage_return_is_whitespace():
    assert parse_qrels("q1 0 d1 1\r\n") == parse_qrels("q1 0 d1 1\n")


def test_relevance_takes_leading_integer():
    infos = parse_qrels("q1 0 d1 2x\nq1 0 d2 abc\n")
    assert [q.rel for q in infos[0].q_rel_info] == [2, 0]


def test_too_few_fields_reports_line():
    with pytest.raises(FormatError, match="line 2"):
        parse_qrels("q1 0 d1 1\nq1 0 d2\n")


def test_too_many_fields_is_malformed():
    with pytest.raises(FormatError, match="line 1"):
        parse_qrels("q1 0 d1 1 extra\n")


def test_blank_line_is_malformed():
    with pytest.raises(FormatError, match="line 2"):
        parse_qrels("q1 0 d1 1\n\nq1 0 d2 0\n")


def test_empty_input_is_error():
    with pytest.raises(FormatError):
        parse_qrels("")


def test_duplicates_are_kept():
    infos = parse_qrels("q1 0 d1 1\nq1 0 d1 0\n")
    assert len(infos[0].q_rel_info) == 2


def test_read_qrels_from_file(tmp_path):
    path = tmp_path / "qrels.txt"
    path.write_text(SAMPLE)
    assert read_qrels(path) == parse_qrels(SAMPLE)


def test_read_missing_file(tmp_path):
    with pytest.raises(FormatError, match="cannot read"):
        read_qrels(tmp_path / "absent")


def test_read_empty_file(tmp_path):
    path = tmp_path / "empty"
    path.write_text("")
    with pytest.raises(FormatError):
        read_qrels(path)


def test_records_are_frozen_and_comparable():
    info = RelInfo("q1", "qrels", ())
    with pytest.raises(AttributeError):
        info.qid = "q2"  # type: ignore[misc]
    results = Results("q1", "run", "trec_results", (TextResult("d1", 1.5),))
    assert results.q_results[0].sim == 1.5


def test_eval_params_override():
    params = EvalParams(relevance_level=2, judged_docs_only=True)
    assert (params.relevance_level, params.judged_docs_only) == (2, True)
    assert params.max_num_docs_per_topic > 10**9