import pytest

from releval.qrels import FormatError, TextResult
from releval.trec_results import parse_trec_results, read_trec_results

SAMPLE = (
    "030 Q0 ZF08-175-870 0 4238 prise1\n"
    "030 Q0 AB01 1 12.5 prise1\n"
    "010 Q0 CD02 0 3.0 prise1\n"
)


def test_queries_sorted_by_qid():
    results = parse_trec_results(SAMPLE)
    assert [r.qid for r in results] == ["010", "030"]


def test_documents_sorted_by_docno_with_sims():
    results = parse_trec_results(SAMPLE)
    assert results[1].q_results == (
        TextResult("AB01", 12.5),
        TextResult("ZF08-175-870", 4238.0),
    )


def test_format_name():
    results = parse_trec_results(SAMPLE)
    assert {r.ret_format for r in results} == {"trec_results"}


def test_run_id_from_last_line():
    text = "1 Q0 a 0 1.0 first\n2 Q0 b 0 2.0 last\n"
    results = parse_trec_results(text)
    assert [r.run_id for r in results] == ["last", "last"]


def test_blank_lines_skipped():
    text = "\n  \n1 Q0 a 0 1.0 run\n\t\n1 Q0 b 0 2.0 run\n\n"
    results = parse_trec_results(text)
    assert [d.docno for d in results[0].q_results] == ["a", "b"]


def test_extra_fields_ignored():
    text = "1 Q0 a 0 1.5 run extra more"
    results = parse_trec_results(text)
    assert results[0].run_id == "run"
    assert results[0].q_results == (TextResult("a", 1.5),)


def test_leading_whitespace_allowed():
    results = parse_trec_results("   q Q0 d 0 2 r\n")
    assert results[0].qid == "q"


def test_sim_leading_number_used():
    results = parse_trec_results("q Q0 d 0 2.5xyz r\n")
    assert results[0].q_results[0].sim == 2.5


def test_short_line_raises():
    with pytest.raises(FormatError, match="malformed line 2"):
        parse_trec_results("q Q0 a 0 1.0 r\nq Q0 b 0 1.0\n")


def test_empty_input_raises():
    with pytest.raises(FormatError):
        parse_trec_results("")


def test_read_file(tmp_path):
    path = tmp_path / "results"
    path.write_text(SAMPLE)
    assert read_trec_results(path) == parse_trec_results(SAMPLE)


def test_read_missing_file_raises(tmp_path):
    with pytest.raises(FormatError):
        read_trec_results(tmp_path / "absent")