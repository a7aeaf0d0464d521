"""Tests for the BibTeX reader."""

from pathlib import Path

import pytest

from diffbib.parse.base import detect_encoding, looks_like_bibtex, normalize_line_endings
from diffbib.parse.bibtex import parse_bibtex


@pytest.mark.unit
def test_parse_simple_entry() -> None:
    """A braced entry becomes a flat record with upper-cased field names."""
    content = """@article{smith2020,
  title = {Deep Learning},
  author = {Smith, John},
  year = {2020}
}"""
    records, warnings, errors = parse_bibtex(content)

    assert errors == []
    assert warnings == []
    assert len(records) == 1
    assert dict(records[0]) == {
        "type": "article",
        "key": "smith2020",
        "TITLE": "Deep Learning",
        "AUTHOR": "Smith, John",
        "YEAR": "2020",
    }


@pytest.mark.unit
def test_records_are_read_only() -> None:
    """Parsed records cannot be modified."""
    records, _, _ = parse_bibtex("@misc{a, title = {T}}")

    with pytest.raises(TypeError):
        records[0]["TITLE"] = "changed"  # type: ignore[index]


@pytest.mark.unit
def test_entry_type_is_lowercased() -> None:
    """Entry types are case-insensitive."""
    records, _, _ = parse_bibtex("@ARTICLE{a, title = {T}}")

    assert records[0]["type"] == "article"


@pytest.mark.unit
def test_quoted_and_bare_values() -> None:
    """Quoted strings and bare numbers are both accepted."""
    records, _, errors = parse_bibtex('@article{a, author = "Doe, Jane", year = 2019}')

    assert errors == []
    assert records[0]["AUTHOR"] == "Doe, Jane"
    assert records[0]["YEAR"] == "2019"


@pytest.mark.unit
def test_nested_braces_are_kept() -> None:
    """Inner braces are part of the value."""
    records, _, _ = parse_bibtex("@article{a, title = {The {BERT} Model}}")

    assert records[0]["TITLE"] == "The {BERT} Model"


@pytest.mark.unit
def test_whitespace_is_collapsed() -> None:
    """Multi-line values are joined with single spaces."""
    content = "@book{a,\n  title = {Reproducible\n           Bibliographies}\n}"
    records, _, _ = parse_bibtex(content)

    assert records[0]["TITLE"] == "Reproducible Bibliographies"


@pytest.mark.unit
def test_string_macros_are_substituted() -> None:
    """@string definitions resolve bare values, case-insensitively."""
    content = '@string{JML = "Journal of Machine Learning"}\n@article{a, journal = jml}'
    records, _, _ = parse_bibtex(content)

    assert len(records) == 1
    assert records[0]["JOURNAL"] == "Journal of Machine Learning"


@pytest.mark.unit
def test_concatenation() -> None:
    """'#' joins value pieces."""
    content = '@string{pre = "Proceedings of "}\n@inproceedings{a, booktitle = pre # {ICML}}'
    records, _, _ = parse_bibtex(content)

    assert records[0]["BOOKTITLE"] == "Proceedings of ICML"


@pytest.mark.unit
def test_parentheses_delimit_entries() -> None:
    """Entries may use parentheses as outer delimiters."""
    records, _, errors = parse_bibtex("@misc(a, title = {T})")

    assert errors == []
    assert records[0]["key"] == "a"


@pytest.mark.unit
def test_comment_and_preamble_are_skipped() -> None:
    """@comment and @preamble produce warnings, not records."""
    content = "@comment{note}\n@preamble{\"\\newcommand\"}\n@misc{a, title = {T}}"
    records, warnings, errors = parse_bibtex(content)

    assert errors == []
    assert [r["key"] for r in records] == ["a"]
    assert len(warnings) == 2
    assert "Skipping @COMMENT" in warnings[0]


@pytest.mark.unit
def test_at_sign_in_text_is_ignored() -> None:
    """An '@' that does not start a line is free text."""
    content = "Contact me at someone@example.org\n@misc{a, title = {T}}"
    records, warnings, errors = parse_bibtex(content)

    assert [r["key"] for r in records] == ["a"]
    assert warnings == []
    assert errors == []


@pytest.mark.unit
def test_unclosed_entry_is_error() -> None:
    """An entry without closing delimiter is reported as an error."""
    records, _, errors = parse_bibtex("@article{broken,\n  title = {Unclosed title\n")

    assert records == []
    assert len(errors) == 1
    assert "Unclosed entry @article" in errors[0]


@pytest.mark.unit
def test_malformed_header_is_warning() -> None:
    """'@' followed by no entry header is skipped with a warning."""
    records, warnings, errors = parse_bibtex("@ not an entry\n@misc{a, title = {T}}")

    assert len(records) == 1
    assert errors == []
    assert any("Malformed entry start" in w for w in warnings)


@pytest.mark.unit
def test_missing_citekey() -> None:
    """An entry without citation key has no 'key' field and a warning."""
    records, warnings, _ = parse_bibtex("@misc{, title = {T}}")

    assert "key" not in records[0]
    assert any("without citation key" in w for w in warnings)


@pytest.mark.unit
def test_duplicate_field_keeps_first() -> None:
    """Repeated fields keep the first value and warn."""
    records, warnings, _ = parse_bibtex("@misc{a, title = {First}, TITLE = {Second}}")

    assert records[0]["TITLE"] == "First"
    assert any("Duplicate field TITLE" in w for w in warnings)


@pytest.mark.unit
def test_trailing_comma() -> None:
    """A trailing comma after the last field is accepted."""
    records, warnings, errors = parse_bibtex("@misc{a,\n  title = {T},\n}")

    assert records[0]["TITLE"] == "T"
    assert warnings == []
    assert errors == []


@pytest.mark.unit
def test_empty_content() -> None:
    """Empty content parses to nothing."""
    assert parse_bibtex("") == ([], [], [])


@pytest.mark.unit
def test_fixture_file(fixtures_dir: Path) -> None:
    """The origin fixture yields three records in file order."""
    content = (fixtures_dir / "origin.bib").read_text(encoding="utf-8")
    records, _, errors = parse_bibtex(content)

    assert errors == []
    assert [r["key"] for r in records] == ["smith2020", "doe2019", "lee2021"]
    assert records[0]["JOURNAL"] == "Journal of Machine Learning"
    assert records[1]["AUTHOR"] == "Doe, Jane"


# ---------------------------------------------------------------------------
# base helpers
# ---------------------------------------------------------------------------


@pytest.mark.unit
@pytest.mark.parametrize(
    ("data", "expected"),
    [
        (b"\xef\xbb\xbf@misc{a}", "utf-8-sig"),
        ("@misc{café}".encode(), "utf-8"),
        ("@misc{café}".encode("latin-1"), "latin-1"),
    ],
)
def test_detect_encoding(data: bytes, expected: str) -> None:
    """BOM, UTF-8 and Latin-1 are told apart."""
    assert detect_encoding(data) == expected


@pytest.mark.unit
def test_normalize_line_endings() -> None:
    """CRLF and CR become LF."""
    assert normalize_line_endings("a\r\nb\rc\n") == "a\nb\nc\n"


@pytest.mark.unit
@pytest.mark.parametrize(
    ("content", "expected"),
    [
        ("", True),
        ("   \n", True),
        ("@article{a, title={T}}", True),
        ("  @misc (a, title={T})", True),
        ("This is a plain note.", False),
        ("mail me at x@y.org", False),
    ],
)
def test_looks_like_bibtex(content: str, expected: bool) -> None:
    """Blank text or an entry header counts as BibTeX."""
    assert looks_like_bibtex(content) is expected
