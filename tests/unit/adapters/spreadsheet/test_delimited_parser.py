"""
Tests pour le parser d'exports delimites.
"""

import pytest

from vitrine.adapters.spreadsheet import detect_delimiter, parse_delimited, read_delimited_file


class TestDetectDelimiter:
    """Tests pour detect_delimiter."""

    def test_semicolon(self):
        assert detect_delimiter("a;b;c") == ";"

    def test_comma(self):
        assert detect_delimiter("a,b,c") == ","

    def test_empty_header_defaults_to_comma(self):
        assert detect_delimiter("") == ","

    def test_tab_and_pipe(self):
        assert detect_delimiter("Nom\tBudget\tStyle") == "\t"
        assert detect_delimiter("Nom|Budget|Style") == "|"

    def test_tie_keeps_first_candidate(self):
        assert detect_delimiter("a,b;c") == ","

    def test_most_frequent_wins(self):
        assert detect_delimiter("Nom;Budget;Mots clés, style") == ";"


class TestParseDelimited:
    """Tests pour parse_delimited."""

    def test_quoted_delimiter_and_escaped_quote(self):
        assert parse_delimited('a,"b,c""d"') == [["a", 'b,c"d']]

    def test_newline_inside_quotes(self):
        rows = parse_delimited('Nom,Description\n"Clip","ligne 1\nligne 2"\n')
        assert rows == [["Nom", "Description"], ["Clip", "ligne 1\nligne 2"]]

    def test_crlf_line_endings(self):
        assert parse_delimited("a;b\r\n1;2\r\n") == [["a", "b"], ["1", "2"]]

    def test_blank_rows_dropped(self):
        assert parse_delimited("a,b\n\n , \n1,2") == [["a", "b"], ["1", "2"]]

    def test_ragged_rows_kept(self):
        rows = parse_delimited("a,b,c\n1\n1,2,3,4")
        assert rows == [["a", "b", "c"], ["1"], ["1", "2", "3", "4"]]

    def test_explicit_delimiter(self):
        assert parse_delimited("a;b,c", delimiter=",") == [["a;b", "c"]]

    def test_empty_text(self):
        assert parse_delimited("") == []


class TestReadDelimitedFile:
    def test_reads_utf8_with_bom(self, tmp_path):
        path = tmp_path / "export.csv"
        path.write_text("Nom;Budget\nClip;5000\n", encoding="utf-8-sig")
        assert read_delimited_file(path) == [["Nom", "Budget"], ["Clip", "5000"]]

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            read_delimited_file(tmp_path / "absent.csv")
