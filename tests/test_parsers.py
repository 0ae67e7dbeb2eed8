"""Tests for the quote-aware line splitter."""

from reorder_radar.parsers import parse_delimited_text, parse_line


class TestParseLine:
    def test_plain_fields_are_split_and_trimmed(self):
        assert parse_line(" a , b,c ") == ["a", "b", "c"]

    def test_quoted_delimiter_stays_in_one_field(self):
        assert parse_line('1,"Acme, Inc",3') == ["1", "Acme, Inc", "3"]

    def test_quotes_are_not_copied_into_the_field(self):
        assert parse_line('"hello"') == ["hello"]

    def test_empty_fields_are_kept(self):
        assert parse_line("a,,c,") == ["a", "", "c", ""]

    def test_empty_line_yields_single_blank_field(self):
        assert parse_line("") == [""]

    def test_doubled_quotes_just_toggle_twice(self):
        # No escaped-quote support: "" opens and closes immediately.
        assert parse_line('a""b,c') == ["ab", "c"]

    def test_unterminated_quote_swallows_rest_of_line(self):
        assert parse_line('a,"b,c') == ["a", "b,c"]

    def test_custom_delimiter(self):
        assert parse_line("a;b;'c;d'", delimiter=";") == ["a", "b", "'c", "d'"]


class TestParseDelimitedText:
    def test_splits_lines_then_fields(self):
        text = 'h1,h2\n1,"x, y"\n2,z'
        assert parse_delimited_text(text) == [["h1", "h2"], ["1", "x, y"], ["2", "z"]]

    def test_windows_line_endings_are_trimmed(self):
        assert parse_delimited_text("a,b\r\nc,d\r\n") == [["a", "b"], ["c", "d"], [""]]

    def test_ragged_rows_are_never_rejected(self):
        rows = parse_delimited_text("a,b,c\nd\ne,f")
        assert [len(r) for r in rows] == [3, 1, 2]
