from deck_tracker.services.roster_parser import parse_cell, parse_roster


def test_quoted_comma_is_preserved_and_header_dropped():
    assert parse_roster('"Smith, John"\nBob\nusername\n') == ["Smith, John", "Bob"]


def test_header_line_is_dropped_case_insensitively():
    assert parse_roster("Username\nAlice\nBob") == ["Alice", "Bob"]


def test_bare_token_takes_first_field_only():
    assert parse_roster("Alice,alice@example.com,2024\n") == ["Alice"]


def test_doubled_quote_is_unescaped():
    assert parse_cell('"Jon ""The Hammer"" Doe",x') == 'Jon "The Hammer" Doe'


def test_unterminated_quote_takes_rest_of_line():
    assert parse_cell('"Smith, John') == "Smith, John"


def test_blank_lines_and_whitespace_are_ignored():
    assert parse_roster("\n   \n  Alice  \r\n\r\n\t\n  Bob") == ["Alice", "Bob"]


def test_duplicates_collapse_by_exact_match_only():
    assert parse_roster("Alice\nBob\nAlice\nalice") == ["Alice", "Bob", "alice"]


def test_empty_quoted_cell_is_dropped():
    assert parse_roster('""\nAlice') == ["Alice"]


def test_byte_order_mark_is_stripped():
    assert parse_roster("\ufeffusername\nAlice") == ["Alice"]


def test_empty_input():
    assert parse_roster("") == []


def test_lone_carriage_returns_split_lines():
    assert parse_roster("Alice\rBob\r\nCarol") == ["Alice", "Bob", "Carol"]


def test_unicode_separators_stay_inside_names():
    assert parse_roster("Ann\x85Lee\nBob") == ["Ann\x85Lee", "Bob"]
    assert parse_roster("Ann\u2028Marie\nBob") == ["Ann\u2028Marie", "Bob"]
    assert parse_roster("Ann\x0cLee\x1eX\nBob") == ["Ann\x0cLee\x1eX", "Bob"]
