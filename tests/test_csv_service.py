import pytest

from core.exceptions import InvalidCsv
from services.csv_service import (
    PerformerRow,
    parse_performers_csv,
    serialize_performers_csv,
)


def test_parse_matches_header_case_insensitively():
    text = "Name, CLUB ,Category,Routine\nAnn,Club A,Juniors,Ribbon\n"

    assert parse_performers_csv(text) == [PerformerRow("Ann", "Club A", "Juniors", "Ribbon")]


def test_parse_without_routine_column():
    text = "category,name,club\r\nJuniors,Ann,Club A\r\nSeniors,Ben,Club B\r\n"

    rows = parse_performers_csv(text)

    assert rows == [
        PerformerRow("Ann", "Club A", "Juniors", ""),
        PerformerRow("Ben", "Club B", "Seniors", ""),
    ]


def test_parse_skips_rows_missing_required_values():
    text = (
        "name,club,category,routine\n"
        "Ann,Club A,Juniors,\n"
        ",Club B,Juniors,Hoop\n"
        "Cid,,Juniors,\n"
        "Dee,Club D\n"
        "\n"
        "Eve,Club E,Seniors,Ball\n"
    )

    assert [row.name for row in parse_performers_csv(text)] == ["Ann", "Eve"]


def test_parse_ignores_byte_order_mark():
    text = "\ufeffname,club,category\nAnn,Club A,Juniors\n"

    assert parse_performers_csv(text)[0].name == "Ann"


def test_parse_missing_required_column():
    with pytest.raises(InvalidCsv, match="club"):
        parse_performers_csv("name,category\nAnn,Juniors\n")


def test_parse_empty_document():
    with pytest.raises(InvalidCsv):
        parse_performers_csv("  \n")


def test_parse_malformed_quoting():
    with pytest.raises(InvalidCsv):
        parse_performers_csv('name,club,category\n"Ann"x,Club A,Juniors\n')


def test_serialize_uses_crlf_and_quotes_when_needed():
    rows = [
        PerformerRow("Ann", "Smith, Jones", "Juniors", ""),
        PerformerRow("Ben", 'The "Best" Club', "Seniors", "Hoop"),
    ]

    assert serialize_performers_csv(rows) == (
        "name,club,category,routine\r\n"
        'Ann,"Smith, Jones",Juniors,\r\n'
        'Ben,"The ""Best"" Club",Seniors,Hoop\r\n'
    )


def test_comma_in_field_survives_export_and_import():
    rows = [PerformerRow("Ann", "Smith, Jones", "Juniors", "Ribbon")]

    assert parse_performers_csv(serialize_performers_csv(rows)) == rows


def test_serialize_empty_list_has_header_only():
    assert serialize_performers_csv([]) == "name,club,category,routine\r\n"
