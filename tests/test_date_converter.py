from datetime import date, datetime, timezone

from asset_receiving.utils import date_converter


def test_parse_date_variants():
    assert date_converter.parse_date("2024-05-01") == date(2024, 5, 1)
    assert date_converter.parse_date("2024-05-01T10:00:00Z") == date(2024, 5, 1)
    assert date_converter.parse_date(datetime(2024, 5, 1, 8)) == date(2024, 5, 1)
    assert date_converter.parse_date("") is None
    assert date_converter.parse_date("not a date") is None


def test_parse_datetime_handles_utc_suffix():
    value = date_converter.parse_datetime("2024-05-01T10:00:00Z")
    assert value == datetime(2024, 5, 1, 10, 0, tzinfo=timezone.utc)
    assert date_converter.parse_datetime("2024-05-01") == datetime(2024, 5, 1)


def test_date_part_takes_first_ten_characters():
    assert date_converter.date_part("2024-05-01T23:59:59.000000Z") == "2024-05-01"
    assert date_converter.date_part(datetime(2024, 5, 1, 23, 59)) == "2024-05-01"
    assert date_converter.date_part(None) == ""


def test_display_in_both_calendars():
    assert date_converter.to_display_str(date(2024, 3, 20), calendar="gregorian") == "2024-03-20"
    assert date_converter.to_display_str(date(2024, 3, 20), calendar="shamsi") == "1403/01/01"
    assert date_converter.to_display_str(datetime(2024, 3, 20, 12), calendar="gregorian") == "2024-03-20"
    assert date_converter.to_display_str(None) == "-"


def test_iso_string_for_wire():
    assert date_converter.to_iso_str(date(2024, 1, 2)) == "2024-01-02"
    assert date_converter.to_iso_str(None) == ""
