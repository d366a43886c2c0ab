"""Tests for pageforge.services.ingestor."""

import pytest

from pageforge.errors import InputError, ParseError
from pageforge.services.ingestor import (
    generate_sample_csv,
    get_preview,
    normalize_row,
    parse_csv,
    parse_csv_file,
    validate_dataset,
)


class TestParseCsv:
    def test_headers_are_trimmed_and_lowercased(self):
        dataset = parse_csv(" Keyword , CITY \nplumber,Reno\n")
        assert dataset.headers == ["keyword", "city"]
        assert dataset.rows == [{"keyword": "plumber", "city": "Reno"}]

    def test_values_are_trimmed(self):
        dataset = parse_csv("keyword,city\n  plumber  ,  Reno \n")
        assert dataset.rows[0] == {"keyword": "plumber", "city": "Reno"}

    def test_blank_rows_are_dropped(self):
        dataset = parse_csv("keyword,city\nplumber,Reno\n,\n \t , \n\nroofer,Boise\n")
        assert [r["keyword"] for r in dataset.rows] == ["plumber", "roofer"]
        assert dataset.total_rows == 2

    def test_short_rows_are_padded(self):
        dataset = parse_csv("keyword,city,brand\nplumber\n")
        assert dataset.rows == [{"keyword": "plumber", "city": "", "brand": ""}]

    def test_extra_cells_are_ignored(self):
        dataset = parse_csv("keyword,city\nplumber,Reno,extra\n")
        assert dataset.rows == [{"keyword": "plumber", "city": "Reno"}]

    def test_quoted_values_keep_commas(self):
        dataset = parse_csv('keyword,city\n"plumber, emergency",Reno\n')
        assert dataset.rows[0]["keyword"] == "plumber, emergency"

    def test_unnamed_columns_are_skipped(self):
        dataset = parse_csv("keyword,,city\nplumber,x,Reno\n")
        assert dataset.headers == ["keyword", "city"]
        assert dataset.rows[0] == {"keyword": "plumber", "city": "Reno"}

    def test_bytes_with_bom(self):
        dataset = parse_csv(b"\xef\xbb\xbfkeyword\nplumber\n")
        assert dataset.headers == ["keyword"]

    def test_text_with_bom(self):
        assert parse_csv("\ufeffkeyword\nplumber\n").headers == ["keyword"]

    def test_invalid_utf8_raises_parse_error(self):
        with pytest.raises(ParseError):
            parse_csv(b"keyword\n\xff\xfe\xfa\n")

    def test_parse_error_is_input_error(self):
        with pytest.raises(InputError):
            parse_csv(b"\xc3\x28")

    def test_empty_input(self):
        dataset = parse_csv("")
        assert dataset.rows == []
        assert dataset.headers == []

    def test_parse_csv_file(self, tmp_path):
        path = tmp_path / "data.csv"
        path.write_text("keyword,city\nplumber,Reno\n", encoding="utf-8")
        assert parse_csv_file(path).rows == [{"keyword": "plumber", "city": "Reno"}]

    def test_parse_missing_file_raises_parse_error(self, tmp_path):
        with pytest.raises(ParseError):
            parse_csv_file(tmp_path / "missing.csv")


class TestNormalizeRow:
    def test_normalises_keys_and_values(self):
        row = normalize_row({" City ": " Reno ", "Count": 12, "Empty": None})
        assert row == {"city": "Reno", "count": "12", "empty": ""}

    def test_preserves_order(self):
        row = normalize_row({"b": "1", "a": "2"})
        assert list(row) == ["b", "a"]


class TestValidateDataset:
    def test_empty_dataset_is_invalid(self):
        report = validate_dataset([], ["keyword"])
        assert report.is_valid is False
        assert report.errors

    def test_missing_headers_is_invalid(self):
        report = validate_dataset([{"keyword": "x"}], [])
        assert report.is_valid is False

    def test_empty_column_is_a_warning(self):
        rows = [{"keyword": "a", "city": ""}, {"keyword": "b", "city": ""}]
        report = validate_dataset(rows, ["keyword", "city"])
        assert report.is_valid is True
        assert report.errors == []
        assert any("Empty columns detected: city" in w for w in report.warnings)

    def test_low_density_rows_are_a_warning(self):
        headers = ["keyword", "city", "brand", "service"]
        rows = [
            {"keyword": "a", "city": "x", "brand": "y", "service": "z"},
            {"keyword": "b", "city": "", "brand": "", "service": ""},
        ]
        report = validate_dataset(rows, headers)
        assert report.is_valid is True
        assert any(w.startswith("1 rows have less than 50%") for w in report.warnings)

    def test_missing_keyword_column_is_a_warning(self):
        report = validate_dataset([{"city": "Reno"}], ["city"])
        assert report.is_valid is True
        assert any("keyword" in w for w in report.warnings)

    def test_healthy_dataset_has_no_warnings(self):
        report = validate_dataset([{"keyword": "a", "city": "b"}], ["keyword", "city"])
        assert report.is_valid is True
        assert report.warnings == []


class TestHelpers:
    def test_preview_limits_rows(self):
        rows = [{"keyword": str(i)} for i in range(25)]
        assert len(get_preview(rows, 10)) == 10
        assert get_preview(rows, 0) == []

    def test_sample_csv_round_trips_through_parser(self):
        dataset = parse_csv(generate_sample_csv())
        assert dataset.headers == ["keyword", "city", "brand", "service", "count"]
        assert dataset.total_rows == 4
