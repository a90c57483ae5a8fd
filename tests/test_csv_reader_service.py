"""
tests/test_csv_reader_service.py

CSV upload parsing: headers, blank lines, encodings and failures.
"""

from __future__ import annotations

import pytest

from app.services.csv_reader_service import (
    CSVParseError,
    CSVUploadTooLargeError,
    read_raw_records,
)


class TestReadRawRecords:
    def test_header_row_keys_each_record(self) -> None:
        data = b"Campaign name,Results\n[ON] A,5\n[OFF] B,0\n"
        assert read_raw_records(data) == [
            {"Campaign name": "[ON] A", "Results": "5"},
            {"Campaign name": "[OFF] B", "Results": "0"},
        ]

    def test_cells_stay_text(self) -> None:
        records = read_raw_records(b"Spend,CTR\n\"1,234.56\",1.5%\n")
        assert records == [{"Spend": "1,234.56", "CTR": "1.5%"}]

    def test_byte_order_mark_is_ignored(self) -> None:
        records = read_raw_records(b"\xef\xbb\xbfCampaign name,Results\nX,1\n")
        assert list(records[0]) == ["Campaign name", "Results"]

    def test_blank_lines_are_skipped(self) -> None:
        records = read_raw_records(b"a,b\n\n1,2\n\n3,4\n\n")
        assert records == [{"a": "1", "b": "2"}, {"a": "3", "b": "4"}]

    def test_missing_cell_becomes_empty_text(self) -> None:
        assert read_raw_records(b"a,b\n1\n") == [{"a": "1", "b": ""}]

    def test_trailing_delimiter_keeps_columns_aligned(self) -> None:
        data = b"Campaign name,Results,Amount spent (USD)\n[ON] A,5,100,\n[ON] B,3,50,\n"
        assert read_raw_records(data) == [
            {"Campaign name": "[ON] A", "Results": "5", "Amount spent (USD)": "100"},
            {"Campaign name": "[ON] B", "Results": "3", "Amount spent (USD)": "50"},
        ]

    def test_na_like_text_is_not_converted(self) -> None:
        assert read_raw_records(b"a,b\nNA,null\n") == [{"a": "NA", "b": "null"}]

    @pytest.mark.parametrize("data", [b"", b"\n\n"])
    def test_empty_upload_yields_no_records(self, data: bytes) -> None:
        assert read_raw_records(data) == []

    def test_header_only_yields_no_records(self) -> None:
        assert read_raw_records(b"a,b\n") == []


class TestFailures:
    def test_too_large(self) -> None:
        with pytest.raises(CSVUploadTooLargeError) as exc_info:
            read_raw_records(b"a,b\n1,2\n", max_bytes=4)
        assert exc_info.value.size == 8
        assert exc_info.value.limit == 4

    def test_limit_is_inclusive(self) -> None:
        data = b"a\n1\n"
        assert read_raw_records(data, max_bytes=len(data)) == [{"a": "1"}]

    def test_too_large_is_a_parse_error(self) -> None:
        assert issubclass(CSVUploadTooLargeError, CSVParseError)

    def test_invalid_utf8(self) -> None:
        with pytest.raises(CSVParseError):
            read_raw_records(b"a\n\xff\xfe\xfa\n")

    def test_ragged_rows(self) -> None:
        with pytest.raises(CSVParseError):
            read_raw_records(b"a,b\n1,2\n3,4,5,6\n")
