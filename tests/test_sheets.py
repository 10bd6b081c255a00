"""
Tests for the Submission Sheet

Tests cover:
- Header bootstrap on an empty sheet (header + data in one append)
- Single-row appends once the header exists
- Range naming and value input option
- Configuration errors raised before any network call
"""

from __future__ import annotations

import pytest

from core.submission import HEADER_COLUMNS, SheetsConfigError, SubmissionSheet
from core.submission import sheets as sheets_module
from utils.config import Config


# =============================================================================
# Fixtures
# =============================================================================


class FakeSpreadsheet:
    """In-memory stand-in for a gspread Spreadsheet."""

    def __init__(self, rows=None):
        self.rows = [list(row) for row in rows or []]
        self.get_calls = []
        self.append_calls = []

    def values_get(self, range_name, params=None):
        self.get_calls.append(range_name)
        if not self.rows:
            return {"range": range_name, "majorDimension": "ROWS"}
        return {"range": range_name, "majorDimension": "ROWS", "values": self.rows[:1]}

    def values_append(self, range_name, params=None, body=None):
        self.append_calls.append({"range": range_name, "params": params, "body": body})
        self.rows.extend(body["values"])
        return {"updates": {"updatedRows": len(body["values"])}}


@pytest.fixture
def row():
    return [f"cell-{i}" for i in range(len(HEADER_COLUMNS))]


@pytest.fixture
def empty_spreadsheet():
    return FakeSpreadsheet()


# =============================================================================
# Header Bootstrap
# =============================================================================


class TestHeaderBootstrap:
    """Header row is written exactly once, with the first submission."""

    def test_first_append_writes_header_and_row(self, empty_spreadsheet, row):
        sheet = SubmissionSheet(empty_spreadsheet)

        written = sheet.append_submission_row(row)

        assert written == 2
        assert empty_spreadsheet.append_calls[0]["body"]["values"] == [list(HEADER_COLUMNS), row]

    def test_second_append_writes_row_only(self, empty_spreadsheet, row):
        sheet = SubmissionSheet(empty_spreadsheet)
        sheet.append_submission_row(row)

        written = sheet.append_submission_row(row)

        assert written == 1
        assert empty_spreadsheet.append_calls[1]["body"]["values"] == [row]
        assert empty_spreadsheet.rows == [list(HEADER_COLUMNS), row, row]

    def test_existing_header_respected(self, row):
        spreadsheet = FakeSpreadsheet(rows=[["some", "other", "header"]])

        assert SubmissionSheet(spreadsheet).append_submission_row(row) == 1

    def test_empty_first_row_counts_as_missing(self, row):
        spreadsheet = FakeSpreadsheet()
        spreadsheet.values_get = lambda range_name, params=None: {"values": [[]]}

        assert SubmissionSheet(spreadsheet).append_submission_row(row) == 2

    def test_check_then_write_is_not_atomic(self, row):
        """Two first submissions that both read before either writes both add a header."""
        spreadsheet = FakeSpreadsheet()
        first = SubmissionSheet(spreadsheet)
        second = SubmissionSheet(spreadsheet)

        assert not first.has_header()
        assert not second.has_header()
        spreadsheet.values_get = lambda range_name, params=None: {}
        first.append_submission_row(row)
        second.append_submission_row(row)

        assert spreadsheet.rows.count(list(HEADER_COLUMNS)) == 2


class TestRanges:
    """Sheet ranges and append options."""

    def test_default_sheet_name(self, empty_spreadsheet, row):
        sheet = SubmissionSheet(empty_spreadsheet)
        sheet.append_submission_row(row)

        assert empty_spreadsheet.get_calls == ["'Sheet1'!A1:AA1"]
        call = empty_spreadsheet.append_calls[0]
        assert call["range"] == "'Sheet1'!A:AA"
        assert call["params"] == {"valueInputOption": "USER_ENTERED"}

    def test_custom_sheet_name(self, empty_spreadsheet):
        sheet = SubmissionSheet(empty_spreadsheet, "Join Submissions")

        assert sheet.header_range == "'Join Submissions'!A1:AA1"
        assert sheet.append_range == "'Join Submissions'!A:AA"

    def test_blank_sheet_name_falls_back(self, empty_spreadsheet):
        assert SubmissionSheet(empty_spreadsheet, "").sheet_name == "Sheet1"

    def test_last_column_covers_header(self):
        assert sheets_module.LAST_COLUMN == "AA"


# =============================================================================
# Configuration
# =============================================================================


class TestFromConfig:
    """Building the sheet from configuration."""

    def test_missing_sheet_id(self):
        config = Config(google_service_account_json="{}", google_sheet_id=None)

        with pytest.raises(SheetsConfigError, match="Missing GOOGLE_SHEET_ID"):
            SubmissionSheet.from_config(config)

    def test_missing_credentials(self):
        config = Config(google_service_account_json=None, google_sheet_id="sheet-123")

        with pytest.raises(SheetsConfigError, match="Missing GOOGLE_SERVICE_ACCOUNT_JSON"):
            SubmissionSheet.from_config(config)

    def test_opens_spreadsheet_by_key(self, monkeypatch):
        opened = {}
        spreadsheet = FakeSpreadsheet()

        class FakeCredentials:
            @classmethod
            def from_service_account_info(cls, info, scopes=None):
                opened["info"] = info
                opened["scopes"] = scopes
                return "credentials"

        class FakeClient:
            def open_by_key(self, key):
                opened["key"] = key
                return spreadsheet

        def fake_authorize(credentials):
            opened["credentials"] = credentials
            return FakeClient()

        monkeypatch.setattr(sheets_module, "Credentials", FakeCredentials)
        monkeypatch.setattr(sheets_module.gspread, "authorize", fake_authorize)

        config = Config(
            google_service_account_json='{"private_key": "a\\\\nb"}',
            google_sheet_id="sheet-123",
            google_sheet_name="Leads",
        )
        sheet = SubmissionSheet.from_config(config)

        assert sheet.spreadsheet is spreadsheet
        assert sheet.sheet_name == "Leads"
        assert opened["key"] == "sheet-123"
        assert opened["credentials"] == "credentials"
        assert opened["scopes"] == ["https://www.googleapis.com/auth/spreadsheets"]
        assert opened["info"]["private_key"] == "a\nb"

    def test_config_reads_environment(self, monkeypatch):
        monkeypatch.setenv("GOOGLE_SHEET_ID", "env-sheet")
        monkeypatch.delenv("GOOGLE_SHEET_NAME", raising=False)

        config = Config.load()

        assert config.google_sheet_id == "env-sheet"
        assert config.google_sheet_name == "Sheet1"
        assert "google_service_account_json" not in config.to_dict()
