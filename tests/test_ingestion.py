"""Tests for campaign table ingestion and workbook output."""

import polars as pl
import pytest
from openpyxl import Workbook, load_workbook

from campaign_insights.application import run_campaign_analysis
from campaign_insights.domain.numeric import parse_number
from campaign_insights.ingestion import _normalize_headers, _write_with_openpyxl, read_campaign_rows, write_output_excel

CSV_TEXT = (
    "platform,campaign_name,variant,impressions,clicks,conversions,spend,revenue,,clicks\n"
    'Meta,Spring Sale,A,"10,000",400,20,$800,2400,x,1\n'
    ",,,,,,,,,\n"
    "Meta,Spring Sale,B,9800,420,35,820,3900,,2\n"
)


def test_normalize_headers_handles_blanks_and_duplicates():
    assert _normalize_headers([" Platform ", None, "", "clicks", "clicks"]) == [
        "Platform",
        "column_2",
        "column_3",
        "clicks",
        "clicks_2",
    ]


def test_read_csv_keeps_text_and_skips_blank_rows(tmp_path):
    path = tmp_path / "campaigns.csv"
    path.write_text(CSV_TEXT, encoding="utf-8")

    rows = read_campaign_rows(path)

    assert len(rows) == 2
    assert rows[0]["impressions"] == "10,000"
    assert rows[0]["spend"] == "$800"
    assert rows[0]["column_9"] == "x"
    assert rows[0]["clicks_2"] == "1"
    assert rows[1]["variant"] == "B"


def test_read_csv_feeds_analysis(tmp_path):
    path = tmp_path / "campaigns.csv"
    path.write_text(CSV_TEXT, encoding="utf-8")

    result = run_campaign_analysis(read_campaign_rows(path))

    assert result.computed_campaigns[0].impressions == 10000
    assert result.computed_campaigns[0].spend == 800
    assert len(result.ab_tests) == 1


def test_read_tsv(tmp_path):
    path = tmp_path / "campaigns.tsv"
    path.write_text("platform\tclicks\nGoogle\t12\n", encoding="utf-8")
    assert read_campaign_rows(path) == [{"platform": "Google", "clicks": "12"}]


def test_read_empty_csv(tmp_path):
    path = tmp_path / "empty.csv"
    path.write_text("", encoding="utf-8")
    assert read_campaign_rows(path) == []


def test_read_xlsx(tmp_path):
    path = tmp_path / "campaigns.xlsx"
    workbook = Workbook()
    sheet = workbook.active
    sheet.append(["platform", "campaign_name", "clicks", "conversions"])
    sheet.append(["Meta", "Spring Sale", 400, 20])
    sheet.append(["Google", "Brand", 250, 12])
    workbook.save(path)

    result = run_campaign_analysis(read_campaign_rows(path))

    assert [record.platform for record in result.computed_campaigns] == ["Meta", "Google"]
    assert result.overall_summary.clicks == 650
    assert result.overall_summary.conversions == 32


def test_missing_file_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        read_campaign_rows(tmp_path / "nope.csv")


def test_unsupported_extension_raises(tmp_path):
    path = tmp_path / "campaigns.json"
    path.write_text("[]", encoding="utf-8")
    with pytest.raises(ValueError, match="Unsupported input file type"):
        read_campaign_rows(path)


def test_write_output_excel_creates_each_sheet(tmp_path):
    path = tmp_path / "out" / "report.xlsx"
    sheets = {
        "platforms": pl.DataFrame({"platform": ["Meta"], "spend": [800.0]}),
        "ab_tests": pl.DataFrame({"campaign_name": ["Spring Sale"], "p_value": [0.05]}),
    }

    write_output_excel(path, sheets)

    workbook = load_workbook(path, read_only=True)
    assert workbook.sheetnames == ["platforms", "ab_tests"]
    workbook.close()


def test_read_xlsx_cells_arrive_as_text(tmp_path):
    path = tmp_path / "typed.xlsx"
    workbook = Workbook()
    sheet = workbook.active
    sheet.append(["platform", "clicks", "spend"])
    sheet.append(["Meta", 400, 12.5])
    workbook.save(path)

    rows = read_campaign_rows(path)

    assert len(rows) == 1
    assert all(isinstance(value, str) for value in rows[0].values())
    assert parse_number(rows[0]["clicks"]) == 400
    assert parse_number(rows[0]["spend"]) == 12.5


def test_openpyxl_writer_leaves_non_finite_cells_empty(tmp_path):
    path = tmp_path / "fallback.xlsx"
    frame = pl.DataFrame({"platform": ["Meta", "Google"], "ROAS": [float("nan"), 2.5]})

    _write_with_openpyxl(path, {"platforms": frame})

    workbook = load_workbook(path, read_only=True)
    rows = list(workbook["platforms"].iter_rows(values_only=True))
    workbook.close()
    assert rows == [("platform", "ROAS"), ("Meta", None), ("Google", 2.5)]
