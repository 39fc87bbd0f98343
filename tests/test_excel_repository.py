from __future__ import annotations

import pytest
from openpyxl import Workbook

from ad_insights.infrastructure.excel_repository import (
    detect_header_row,
    detect_result_type,
    find_column,
    normalize_header,
    parse_number,
    read_ad_records,
    records_from_grid,
)

HEADERS = [
    "Campaign name",
    "Ad set name",
    "Ad name",
    "Amount spent (USD)",
    "Impressions",
    "Link clicks",
    "CTR (link click-through rate)",
    "CPC (cost per link click)",
    "Results",
    "Cost per result",
    "Purchase ROAS",
]


def _grid(results_header: str = "Results") -> list[list[object]]:
    headers = [results_header if value == "Results" else value for value in HEADERS]
    return [
        ["Ads report: Account 42", None],
        ["Reporting window", "2026-09-01 - 2026-09-30"],
        headers,
        ["Spring", "Broad", "Video 1", "120,50", 10000, 150, 1.5, 0.8, 6, 20.08, 2.4],
        ["Spring", "Broad", "Video 2", "1.234,00", 50000, 600, 1.2, 2.05, 12, 102.83, 0.9],
        ["Spring", "Retarget", "Carousel", 0, 0, 0, 0, 0, 0, 0, 0],
        [None, None, None, "1354,50", 60000, 750, None, None, 18, None, None],
    ]


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("1.234,56", 1234.56),
        ("1,234.56", 1234.56),
        ("12,5", 12.5),
        ("$ 1 234.50", 1234.5),
        ("1 234,5", 1234.5),
        ("1.5%", 1.5),
        ("MAD 99", 99.0),
        ("abc", 0.0),
        ("", 0.0),
        (None, 0.0),
        (7, 7.0),
    ],
)
def test_parse_number(raw, expected):
    assert parse_number(raw) == pytest.approx(expected)


def test_normalize_header_keeps_arabic_letters():
    assert normalize_header("Amount spent (USD)") == "amountspentusd"
    assert normalize_header("اسم الإعلان") == "اسمالإعلان"


def test_header_row_is_found_below_preamble():
    assert detect_header_row(_grid()) == 2


def test_header_row_defaults_to_first_row_without_keywords():
    assert detect_header_row([["foo", "bar"], ["1", "2"]]) == 0


def test_find_column_prefers_exact_alias():
    headers = [normalize_header(value) for value in ["Ad set name", "Ad name", "Cost per result", "Results"]]

    assert find_column(headers, ["ad name", "ad"]) == 1
    assert find_column(headers, ["results", "result"]) == 3
    assert find_column(headers, ["roas"]) == -1


@pytest.mark.parametrize(
    ("header", "expected"),
    [
        ("Results (Website purchases)", "purchase"),
        ("Achats", "purchase"),
        ("Messaging conversations started", "message"),
        ("On-Facebook leads", "lead"),
        ("Results", "generic"),
    ],
)
def test_detect_result_type(header, expected):
    assert detect_result_type(header) == expected


def test_records_from_grid_skips_totals_and_zero_spend():
    records = records_from_grid(_grid())

    assert [record.ad_name for record in records] == ["Video 1", "Video 2"]
    first, second = records
    assert first.campaign_name == "Spring"
    assert first.ad_set_name == "Broad"
    assert first.amount_spent == pytest.approx(120.5)
    assert first.impressions == pytest.approx(10000)
    assert first.clicks == pytest.approx(150)
    assert first.results == 6
    assert first.cost_per_result == pytest.approx(20.08)
    assert first.roas == pytest.approx(2.4)
    assert second.amount_spent == pytest.approx(1234.0)
    assert first.result_type == "generic"


def test_result_type_comes_from_results_header():
    records = records_from_grid(_grid("Results (Website purchases)"))

    assert {record.result_type for record in records} == {"purchase"}


def test_missing_spend_column_is_rejected():
    grid = [["Campaign name", "Ad name", "Results"], ["C", "A", 3]]

    with pytest.raises(ValueError, match="Amount spent"):
        records_from_grid(grid)


def test_export_without_data_rows_is_rejected():
    with pytest.raises(ValueError):
        records_from_grid([HEADERS])


def test_export_without_spend_is_rejected():
    grid = [HEADERS, ["C", "S", "A", 0, 0, 0, 0, 0, 0, 0, 0]]

    with pytest.raises(ValueError, match="Amount spent > 0"):
        records_from_grid(grid)


def test_read_csv_export(tmp_path):
    path = tmp_path / "export.csv"
    path.write_text(
        "Campaign name,Ad set name,Ad name,Amount spent (USD),Results,Cost per result\n"
        "Leads Q3,Lookalike,Form A,45.5,5,9.1\n"
        "Leads Q3,Lookalike,Form B,30,,\n",
        encoding="utf-8",
    )

    records = read_ad_records(path)

    assert [record.ad_name for record in records] == ["Form A", "Form B"]
    assert records[0].amount_spent == pytest.approx(45.5)
    assert records[0].results == 5
    assert records[1].results == 0


def test_read_csv_export_with_title_rows(tmp_path):
    path = tmp_path / "export.csv"
    path.write_text(
        "Ads report: Account 42\n"
        "Reporting window,2026-09-01 - 2026-09-30\n"
        "Campaign name,Ad set name,Ad name,Amount spent (USD),Results,Cost per result\n"
        "Leads Q3,Lookalike,Form A,45.5,5,9.1\n"
        "Leads Q3,Lookalike,\"Form B, long\",30,3,10\n",
        encoding="utf-8",
    )

    records = read_ad_records(path)

    assert [record.ad_name for record in records] == ["Form A", "Form B, long"]
    assert records[0].ad_set_name == "Lookalike"
    assert records[0].amount_spent == pytest.approx(45.5)
    assert records[1].results == 3
    assert records[1].cost_per_result == pytest.approx(10.0)


def test_read_xlsx_export(tmp_path):
    path = tmp_path / "export.xlsx"
    workbook = Workbook()
    sheet = workbook.active
    for row in _grid("Messaging conversations started"):
        sheet.append(row)
    workbook.save(path)

    records = read_ad_records(path)

    assert [record.ad_name for record in records] == ["Video 1", "Video 2"]
    assert records[0].result_type == "message"


@pytest.mark.parametrize("name", ["export.pdf", "export.xls"])
def test_unsupported_format_is_rejected(tmp_path, name):
    path = tmp_path / name
    path.write_bytes(b"\x00")

    with pytest.raises(ValueError, match=r"Unsupported export format.*save the export as .xlsx or .csv"):
        read_ad_records(path)


def test_missing_file_is_rejected(tmp_path):
    with pytest.raises(ValueError, match="not found"):
        read_ad_records(tmp_path / "missing.xlsx")
