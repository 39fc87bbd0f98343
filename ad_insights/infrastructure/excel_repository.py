"""Infrastructure adapter that turns an Ads Manager export into ad records."""

from __future__ import annotations

import re
from pathlib import Path
from typing import Any, Dict, List, Sequence

import polars as pl

from ad_insights.domain.models import AdRecord

HEADER_SCAN_ROWS = 25
MIN_HEADER_MATCHES = 2
HEADER_KEYWORDS: tuple[str, ...] = (
    "campaign",
    "ad name",
    "ad set",
    "results",
    "amount spent",
    "impressions",
    "إعلان",
    "حملة",
    "نتائج",
    "publicité",
)
FIELD_ALIASES: Dict[str, tuple[str, ...]] = {
    "campaign": ("campaign name", "campaign", "campagne", "اسم الحملة"),
    "ad_set": ("ad set name", "ad set", "adset", "ensemble de publicités", "المجموعة الإعلانية"),
    "ad": ("ad name", "ad", "publicité", "name", "اسم الإعلان"),
    "spent": (
        "amount spent",
        "amountspent",
        "spend",
        "montant dépensé",
        "depense",
        "cost",
        "المبلغ الذي تم إنفاقه",
    ),
    "impressions": ("impressions", "مرات الظهور"),
    "clicks": ("link clicks", "clicks", "clics", "النقرات"),
    "ctr": ("ctr", "click-through rate", "taux de clics", "نسبة النقر"),
    "cpc": ("cpc", "cost per click", "coût par clic"),
    "results": (
        "results",
        "résultats",
        "purchases",
        "leads",
        "messaging conversations",
        "النتائج",
        "result",
    ),
    "cpa": ("cost per result", "coût par résultat", "cpr", "cost per purchase", "التكلفة لكل نتيجة"),
    "roas": ("purchase roas", "roas", "return on ad spend", "retour sur les dépenses", "عائد الإنفاق", "roasachats"),
}
RESULT_TYPE_KEYWORDS: tuple[tuple[str, tuple[str, ...]], ...] = (
    ("purchase", ("purchase", "achat", "شراء")),
    ("message", ("messag", "convers", "مراسلة", "رسائل")),
    ("lead", ("lead", "prospect", "عميل")),
)
_NON_HEADER_CHARS = re.compile(r"[^a-z0-9\u0600-\u06FF]")
_NON_NUMERIC_CHARS = re.compile(r"[^0-9.\-]")


def _import_openpyxl() -> Any:
    try:
        from openpyxl import load_workbook
    except Exception as exc:  # pragma: no cover
        raise RuntimeError("openpyxl is required to read .xlsx exports.") from exc
    return load_workbook


def normalize_header(value: Any) -> str:
    if value is None:
        return ""
    return _NON_HEADER_CHARS.sub("", str(value).lower())


def parse_number(value: Any) -> float:
    """Parse a spreadsheet cell written with US or EU/Moroccan separators."""
    if value is None or value == "":
        return 0.0
    if isinstance(value, bool):
        return float(value)
    if isinstance(value, (int, float)):
        return float(value)

    # \s also covers the non-breaking spaces used as thousand separators.
    text = re.sub(r"\s", "", str(value))
    has_dot = "." in text
    has_comma = "," in text
    if has_dot and has_comma:
        if text.rfind(",") > text.rfind("."):
            text = text.replace(".", "").replace(",", ".")
        else:
            text = text.replace(",", "")
    elif has_comma:
        text = text.replace(",", ".", 1)

    cleaned = _NON_NUMERIC_CHARS.sub("", text)
    match = re.match(r"-?\d*\.?\d*", cleaned)
    candidate = match.group(0) if match else ""
    try:
        return float(candidate)
    except ValueError:
        return 0.0


def _safe_string(value: Any, default: str) -> str:
    if value is None:
        return default
    text = str(value).strip()
    return text if text else default


def detect_header_row(grid: Sequence[Sequence[Any]]) -> int:
    header_row_index = 0
    max_matches = 0
    for idx, row in enumerate(grid[:HEADER_SCAN_ROWS]):
        cells = [str(cell).lower() for cell in row if cell is not None]
        matches = sum(1 for cell in cells if any(keyword in cell for keyword in HEADER_KEYWORDS))
        if matches > max_matches:
            max_matches = matches
            header_row_index = idx
    if max_matches < MIN_HEADER_MATCHES:
        return 0
    return header_row_index


def find_column(headers: Sequence[str], aliases: Sequence[str]) -> int:
    """Index of the column matching the highest-priority alias, or -1."""
    normalized = [normalize_header(alias) for alias in aliases]
    for alias in normalized:
        if alias and alias in headers:
            return headers.index(alias)
    for alias in normalized:
        if not alias:
            continue
        for idx, header in enumerate(headers):
            if alias in header:
                return idx
    return -1


def detect_result_type(header: Any) -> str:
    text = str(header or "").lower()
    for result_type, keywords in RESULT_TYPE_KEYWORDS:
        if any(keyword in text for keyword in keywords):
            return result_type
    return "generic"


def _cell(row: Sequence[Any], idx: int) -> Any:
    if idx < 0 or idx >= len(row):
        return None
    return row[idx]


def records_from_grid(grid: Sequence[Sequence[Any]]) -> List[AdRecord]:
    if len(grid) < 2:
        raise ValueError("The export is empty or has no readable data rows.")

    header_row_index = detect_header_row(grid)
    raw_headers = list(grid[header_row_index])
    headers = [normalize_header(value) for value in raw_headers]
    columns = {field: find_column(headers, aliases) for field, aliases in FIELD_ALIASES.items()}

    if columns["spent"] == -1:
        raise ValueError("Could not find the 'Amount spent' column. Check that the export includes it.")

    result_type = "generic"
    if columns["results"] != -1:
        result_type = detect_result_type(raw_headers[columns["results"]])

    records: List[AdRecord] = []
    for row in grid[header_row_index + 1 :]:
        if row is None:
            continue
        ad_value = _cell(row, columns["ad"])
        campaign_value = _cell(row, columns["campaign"])
        # Total rows at the bottom of exports carry neither name.
        if ad_value in (None, "") and campaign_value in (None, ""):
            continue

        amount_spent = parse_number(_cell(row, columns["spent"]))
        if amount_spent <= 0:
            continue

        first_cell = _safe_string(_cell(row, 0), "Unknown Ad")
        records.append(
            AdRecord(
                campaign_name=_safe_string(campaign_value, "Unknown Campaign"),
                ad_set_name=_safe_string(_cell(row, columns["ad_set"]), "Unknown AdSet"),
                ad_name=_safe_string(ad_value, first_cell),
                amount_spent=amount_spent,
                impressions=parse_number(_cell(row, columns["impressions"])),
                clicks=parse_number(_cell(row, columns["clicks"])),
                ctr=parse_number(_cell(row, columns["ctr"])),
                cpc=parse_number(_cell(row, columns["cpc"])),
                results=int(round(parse_number(_cell(row, columns["results"])))),
                cost_per_result=parse_number(_cell(row, columns["cpa"])),
                roas=parse_number(_cell(row, columns["roas"])),
                result_type=result_type,
            )
        )

    if not records:
        raise ValueError("No ad with spend (Amount spent > 0) was found. Check the file and its headers.")
    return records


def _csv_width(path: Path) -> int:
    # Quoted commas over-count; extra columns stay empty.
    with path.open("rb") as handle:
        return max((line.count(b",") + 1 for line in handle), default=1)


def _read_csv_grid(path: Path) -> List[List[Any]]:
    # Title rows above the header are narrower than the table.
    schema = {f"column_{idx}": pl.Utf8 for idx in range(1, _csv_width(path) + 1)}
    frame = pl.read_csv(
        path,
        has_header=False,
        schema=schema,
        truncate_ragged_lines=True,
        encoding="utf8-lossy",
    )
    grid: List[List[Any]] = []
    for values in frame.rows():
        if all(value is None or str(value).strip() == "" for value in values):
            continue
        grid.append(list(values))
    return grid


def _read_xlsx_grid(path: Path) -> List[List[Any]]:
    load_workbook = _import_openpyxl()
    workbook = load_workbook(path, read_only=True, data_only=True)
    try:
        sheet_names = list(workbook.sheetnames)
        if not sheet_names:
            raise ValueError(f"No sheets found in {path}")
        worksheet = workbook[sheet_names[0]]
        grid: List[List[Any]] = []
        for values in worksheet.iter_rows(values_only=True):
            if values is None or all(value is None for value in values):
                continue
            grid.append(list(values))
    finally:
        workbook.close()
    return grid


def read_raw_grid(path: Path) -> List[List[Any]]:
    suffix = path.suffix.lower()
    if suffix == ".csv":
        return _read_csv_grid(path)
    if suffix in {".xlsx", ".xlsm"}:
        return _read_xlsx_grid(path)
    raise ValueError(
        f"Unsupported export format: {path.suffix or path.name}. "
        "Legacy .xls workbooks are not read; save the export as .xlsx or .csv."
    )


def read_ad_records(path: Path) -> List[AdRecord]:
    if not path.exists():
        raise ValueError(f"Input file not found: {path}")
    return records_from_grid(read_raw_grid(path))
