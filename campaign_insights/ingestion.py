"""Campaign table ingestion/output helpers with Polars-first and openpyxl fallback."""

from __future__ import annotations

import math
from pathlib import Path
from typing import Any, Dict, List, Sequence

import polars as pl

CSV_SUFFIXES: tuple[str, ...] = (".csv", ".txt")
TSV_SUFFIXES: tuple[str, ...] = (".tsv",)
EXCEL_SUFFIXES: tuple[str, ...] = (".xlsx", ".xlsm")


def _import_openpyxl() -> tuple[Any, Any]:
    try:
        from openpyxl import Workbook, load_workbook
    except Exception as exc:  # pragma: no cover
        raise RuntimeError("openpyxl is required for Excel fallback I/O.") from exc
    return Workbook, load_workbook


def _normalize_headers(raw_headers: Sequence[Any]) -> list[str]:
    """Trim header cells, name blank ones by position and suffix repeats (_2, _3, ...)."""
    headers: list[str] = []
    occurrences: dict[str, int] = {}
    for position, cell in enumerate(raw_headers, start=1):
        label = "" if cell is None else str(cell).strip()
        label = label or f"column_{position}"
        occurrences[label] = occurrences.get(label, 0) + 1
        headers.append(label if occurrences[label] == 1 else f"{label}_{occurrences[label]}")
    return headers


def _is_blank_row(row: Dict[str, Any]) -> bool:
    return all(value is None or (isinstance(value, str) and value.strip() == "") for value in row.values())


def _rows_from_grid(header_row: Sequence[Any], value_rows: Sequence[Sequence[Any]]) -> List[Dict[str, Any]]:
    headers = _normalize_headers(header_row)
    records: List[Dict[str, Any]] = []
    for values in value_rows:
        if values is None:
            continue
        row_data = {name: values[idx] if idx < len(values) else None for idx, name in enumerate(headers)}
        if _is_blank_row(row_data):
            continue
        records.append(row_data)
    return records


def _read_delimited(path: Path, separator: str) -> List[Dict[str, Any]]:
    # Every cell stays text; numeric coercion happens in the domain layer.
    try:
        frame = pl.read_csv(
            path,
            separator=separator,
            has_header=False,
            infer_schema_length=0,
            truncate_ragged_lines=True,
        )
    except pl.exceptions.NoDataError:
        return []
    if frame.is_empty():
        return []
    grid = frame.rows()
    return _rows_from_grid(grid[0], grid[1:])


def _cell_text(value: Any) -> str | None:
    if value is None:
        return None
    return value if isinstance(value, str) else str(value)


def _read_excel_polars(path: Path, sheet_name: str | None) -> List[Dict[str, Any]]:
    if not hasattr(pl, "read_excel"):
        raise RuntimeError("polars.read_excel is not available in this environment.")
    # Same text-only policy as the delimited reader.
    kwargs: Dict[str, Any] = {"infer_schema_length": 0}
    if sheet_name:
        kwargs["sheet_name"] = sheet_name
    frame = pl.read_excel(path, **kwargs)  # type: ignore[arg-type]
    if isinstance(frame, dict):
        frame = next(iter(frame.values()), pl.DataFrame())
    text_rows = [[_cell_text(value) for value in values] for values in frame.rows()]
    return _rows_from_grid(frame.columns, text_rows)


def _read_excel_openpyxl(path: Path, sheet_name: str | None) -> List[Dict[str, Any]]:
    _, load_workbook = _import_openpyxl()
    workbook = load_workbook(path, read_only=True, data_only=True)
    try:
        target = sheet_name if sheet_name in workbook.sheetnames else workbook.sheetnames[0]
        row_iter = workbook[target].iter_rows(values_only=True)
        header_row = next(row_iter, None)
        if header_row is None:
            return []
        text_rows = [[_cell_text(value) for value in values] for values in row_iter]
        return _rows_from_grid(header_row, text_rows)
    finally:
        workbook.close()


def read_campaign_rows(path: str | Path, sheet_name: str | None = None) -> List[Dict[str, Any]]:
    """Read a campaign table into ordered flat records keyed by the header row."""
    table_path = Path(path)
    if not table_path.exists():
        raise FileNotFoundError(f"Input file not found: {table_path}")

    suffix = table_path.suffix.lower()
    if suffix in CSV_SUFFIXES:
        return _read_delimited(table_path, ",")
    if suffix in TSV_SUFFIXES:
        return _read_delimited(table_path, "\t")
    if suffix in EXCEL_SUFFIXES:
        try:
            return _read_excel_polars(table_path, sheet_name)
        except Exception:
            return _read_excel_openpyxl(table_path, sheet_name)
    raise ValueError(f"Unsupported input file type: {table_path.suffix or table_path.name}")


def _sheet_cell(value: Any) -> Any:
    # openpyxl cannot store NaN or inf; leave those cells empty.
    if isinstance(value, float) and not math.isfinite(value):
        return None
    return value


def _write_with_polars(path: Path, sheets: Dict[str, pl.DataFrame]) -> bool:
    if not sheets:
        return False
    try:
        from xlsxwriter import Workbook
    except Exception:
        return False

    try:
        with Workbook(str(path)) as workbook:
            for sheet_name, frame in sheets.items():
                frame.write_excel(workbook=workbook, worksheet=str(sheet_name)[:31])
        return True
    except Exception:
        return False


def _write_with_openpyxl(path: Path, sheets: Dict[str, pl.DataFrame]) -> None:
    Workbook, _ = _import_openpyxl()
    workbook = Workbook()
    workbook.remove(workbook.active)
    for sheet_name, frame in sheets.items():
        worksheet = workbook.create_sheet(title=str(sheet_name)[:31])
        worksheet.append(frame.columns)
        for values in frame.iter_rows():
            worksheet.append([_sheet_cell(value) for value in values])
    workbook.save(path)


def write_output_excel(path: str | Path, sheets: Dict[str, pl.DataFrame]) -> None:
    """Write one worksheet per frame through xlsxwriter, else through openpyxl."""
    excel_path = Path(path)
    excel_path.parent.mkdir(parents=True, exist_ok=True)
    if not _write_with_polars(excel_path, sheets):
        _write_with_openpyxl(excel_path, sheets)
