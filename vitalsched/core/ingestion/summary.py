"""
Patient Summary Reader

Loads the per-patient summary table (one row per patient) that feeds the
scheduling engine. Bad rows are rejected individually and reported as
RowDiagnostics; only table-level problems raise.
"""
import csv
import io
import math
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, List, Set, Union

from vitalsched.core.clinical.priority import PatientStatus
from vitalsched.core.scheduling.base import PatientSummary, RowDiagnostic
from vitalsched.utils import get_logger, IngestionError, MalformedRowError

logger = get_logger(__name__)

SUMMARY_COLUMNS = [
    "patient_id",
    "patient_name",
    "entry_count",
    "avg_hr",
    "avg_sys",
    "avg_dia",
    "avg_temp",
    "avg_spo2",
    "status",
    "first_timestamp",
]

_VITAL_FIELDS = {
    "avg_hr": "avg_heart_rate",
    "avg_sys": "avg_systolic",
    "avg_dia": "avg_diastolic",
    "avg_temp": "avg_temp",
    "avg_spo2": "avg_spo2",
}


@dataclass
class SummaryTable:
    """Valid patients in input order plus diagnostics for rejected rows."""
    patients: List[PatientSummary] = field(default_factory=list)
    diagnostics: List[RowDiagnostic] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not self.patients


def _text(value) -> str:
    return "" if value is None else str(value).strip()


def _parse_decimal(raw: str, column: str, row_number: int) -> float:
    if raw == "":
        raise MalformedRowError(f"missing value for {column}", row_number=row_number, field=column)
    try:
        value = float(raw)
    except ValueError:
        raise MalformedRowError(
            f"{column} is not numeric: {raw!r}", row_number=row_number, field=column
        ) from None
    if not math.isfinite(value):
        raise MalformedRowError(
            f"{column} is not a finite number: {raw!r}", row_number=row_number, field=column
        )
    return value


def _parse_entry_count(raw: str, row_number: int) -> int:
    value = _parse_decimal(raw, "entry_count", row_number)
    if not value.is_integer() or value < 1:
        raise MalformedRowError(
            f"entry_count must be a positive integer, got {raw!r}",
            row_number=row_number,
            field="entry_count",
        )
    return int(value)


def parse_row(row: dict, row_number: int) -> PatientSummary:
    """
    Build a PatientSummary from one raw row.

    Raises:
        MalformedRowError: missing/non-numeric field, entry_count < 1,
            or a status outside NORMAL/WARNING (kind UNKNOWN_STATUS).
    """
    patient_id = _text(row.get("patient_id"))
    if not patient_id:
        raise MalformedRowError("missing patient_id", row_number=row_number, field="patient_id")

    record_count = _parse_entry_count(_text(row.get("entry_count")), row_number)
    vitals = {
        attr: _parse_decimal(_text(row.get(column)), column, row_number)
        for column, attr in _VITAL_FIELDS.items()
    }

    raw_status = _text(row.get("status"))
    try:
        status = PatientStatus(raw_status)
    except ValueError:
        raise MalformedRowError(
            f"status must be NORMAL or WARNING, got {raw_status!r}",
            row_number=row_number,
            field="status",
            kind="UNKNOWN_STATUS",
        ) from None

    return PatientSummary(
        patient_id=patient_id,
        name=_text(row.get("patient_name")),
        record_count=record_count,
        status=status,
        first_seen=_text(row.get("first_timestamp")),
        **vitals,
    )


def _read_table(lines: Iterable[str], origin: str) -> SummaryTable:
    reader = csv.reader(lines)
    header = next(reader, None)
    if header is None:
        raise IngestionError(f"Summary table is empty: {origin}", source="summary")

    # Spreadsheet exports may prefix the header with a byte-order mark
    columns = [c.strip().lstrip("\ufeff") for c in header]
    missing = [c for c in SUMMARY_COLUMNS if c not in columns]
    if missing:
        raise IngestionError(
            f"Summary table is missing columns: {', '.join(missing)}",
            source="summary",
            details={"origin": origin, "missing_columns": missing},
        )

    table = SummaryTable()
    seen: Set[str] = set()
    row_number = 0

    for fields in reader:
        if not any(f.strip() for f in fields):
            continue
        row_number += 1
        row = dict(zip(columns, fields))
        try:
            if len(fields) != len(columns):
                raise MalformedRowError(
                    f"wrong number of fields ({len(fields)}, expected {len(columns)})",
                    row_number=row_number,
                )
            patient = parse_row(row, row_number)
            if patient.patient_id in seen:
                raise MalformedRowError(
                    f"duplicate patient_id {patient.patient_id!r}",
                    row_number=row_number,
                    field="patient_id",
                )
        except MalformedRowError as e:
            table.diagnostics.append(RowDiagnostic(
                row_number=e.row_number,
                kind=e.kind,
                field=e.field,
                message=e.message,
                patient_id=_text(row.get("patient_id")) or None,
            ))
            continue
        seen.add(patient.patient_id)
        table.patients.append(patient)

    for diag in table.diagnostics:
        logger.warning(f"Rejected summary row {diag.row_number} ({diag.kind}): {diag.message}")
    logger.info(
        f"Loaded summary table {origin}: {len(table.patients)} patient(s), "
        f"{len(table.diagnostics)} rejected row(s)"
    )
    return table


def parse_summary(text: str) -> SummaryTable:
    """Parse summary-table CSV text (header row first)."""
    return _read_table(io.StringIO(text), "<text>")


def read_summary(path: Union[str, Path]) -> SummaryTable:
    """
    Load the summary table from disk.

    Raises:
        IngestionError: the file is missing, unreadable or lacks a
            required header column.
    """
    path = Path(path)
    if not path.exists():
        raise IngestionError(f"Summary file not found: {path}", source="summary")

    try:
        with open(path, newline="", encoding="utf-8-sig") as f:
            return _read_table(f, path.name)
    except (OSError, UnicodeDecodeError, csv.Error) as e:
        raise IngestionError(
            f"Failed to read summary table: {e}",
            source="summary",
            details={"filepath": str(path)},
        ) from e
