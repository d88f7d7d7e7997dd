"""
Raw Vitals Aggregation

Turns the raw per-reading vitals CSV into the per-patient summary table,
and runs the basic data-quality checks (missing values, duplicate
readings) on the raw file.
"""
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Tuple, Union

import pandas as pd

from vitalsched.core.clinical.priority import derive_status
from vitalsched.core.scheduling.base import PatientSummary
from vitalsched.utils import get_logger, IngestionError
from .summary import SUMMARY_COLUMNS

logger = get_logger(__name__)

# Columns are positional in the raw export; header names vary between devices.
RAW_COLUMNS = [
    "patient_id",
    "patient_name",
    "heart_rate",
    "systolic",
    "diastolic",
    "temperature",
    "spo2",
    "timestamp",
]
VITAL_COLUMNS = ["heart_rate", "systolic", "diastolic", "temperature", "spo2"]


@dataclass
class DataQualityReport:
    """Findings from check_data_quality()."""
    total_rows: int = 0
    missing_values: Dict[str, int] = field(default_factory=dict)
    duplicates: List[Tuple[str, str]] = field(default_factory=list)   # (patient_id, timestamp)

    @property
    def is_clean(self) -> bool:
        return not self.duplicates and not any(self.missing_values.values())

    def to_dict(self) -> dict:
        return {
            "total_rows": self.total_rows,
            "missing_values": dict(self.missing_values),
            "duplicates": [
                {"patient_id": pid, "timestamp": ts} for pid, ts in self.duplicates
            ],
        }


def load_vitals(filepath: Union[str, Path]) -> pd.DataFrame:
    """
    Load a raw vitals CSV with positional column names applied.

    Raises:
        IngestionError: file missing, unparsable, or with fewer than
            eight columns.
    """
    path = Path(filepath)
    if not path.exists():
        raise IngestionError(f"Vitals dataset not found: {filepath}", source="vitals")

    try:
        df = pd.read_csv(path, dtype=str, keep_default_na=False)
    except (pd.errors.EmptyDataError, pd.errors.ParserError, UnicodeDecodeError) as e:
        raise IngestionError(
            f"Failed to load vitals dataset: {e}",
            source="vitals",
            details={"filepath": str(filepath)},
        ) from e

    return normalise_vitals(df)


def normalise_vitals(df: pd.DataFrame) -> pd.DataFrame:
    """Rename columns positionally and strip surrounding whitespace."""
    if df.shape[1] < len(RAW_COLUMNS):
        raise IngestionError(
            f"Vitals dataset needs {len(RAW_COLUMNS)} columns, found {df.shape[1]}",
            source="vitals",
            details={"columns": [str(c) for c in df.columns]},
        )

    df = df.iloc[:, :len(RAW_COLUMNS)].copy()
    df.columns = RAW_COLUMNS
    for col in RAW_COLUMNS:
        df[col] = df[col].astype(str).str.strip()
    logger.info(f"Loaded vitals dataset: {len(df)} rows")
    return df


def check_data_quality(df: pd.DataFrame) -> DataQualityReport:
    """
    Count missing values per column and list duplicate readings.

    A duplicate is a repeated (patient_id, timestamp) pair; each pair is
    reported once.
    """
    missing = (df.isna() | (df.astype(str).apply(lambda s: s.str.strip()) == "")).sum()
    dup_mask = df.duplicated(subset=["patient_id", "timestamp"], keep="first")
    dups = df.loc[dup_mask, ["patient_id", "timestamp"]].drop_duplicates()

    report = DataQualityReport(
        total_rows=len(df),
        missing_values={str(col): int(missing[col]) for col in df.columns},
        duplicates=[(str(pid), str(ts)) for pid, ts in dups.itertuples(index=False)],
    )
    if not report.is_clean:
        logger.warning(
            f"Data quality: {sum(report.missing_values.values())} missing value(s), "
            f"{len(report.duplicates)} duplicate reading(s)"
        )
    return report


def aggregate_vitals(df: pd.DataFrame) -> List[PatientSummary]:
    """
    Collapse readings into one PatientSummary per patient.

    Patients appear in order of their first reading. Rows without a
    patient id or with non-numeric vitals are dropped.
    """
    data = df.copy()
    for col in VITAL_COLUMNS:
        data[col] = pd.to_numeric(data[col], errors="coerce")

    valid = (data["patient_id"].astype(str).str.len() > 0) & data[VITAL_COLUMNS].notna().all(axis=1)
    dropped = int((~valid).sum())
    if dropped:
        logger.warning(f"Dropping {dropped} vitals row(s) with missing id or non-numeric vitals")
    data = data[valid]

    if data.empty:
        return []

    grouped = data.groupby("patient_id", sort=False).agg(
        patient_name=("patient_name", "first"),
        entry_count=("heart_rate", "size"),
        avg_hr=("heart_rate", "mean"),
        avg_sys=("systolic", "mean"),
        avg_dia=("diastolic", "mean"),
        avg_temp=("temperature", "mean"),
        avg_spo2=("spo2", "mean"),
        first_timestamp=("timestamp", "min"),
    )

    patients: List[PatientSummary] = []
    for patient_id, row in grouped.iterrows():
        patients.append(PatientSummary(
            patient_id=str(patient_id),
            name=str(row["patient_name"]),
            record_count=int(row["entry_count"]),
            avg_heart_rate=float(row["avg_hr"]),
            avg_systolic=float(row["avg_sys"]),
            avg_diastolic=float(row["avg_dia"]),
            avg_temp=float(row["avg_temp"]),
            avg_spo2=float(row["avg_spo2"]),
            status=derive_status(row["avg_hr"], row["avg_sys"], row["avg_dia"], row["avg_spo2"]),
            first_seen=str(row["first_timestamp"]),
        ))

    logger.info(
        f"Aggregated {len(data)} reading(s) into {len(patients)} patient summar"
        f"{'y' if len(patients) == 1 else 'ies'}"
    )
    return patients


def summary_frame(patients: List[PatientSummary]) -> pd.DataFrame:
    """Summary table as a DataFrame in the on-disk column order."""
    return pd.DataFrame([p.to_dict() for p in patients], columns=SUMMARY_COLUMNS)


def write_summary(patients: List[PatientSummary], path: Union[str, Path]) -> Path:
    """Write the machine-readable summary table with two-decimal vitals."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    summary_frame(patients).to_csv(path, index=False, float_format="%.2f")
    logger.info(f"Wrote patient summary for {len(patients)} patient(s) to {path}")
    return path
