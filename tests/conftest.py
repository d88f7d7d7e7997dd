"""
Pytest Configuration and Fixtures

Shared fixtures for vitals scheduling tests.
"""
import pytest
from pathlib import Path
from typing import Callable, List
import sys

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from vitalsched.core.scheduling import PatientStatus, PatientSummary


def _patient(
    patient_id: str,
    record_count: int,
    status: PatientStatus = PatientStatus.NORMAL,
    first_seen: str = "2025-01-01T08:00:00",
    name: str = "",
    hr: float = 75.0,
    sys_bp: float = 120.0,
    dia_bp: float = 80.0,
    temp: float = 36.8,
    spo2: float = 98.0,
) -> PatientSummary:
    return PatientSummary(
        patient_id=patient_id,
        name=name or f"Patient {patient_id}",
        record_count=record_count,
        avg_heart_rate=hr,
        avg_systolic=sys_bp,
        avg_diastolic=dia_bp,
        avg_temp=temp,
        avg_spo2=spo2,
        status=status,
        first_seen=first_seen,
    )


@pytest.fixture
def make_patient() -> Callable[..., PatientSummary]:
    """Factory for PatientSummary rows with normal vitals by default."""
    return _patient


@pytest.fixture
def ward_patients() -> List[PatientSummary]:
    """Four patients with distinct arrivals, bursts and urgency."""
    return [
        _patient("P001", 3, first_seen="2025-01-01T09:00:00", name="Alice"),
        _patient("P002", 5, PatientStatus.WARNING, first_seen="2025-01-01T08:00:00",
                 name="Bob", hr=110),
        _patient("P003", 1, first_seen="2025-01-01T10:00:00", name="Carol"),
        _patient("P004", 4, PatientStatus.WARNING, first_seen="2025-01-01T08:30:00",
                 name="Dan", spo2=90),
    ]


@pytest.fixture
def summary_csv_text() -> str:
    """Summary table text with one bad row of each kind."""
    return (
        "patient_id,patient_name,entry_count,avg_hr,avg_sys,avg_dia,avg_temp,avg_spo2,status,first_timestamp\n"
        "P001,Alice,3,75.00,120.00,80.00,36.80,98.00,NORMAL,2025-01-01T09:00:00\n"
        "P002,Bob,5,110.50,135.00,85.00,37.10,96.00,WARNING,2025-01-01T08:00:00\n"
        "P003,Carol,0,70.00,118.00,76.00,36.60,99.00,NORMAL,2025-01-01T10:00:00\n"
        "P004,Dan,4,abc,120.00,80.00,36.80,90.00,WARNING,2025-01-01T08:30:00\n"
        "P005,Eve,2,80.00,125.00,82.00,36.90,97.00,CRITICAL,2025-01-01T11:00:00\n"
    )


@pytest.fixture
def vitals_csv(tmp_path: Path) -> Path:
    """Raw vitals export with two patients and one duplicate reading."""
    path = tmp_path / "patient_vitals.csv"
    path.write_text(
        "patient_id,name,heart_rate,bp_systolic,bp_diastolic,temperature,spo2,timestamp\n"
        "P001,Alice,72,118,78,36.7,98,2025-01-01T09:00:00\n"
        "P002,Bob,120,150,95,37.5,91,2025-01-01T08:00:00\n"
        "P001,Alice,78,122,82,36.9,97,2025-01-01T09:30:00\n"
        "P002,Bob,124,154,97,37.7,92,2025-01-01T08:15:00\n"
        "P002,Bob,124,154,97,37.7,92,2025-01-01T08:15:00\n"
    )
    return path
