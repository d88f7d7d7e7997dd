"""
Priority Classification Rules

Maps a patient's derived status and average vitals onto a numeric
priority class for the Priority scheduling policy, and derives that
status from averaged vitals in the first place.

Class ordering (lower = seen first):
    1. CRITICAL  - WARNING with dangerous vitals
    2. URGENT    - WARNING
    3. ROUTINE   - NORMAL
"""
from __future__ import annotations

from enum import Enum, IntEnum
from typing import TYPE_CHECKING, Union

if TYPE_CHECKING:
    from vitalsched.core.scheduling.base import PatientSummary

# ── Escalation thresholds (WARNING → CRITICAL) ───────────────────────────────
SPO2_CRITICAL  = 92     # %    below
SBP_CRITICAL   = 160    # mmHg above
DBP_CRITICAL   = 100    # mmHg above
HR_CRITICAL    = 130    # bpm  above

# ── Status thresholds (NORMAL ranges) ────────────────────────────────────────
HR_LOW,  HR_HIGH  = 60, 100
SBP_LOW, SBP_HIGH = 90, 140
DBP_LOW, DBP_HIGH = 60, 90
SPO2_LOW          = 95


class PatientStatus(str, Enum):
    """Derived vitals status from the aggregator."""
    NORMAL  = "NORMAL"
    WARNING = "WARNING"


class PriorityClass(IntEnum):
    CRITICAL = 1
    URGENT   = 2
    ROUTINE  = 3


def classify(
    status: Union[PatientStatus, str],
    avg_heart_rate: float,
    avg_systolic: float,
    avg_diastolic: float,
    avg_spo2: float,
) -> PriorityClass:
    """
    Derive the priority class for one patient.

    Anything other than WARNING is ROUTINE regardless of vitals.
    """
    if status != PatientStatus.WARNING:
        return PriorityClass.ROUTINE

    if (
        avg_spo2 < SPO2_CRITICAL
        or avg_systolic > SBP_CRITICAL
        or avg_diastolic > DBP_CRITICAL
        or avg_heart_rate > HR_CRITICAL
    ):
        return PriorityClass.CRITICAL
    return PriorityClass.URGENT


def classify_patient(patient: "PatientSummary") -> PriorityClass:
    return classify(
        patient.status,
        patient.avg_heart_rate,
        patient.avg_systolic,
        patient.avg_diastolic,
        patient.avg_spo2,
    )


def derive_status(
    avg_heart_rate: float,
    avg_systolic: float,
    avg_diastolic: float,
    avg_spo2: float,
) -> PatientStatus:
    """WARNING when any averaged vital leaves its normal range."""
    out_of_range = (
        avg_heart_rate > HR_HIGH or avg_heart_rate < HR_LOW
        or avg_systolic > SBP_HIGH or avg_systolic < SBP_LOW
        or avg_diastolic > DBP_HIGH or avg_diastolic < DBP_LOW
        or avg_spo2 < SPO2_LOW
    )
    return PatientStatus.WARNING if out_of_range else PatientStatus.NORMAL
