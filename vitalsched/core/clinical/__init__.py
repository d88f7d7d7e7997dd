"""
Clinical Classification Layer

Usage:
    from vitalsched.core.clinical import classify, PriorityClass

    classify("WARNING", avg_heart_rate=140, avg_systolic=120,
             avg_diastolic=80, avg_spo2=98)   # PriorityClass.CRITICAL
"""
from .priority import (
    PatientStatus,
    PriorityClass,
    classify,
    classify_patient,
    derive_status,
)

__all__ = [
    "PatientStatus",
    "PriorityClass",
    "classify",
    "classify_patient",
    "derive_status",
]
