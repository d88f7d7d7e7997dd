"""
Scheduling Layer

Simulates FCFS, SJF, Priority and Round Robin scheduling over the
per-patient summary table, with record count as the burst time.

Usage:
    from vitalsched.core.scheduling import SchedulingEngine

    runs = SchedulingEngine().run_all(patients)
"""
from .base import (
    ARRIVAL_TIME,
    PatientStatus,
    PatientSummary,
    RowDiagnostic,
    ScheduleResult,
    ScheduleRun,
    SchedulingPolicy,
)
from .engine import SchedulingEngine, admit_patients
from .policies import (
    TIME_QUANTUM,
    run_to_completion,
    schedule_fcfs,
    schedule_priority,
    schedule_round_robin,
    schedule_sjf,
)

__all__ = [
    "ARRIVAL_TIME",
    "TIME_QUANTUM",
    "PatientStatus",
    "PatientSummary",
    "RowDiagnostic",
    "ScheduleResult",
    "ScheduleRun",
    "SchedulingPolicy",
    "SchedulingEngine",
    "admit_patients",
    "run_to_completion",
    "schedule_fcfs",
    "schedule_sjf",
    "schedule_priority",
    "schedule_round_robin",
]
