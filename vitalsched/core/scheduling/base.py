"""
Scheduling Layer - Base Types

Defines the data contracts shared by the summary reader, the four
scheduling policies and the report emitter.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional

from vitalsched.core.clinical.priority import PatientStatus


# All patients are considered ready at t=0; first-seen timestamps only order FCFS.
ARRIVAL_TIME = 0


class SchedulingPolicy(str, Enum):
    """
    Interchangeable scheduling policies.

    FCFS        – by first-seen timestamp
    SJF         – fewest records first
    PRIORITY    – priority class, then fewest records
    ROUND_ROBIN – fixed quantum sweeps over the input order
    """
    FCFS        = "fcfs"
    SJF         = "sjf"
    PRIORITY    = "priority"
    ROUND_ROBIN = "round_robin"


@dataclass(frozen=True)
class PatientSummary:
    """
    One row of the per-patient summary table.

    Shared read-only across every policy run; `record_count` is the burst time.
    """
    patient_id: str
    name: str
    record_count: int
    avg_heart_rate: float
    avg_systolic: float
    avg_diastolic: float
    avg_temp: float
    avg_spo2: float
    status: PatientStatus
    first_seen: str          # ISO-8601, compared lexicographically

    @property
    def burst_time(self) -> int:
        return self.record_count

    def to_dict(self) -> dict:
        return {
            "patient_id": self.patient_id,
            "patient_name": self.name,
            "entry_count": self.record_count,
            "avg_hr": self.avg_heart_rate,
            "avg_sys": self.avg_systolic,
            "avg_dia": self.avg_diastolic,
            "avg_temp": self.avg_temp,
            "avg_spo2": self.avg_spo2,
            "status": self.status.value,
            "first_timestamp": self.first_seen,
        }


@dataclass
class RowDiagnostic:
    """A rejected input row and why it was rejected."""
    row_number: int                  # 1-based data row or input position; 0 if unknown
    kind: str                        # MALFORMED_ROW | UNKNOWN_STATUS
    message: str
    field: str = ""
    patient_id: Optional[str] = None

    def to_dict(self) -> dict:
        return {
            "row_number": self.row_number,
            "kind": self.kind,
            "field": self.field,
            "patient_id": self.patient_id,
            "message": self.message,
        }


@dataclass
class ScheduleResult:
    """
    Timing metrics for one patient under one policy run.

    For run-to-completion policies `completion_time` is the end time.
    Round Robin rows additionally carry every slice executed and
    `time_executed`, the length of the final slice.
    """
    patient_id: str
    name: str
    burst_time: int
    start_time: int
    completion_time: int
    turnaround_time: int
    waiting_time: int
    priority_class: Optional[int] = None
    time_executed: Optional[int] = None
    remaining: int = 0
    slices: List[int] = field(default_factory=list)

    @property
    def end_time(self) -> int:
        return self.completion_time

    def to_dict(self) -> dict:
        data = {
            "patient_id": self.patient_id,
            "name": self.name,
            "burst_time": self.burst_time,
            "start_time": self.start_time,
            "end_time": self.completion_time,
            "turnaround_time": self.turnaround_time,
            "waiting_time": self.waiting_time,
        }
        if self.priority_class is not None:
            data["priority_class"] = self.priority_class
        if self.time_executed is not None:
            data["completion_time"] = self.completion_time
            data["time_executed"] = self.time_executed
            data["remaining"] = self.remaining
            data["slices"] = list(self.slices)
        return data


@dataclass
class ScheduleRun:
    """Output of one policy over one input snapshot."""
    policy: SchedulingPolicy
    results: List[ScheduleResult] = field(default_factory=list)
    diagnostics: List[RowDiagnostic] = field(default_factory=list)
    quantum: Optional[int] = None

    @property
    def is_empty(self) -> bool:
        return not self.results

    def to_dict(self) -> dict:
        return {
            "policy": self.policy.value,
            "quantum": self.quantum,
            "results": [r.to_dict() for r in self.results],
            "diagnostics": [d.to_dict() for d in self.diagnostics],
        }
