"""
API request/response models for the scheduling endpoints.
"""
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field

from vitalsched.core.clinical.priority import PatientStatus
from vitalsched.core.scheduling.base import PatientSummary


class PatientRow(BaseModel):
    """One summary-table row, using the CSV column names."""
    patient_id: str
    patient_name: str = ""
    entry_count: int = Field(..., description="Number of readings; used as burst time")
    avg_hr: float
    avg_sys: float
    avg_dia: float
    avg_temp: float = 0.0
    avg_spo2: float
    status: str = Field(..., description="NORMAL or WARNING")
    first_timestamp: str = ""

    def to_summary(self) -> PatientSummary:
        # Unknown statuses pass through so the engine can report them as diagnostics
        try:
            status: Any = PatientStatus(self.status.strip())
        except ValueError:
            status = self.status
        return PatientSummary(
            patient_id=self.patient_id,
            name=self.patient_name,
            record_count=self.entry_count,
            avg_heart_rate=self.avg_hr,
            avg_systolic=self.avg_sys,
            avg_diastolic=self.avg_dia,
            avg_temp=self.avg_temp,
            avg_spo2=self.avg_spo2,
            status=status,
            first_seen=self.first_timestamp,
        )


class ScheduleRequest(BaseModel):
    """Schedule patients supplied as JSON rows."""
    patients: List[PatientRow] = Field(default_factory=list)
    policies: Optional[List[str]] = None
    parallel: bool = False


class CsvScheduleRequest(BaseModel):
    """Schedule patients supplied as summary-table CSV text."""
    csv: str
    policies: Optional[List[str]] = None
    parallel: bool = False


class ScheduleResponse(BaseModel):
    runs: List[Dict[str, Any]]
    summaries: List[Dict[str, Any]]
    diagnostics: List[Dict[str, Any]]
    patient_count: int


class ClassifyRequest(BaseModel):
    status: str
    avg_hr: float
    avg_sys: float
    avg_dia: float
    avg_spo2: float


class ClassifyResponse(BaseModel):
    priority_class: int
    label: str


class PolicyInfo(BaseModel):
    name: str
    preemptive: bool
    quantum: Optional[int] = None


class HealthResponse(BaseModel):
    status: str
    version: str
    timestamp: str
    uptime_seconds: float = 0.0
