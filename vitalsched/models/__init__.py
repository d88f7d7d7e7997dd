from .schedule import (
    PatientRow,
    ScheduleRequest,
    CsvScheduleRequest,
    ScheduleResponse,
    ClassifyRequest,
    ClassifyResponse,
    PolicyInfo,
    HealthResponse,
)

__all__ = [
    "PatientRow",
    "ScheduleRequest",
    "CsvScheduleRequest",
    "ScheduleResponse",
    "ClassifyRequest",
    "ClassifyResponse",
    "PolicyInfo",
    "HealthResponse",
]
