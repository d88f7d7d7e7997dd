"""
Report Generation Module

Generates plain-text reports:
- Daily Summary: per-patient vitals averages and high-risk patients
- Scheduling Report: FCFS / SJF / Priority / Round Robin timing tables
"""
from .text_report import ScheduleReportGenerator, VitalsReportGenerator, TextReport, write_report

__all__ = [
    "ScheduleReportGenerator",
    "VitalsReportGenerator",
    "TextReport",
    "write_report",
]
