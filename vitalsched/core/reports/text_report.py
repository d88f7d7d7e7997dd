"""
Text Report Generator

Renders vitals summaries and scheduling runs as fixed-width plain-text
reports:
- Daily Summary: per-patient averages plus a high-risk section
- Scheduling Report: one table per policy with timing averages
"""
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import List, Optional, Sequence, Union

from vitalsched.core.clinical.priority import PatientStatus
from vitalsched.core.scheduling.base import (
    PatientSummary,
    RowDiagnostic,
    SchedulingPolicy,
    ScheduleRun,
)
from vitalsched.core.scheduling.engine import SchedulingEngine
from vitalsched.utils import get_logger, ReportGenerationError

logger = get_logger(__name__)

POLICY_TITLES = {
    SchedulingPolicy.FCFS: "FCFS Scheduling (Patients in order of first arrival)",
    SchedulingPolicy.SJF: "SJF Scheduling (Patients with fewest records first)",
    SchedulingPolicy.PRIORITY: "Priority Scheduling (Urgent patients first)",
    SchedulingPolicy.ROUND_ROBIN: "Round Robin Scheduling (Time Quantum = {quantum} records)",
}

_RUN_HEADER = (
    "Patient ID | Name           | Burst (records) | Start | End | Turnaround | Waiting",
    "-----------+----------------+-----------------+-------+-----+------------+--------",
)
_PRIORITY_HEADER = (
    "Patient ID | Name           | Priority | Burst (records) | Start | End | Turnaround | Waiting",
    "-----------+----------------+----------+-----------------+-------+-----+------------+--------",
)
_RR_HEADER = (
    "Patient ID | Name           | Remaining | Time Executed | Completion | Turnaround | Waiting",
    "-----------+----------------+-----------+--------------+-----------+-----------+--------",
)


@dataclass
class TextReport:
    """Data container for a rendered report."""
    report_type: str
    generated_at: datetime
    content: str
    path: Optional[Path] = None


def _table_for(run: ScheduleRun) -> List[str]:
    lines: List[str] = []
    if run.policy == SchedulingPolicy.ROUND_ROBIN:
        lines.extend(_RR_HEADER)
        for r in run.results:
            lines.append("%11s | %-14s | %9s | %12s | %9s | %9s | %6s" % (
                r.patient_id, r.name, r.remaining, r.time_executed,
                r.completion_time, r.turnaround_time, r.waiting_time,
            ))
    elif run.policy == SchedulingPolicy.PRIORITY:
        lines.extend(_PRIORITY_HEADER)
        for r in run.results:
            lines.append("%11s | %-14s | %8s | %15s | %5s | %3s | %10s | %6s" % (
                r.patient_id, r.name, r.priority_class, r.burst_time,
                r.start_time, r.end_time, r.turnaround_time, r.waiting_time,
            ))
    else:
        lines.extend(_RUN_HEADER)
        for r in run.results:
            lines.append("%11s | %-14s | %15s | %5s | %3s | %10s | %6s" % (
                r.patient_id, r.name, r.burst_time,
                r.start_time, r.end_time, r.turnaround_time, r.waiting_time,
            ))
    return lines


class ScheduleReportGenerator:
    """Writes scheduling_report_YYYYMMDD.txt."""

    def __init__(self, output_dir: Union[str, Path] = "reports"):
        self.output_dir = Path(output_dir)

    def render(
        self,
        runs: Sequence[ScheduleRun],
        generated_at: Optional[datetime] = None,
        diagnostics: Optional[Sequence[RowDiagnostic]] = None,
    ) -> str:
        """
        Render every run in order.

        `diagnostics` defaults to the rows the engine skipped; callers that
        read a summary file pass the reader's diagnostics as well.
        """
        generated_at = generated_at or datetime.now()
        lines = [
            f"HEALTH MONITORING SCHEDULING REPORT - {generated_at:%Y-%m-%d}",
            "====================================================",
        ]

        for run in runs:
            title = POLICY_TITLES[run.policy].format(quantum=run.quantum)
            lines.append("")
            lines.append(f"=== {title} ===")
            lines.extend(_table_for(run))
            if run.is_empty:
                lines.append("(no patients to schedule)")
            stats = SchedulingEngine.summarise(run)
            lines.append(
                f"Average waiting: {stats['avg_waiting_time']:.2f} | "
                f"Average turnaround: {stats['avg_turnaround_time']:.2f} | "
                f"Makespan: {stats['makespan']}"
            )

        if diagnostics is None:
            diagnostics = runs[0].diagnostics if runs else []
        if diagnostics:
            lines.append("")
            lines.append("=== Skipped Patients ===")
            for d in diagnostics:
                lines.append(f"row {d.row_number} [{d.kind}] {d.patient_id or '-'}: {d.message}")

        return "\n".join(lines) + "\n"

    def generate(
        self,
        runs: Sequence[ScheduleRun],
        diagnostics: Optional[Sequence[RowDiagnostic]] = None,
    ) -> TextReport:
        generated_at = datetime.now()
        content = self.render(runs, generated_at, diagnostics)
        path = self.output_dir / f"scheduling_report_{generated_at:%Y%m%d}.txt"
        write_report(path, content, "scheduling")
        return TextReport("scheduling", generated_at, content, path)


class VitalsReportGenerator:
    """Writes daily_summary_YYYYMMDD.txt."""

    def __init__(self, output_dir: Union[str, Path] = "reports"):
        self.output_dir = Path(output_dir)

    def render(self, patients: Sequence[PatientSummary], generated_at: Optional[datetime] = None) -> str:
        generated_at = generated_at or datetime.now()
        lines = [
            f"DAILY PATIENT VITALS SUMMARY - {generated_at:%Y-%m-%d}",
            "==========================================",
            "",
            "AVERAGE VITALS BY PATIENT",
            "-----------------------",
            "%-10s %-20s %-12s %-12s %-10s %-10s %-10s" % (
                "Patient ID", "Name", "Avg HR", "Avg BP", "Avg Temp", "Avg SpO2", "Status"
            ),
            "-" * 80,
        ]
        for p in patients:
            bp = f"{int(p.avg_systolic)}/{int(p.avg_diastolic)}"
            lines.append("%-10s %-20s %-12.1f %-12s %-10.1f %-10.1f %-10s" % (
                p.patient_id, p.name, p.avg_heart_rate, bp, p.avg_temp, p.avg_spo2, p.status.value
            ))

        lines.extend(["", "HIGH-RISK PATIENTS", "------------------"])
        high_risk = [p for p in patients if p.status == PatientStatus.WARNING]
        if not high_risk:
            lines.append("No high-risk patients detected.")
        for p in high_risk:
            lines.append(
                f"Patient ID: {p.patient_id}, Name: {p.name}, Avg HR: {p.avg_heart_rate:.2f}, "
                f"Avg BP: {p.avg_systolic:.2f}/{p.avg_diastolic:.2f}, Avg Temp: {p.avg_temp:.2f}, "
                f"Avg SpO2: {p.avg_spo2:.2f} (Status: {p.status.value})"
            )

        return "\n".join(lines) + "\n"

    def generate(self, patients: Sequence[PatientSummary]) -> TextReport:
        generated_at = datetime.now()
        content = self.render(patients, generated_at)
        path = self.output_dir / f"daily_summary_{generated_at:%Y%m%d}.txt"
        write_report(path, content, "daily_summary")
        return TextReport("daily_summary", generated_at, content, path)


def write_report(path: Path, content: str, report_type: str) -> None:
    """Write report text to disk, wrapping OSError in ReportGenerationError."""
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
    except OSError as e:
        raise ReportGenerationError(
            f"Failed to write report: {e}",
            report_type=report_type,
            details={"path": str(path)},
        ) from e
    logger.info(f"{report_type} report written to {path}")
