"""
Scheduling Policies

Each policy is a pure function over an already-validated patient
sequence: ``(Sequence[PatientSummary]) -> List[ScheduleResult]``.

FCFS, SJF and Priority are run-to-completion and differ only in the
ordering they hand to the shared timing fold. Round Robin sweeps the
input order with a fixed quantum.

Callers must pass patients with ``record_count >= 1``;
``SchedulingEngine`` filters everything else out before dispatching here.
"""
from __future__ import annotations

import logging
from typing import List, Optional, Sequence

from vitalsched.core.clinical.priority import classify_patient
from .base import ARRIVAL_TIME, PatientSummary, ScheduleResult

logger = logging.getLogger(__name__)

TIME_QUANTUM = 2


def run_to_completion(
    ordered: Sequence[PatientSummary],
    priority_classes: Optional[Sequence[int]] = None,
) -> List[ScheduleResult]:
    """
    Shared timing model for the non-preemptive policies.

    Patients run back to back in the given order from t=0:
    start = clock, end = start + burst, turnaround = end - arrival,
    waiting = start - arrival.
    """
    clock = 0
    results: List[ScheduleResult] = []

    for idx, patient in enumerate(ordered):
        start = clock
        end = start + patient.record_count
        results.append(ScheduleResult(
            patient_id=patient.patient_id,
            name=patient.name,
            burst_time=patient.record_count,
            start_time=start,
            completion_time=end,
            turnaround_time=end - ARRIVAL_TIME,
            waiting_time=start - ARRIVAL_TIME,
            priority_class=int(priority_classes[idx]) if priority_classes is not None else None,
        ))
        clock = end

    return results


def schedule_fcfs(patients: Sequence[PatientSummary]) -> List[ScheduleResult]:
    """First-come-first-serve by first-seen timestamp; ties keep input order."""
    return run_to_completion(sorted(patients, key=lambda p: p.first_seen))


def schedule_sjf(patients: Sequence[PatientSummary]) -> List[ScheduleResult]:
    """Shortest job first by record count; ties keep input order."""
    return run_to_completion(sorted(patients, key=lambda p: p.record_count))


def schedule_priority(patients: Sequence[PatientSummary]) -> List[ScheduleResult]:
    """
    Lowest priority class first, then fewest records.

    Classes are computed once per patient before sorting.
    """
    classes = [classify_patient(p) for p in patients]
    order = sorted(
        range(len(patients)),
        key=lambda i: (classes[i], patients[i].record_count),
    )
    return run_to_completion(
        [patients[i] for i in order],
        priority_classes=[classes[i] for i in order],
    )


def schedule_round_robin(
    patients: Sequence[PatientSummary],
    quantum: int = TIME_QUANTUM,
) -> List[ScheduleResult]:
    """
    Round Robin over a fixed array of patients.

    Each sweep visits every unfinished patient once, in input order, and
    runs it for ``min(quantum, remaining)``. Every other unfinished patient
    accrues that slice as waiting time. There is no ready queue: finished
    patients are skipped at no cost and nobody is re-inserted.

    Results are returned in completion order.
    """
    if quantum < 1:
        raise ValueError(f"quantum must be >= 1, got {quantum}")

    total = len(patients)
    remaining = [p.record_count for p in patients]
    waiting = [0] * total
    first_start: List[Optional[int]] = [None] * total
    slices: List[List[int]] = [[] for _ in range(total)]

    pending = sum(1 for r in remaining if r > 0)
    completed = 0
    clock = 0
    sweep = 0
    results: List[ScheduleResult] = []

    while completed < pending:
        sweep += 1
        for i, patient in enumerate(patients):
            if remaining[i] <= 0:
                continue

            exec_time = min(quantum, remaining[i])

            for j in range(total):
                if j != i and remaining[j] > 0:
                    waiting[j] += exec_time

            if first_start[i] is None:
                first_start[i] = clock
            clock += exec_time
            remaining[i] -= exec_time
            slices[i].append(exec_time)

            logger.debug(
                f"round_robin sweep {sweep}: {patient.patient_id} ran {exec_time}, "
                f"remaining={remaining[i]}, clock={clock}"
            )

            if remaining[i] == 0:
                completed += 1
                results.append(ScheduleResult(
                    patient_id=patient.patient_id,
                    name=patient.name,
                    burst_time=patient.record_count,
                    start_time=first_start[i],
                    completion_time=clock,
                    turnaround_time=clock - ARRIVAL_TIME,
                    waiting_time=waiting[i],
                    time_executed=exec_time,
                    remaining=0,
                    slices=list(slices[i]),
                ))

    return results
