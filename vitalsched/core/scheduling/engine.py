"""
Scheduling Engine

Central dispatcher. Takes the per-patient summary table and returns one
ScheduleRun per requested policy.

Usage:
    from vitalsched.core.scheduling import SchedulingEngine, SchedulingPolicy

    engine = SchedulingEngine()
    run = engine.run(patients, SchedulingPolicy.SJF)
    for r in run.results:
        print(r.patient_id, r.start_time, r.end_time, r.waiting_time)

Adding a policy:
    1. Implement schedule_<name>(Sequence[PatientSummary]) in policies.py
    2. Add it to SchedulingPolicy and register it in _POLICY_FUNCTIONS below.
"""
from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import replace
from typing import Dict, Iterable, List, Optional, Sequence, Tuple, Union

import numpy as np

from vitalsched.core.clinical.priority import PatientStatus
from vitalsched.utils.exceptions import UnknownPolicyError
from .base import PatientSummary, RowDiagnostic, SchedulingPolicy, ScheduleRun
from .policies import (
    TIME_QUANTUM,
    schedule_fcfs,
    schedule_priority,
    schedule_round_robin,
    schedule_sjf,
)

logger = logging.getLogger(__name__)

# ── Registry: policy → implementation (canonical report order) ───────────────
_POLICY_FUNCTIONS = {
    SchedulingPolicy.FCFS:        schedule_fcfs,
    SchedulingPolicy.SJF:         schedule_sjf,
    SchedulingPolicy.PRIORITY:    schedule_priority,
    SchedulingPolicy.ROUND_ROBIN: schedule_round_robin,
}


def admit_patients(
    patients: Iterable[PatientSummary],
) -> Tuple[List[PatientSummary], List[RowDiagnostic]]:
    """
    Split patients into schedulable rows and diagnostics for the rest.

    The summary reader already enforces these rules; this guards callers
    that build PatientSummary objects themselves.
    """
    admitted: List[PatientSummary] = []
    diagnostics: List[RowDiagnostic] = []

    for position, patient in enumerate(patients, start=1):
        count = patient.record_count
        if isinstance(count, bool) or not isinstance(count, (int, np.integer)) or count < 1:
            diagnostics.append(RowDiagnostic(
                row_number=position,
                kind="MALFORMED_ROW",
                field="entry_count",
                patient_id=patient.patient_id,
                message=f"entry_count must be a positive integer, got {count!r}",
            ))
            continue
        try:
            status = PatientStatus(patient.status)
        except ValueError:
            diagnostics.append(RowDiagnostic(
                row_number=position,
                kind="UNKNOWN_STATUS",
                field="status",
                patient_id=patient.patient_id,
                message=f"status must be NORMAL or WARNING, got {patient.status!r}",
            ))
            continue
        if status is not patient.status:
            patient = replace(patient, status=status)
        admitted.append(patient)

    for diag in diagnostics:
        logger.warning(f"SchedulingEngine: skipping patient {diag.patient_id}: {diag.message}")

    return admitted, diagnostics


class SchedulingEngine:
    """
    Runs scheduling policies over a read-only patient snapshot.

    Stateless: every run owns its own clock and per-patient counters, so
    policies may execute on separate threads over the same input.
    """

    def run(
        self,
        patients: Sequence[PatientSummary],
        policy: Union[SchedulingPolicy, str],
    ) -> ScheduleRun:
        """
        Run one policy to completion.

        Returns:
            ScheduleRun with one result per admitted patient. An empty
            input produces an empty run, not an error.
        """
        policy = self.resolve(policy)
        admitted, diagnostics = admit_patients(patients)

        if policy == SchedulingPolicy.ROUND_ROBIN:
            results = schedule_round_robin(admitted, quantum=TIME_QUANTUM)
            quantum: Optional[int] = TIME_QUANTUM
        else:
            results = _POLICY_FUNCTIONS[policy](admitted)
            quantum = None

        if results:
            logger.info(
                f"SchedulingEngine [{policy.value}]: scheduled {len(results)} patient(s), "
                f"makespan={max(r.completion_time for r in results)}"
            )
        else:
            logger.info(f"SchedulingEngine [{policy.value}]: no patients to schedule")

        return ScheduleRun(
            policy=policy,
            results=results,
            diagnostics=diagnostics,
            quantum=quantum,
        )

    def run_all(
        self,
        patients: Sequence[PatientSummary],
        policies: Optional[Iterable[Union[SchedulingPolicy, str]]] = None,
        parallel: bool = False,
    ) -> List[ScheduleRun]:
        """
        Run several independent policies over the same input.

        Runs come back in the order requested (canonical order by default),
        whether or not they executed in parallel. An explicit empty
        selection runs nothing.
        """
        if policies is None:
            policies = _POLICY_FUNCTIONS.keys()
        selected = [self.resolve(p) for p in policies]
        snapshot = tuple(patients)

        if parallel and len(selected) > 1:
            with ThreadPoolExecutor(max_workers=len(selected)) as pool:
                return list(pool.map(lambda p: self.run(snapshot, p), selected))
        return [self.run(snapshot, p) for p in selected]

    @staticmethod
    def resolve(policy: Union[SchedulingPolicy, str]) -> SchedulingPolicy:
        """Accept enum members or their names/values ("sjf", "ROUND_ROBIN", "rr")."""
        if isinstance(policy, SchedulingPolicy):
            return policy

        key = str(policy).strip().lower().replace("-", "_").replace(" ", "_")
        aliases = {"rr": SchedulingPolicy.ROUND_ROBIN, "roundrobin": SchedulingPolicy.ROUND_ROBIN}
        if key in aliases:
            return aliases[key]
        try:
            return SchedulingPolicy(key)
        except ValueError:
            raise UnknownPolicyError(
                f"Unknown scheduling policy: {policy}",
                policy=str(policy),
                details={"available": [p.value for p in _POLICY_FUNCTIONS]},
            ) from None

    @staticmethod
    def available_policies() -> List[SchedulingPolicy]:
        return list(_POLICY_FUNCTIONS.keys())

    @staticmethod
    def summarise(run: ScheduleRun) -> Dict:
        """
        Aggregate timing statistics for one run.

        Example output:
        {
            "policy": "sjf",
            "patients": 3,
            "avg_waiting_time": 2.33,
            "avg_turnaround_time": 5.67,
            "makespan": 10,
            "throughput": 0.3,
        }
        """
        if run.is_empty:
            return {
                "policy": run.policy.value,
                "patients": 0,
                "avg_waiting_time": 0.0,
                "avg_turnaround_time": 0.0,
                "makespan": 0,
                "throughput": 0.0,
            }

        waiting = np.array([r.waiting_time for r in run.results], dtype=float)
        turnaround = np.array([r.turnaround_time for r in run.results], dtype=float)
        makespan = int(max(r.completion_time for r in run.results))

        return {
            "policy": run.policy.value,
            "patients": len(run.results),
            "avg_waiting_time": round(float(np.mean(waiting)), 2),
            "avg_turnaround_time": round(float(np.mean(turnaround)), 2),
            "makespan": makespan,
            "throughput": round(len(run.results) / makespan, 4),
        }
