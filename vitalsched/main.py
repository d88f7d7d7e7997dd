"""
Vitals Scheduling API - FastAPI Application

HTTP surface over the scheduling engine:
- Policy listing
- Scheduling from JSON rows or summary-table CSV text
- Priority classification
"""
from contextlib import asynccontextmanager
from datetime import datetime
from typing import List, Optional, Sequence
import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from vitalsched import __version__
from vitalsched.config import settings
from vitalsched.core.clinical import classify
from vitalsched.core.ingestion import parse_summary
from vitalsched.core.scheduling import (
    PatientSummary,
    RowDiagnostic,
    SchedulingEngine,
    SchedulingPolicy,
    TIME_QUANTUM,
)
from vitalsched.models import (
    ClassifyRequest,
    ClassifyResponse,
    CsvScheduleRequest,
    HealthResponse,
    PolicyInfo,
    ScheduleRequest,
    ScheduleResponse,
)
from vitalsched.utils import setup_logging, VitalSchedError

logger = logging.getLogger(__name__)

_engine = SchedulingEngine()
START_TIME = datetime.now()


# ---- Application Lifespan ----

@asynccontextmanager
async def lifespan(app: FastAPI):
    setup_logging(settings.log_level, settings.log_file)
    logger.info("Vitals Scheduling API ready to accept requests")
    yield
    logger.info("Vitals Scheduling API shut down.")


# ---- FastAPI Application ----

app = FastAPI(
    title="Vitals Scheduling API",
    description="FCFS, SJF, Priority and Round Robin simulations over patient vitals summaries",
    version=__version__,
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(VitalSchedError)
async def vitalsched_error_handler(request: Request, exc: VitalSchedError):
    logger.warning(f"{request.url.path}: {exc.code}: {exc.message}")
    return JSONResponse(status_code=400, content=exc.to_dict())


# ---- Utility Functions ----

def _schedule(
    patients: Sequence[PatientSummary],
    policies: Optional[List[str]],
    parallel: bool,
    table_diagnostics: Sequence[RowDiagnostic] = (),
) -> ScheduleResponse:
    runs = _engine.run_all(patients, policies=policies, parallel=parallel)

    # Every run admits the same rows, so one run's diagnostics cover all
    diagnostics = list(table_diagnostics) + (list(runs[0].diagnostics) if runs else [])

    return ScheduleResponse(
        runs=[run.to_dict() for run in runs],
        summaries=[SchedulingEngine.summarise(run) for run in runs],
        diagnostics=[d.to_dict() for d in diagnostics],
        patient_count=len(patients) - (len(runs[0].diagnostics) if runs else 0),
    )


# ---- Endpoints ----

def _health() -> HealthResponse:
    return HealthResponse(
        status="healthy",
        version=__version__,
        timestamp=datetime.now().isoformat(),
        uptime_seconds=(datetime.now() - START_TIME).total_seconds(),
    )


@app.get("/", response_model=HealthResponse, tags=["Health"])
async def root():
    """API root - health check."""
    return _health()


@app.get("/health", response_model=HealthResponse, tags=["Health"])
async def health_check():
    """Health check endpoint."""
    return _health()


@app.get("/api/v1/policies", tags=["Reference"])
async def list_policies():
    """List available scheduling policies."""
    policies = [
        PolicyInfo(
            name=p.value,
            preemptive=p == SchedulingPolicy.ROUND_ROBIN,
            quantum=TIME_QUANTUM if p == SchedulingPolicy.ROUND_ROBIN else None,
        )
        for p in SchedulingEngine.available_policies()
    ]
    return {"policies": [p.model_dump() for p in policies]}


@app.post("/api/v1/schedule", response_model=ScheduleResponse, tags=["Scheduling"])
async def schedule(request: ScheduleRequest):
    """
    Run scheduling policies over JSON patient rows.

    Rows with entry_count < 1 or an unknown status are returned as
    diagnostics; the remaining rows are still scheduled.
    """
    patients = [row.to_summary() for row in request.patients]
    return _schedule(patients, request.policies, request.parallel)


@app.post("/api/v1/schedule/csv", response_model=ScheduleResponse, tags=["Scheduling"])
async def schedule_csv(request: CsvScheduleRequest):
    """Run scheduling policies over summary-table CSV text."""
    table = parse_summary(request.csv)
    return _schedule(table.patients, request.policies, request.parallel, table.diagnostics)


@app.post("/api/v1/classify", response_model=ClassifyResponse, tags=["Clinical"])
async def classify_patient(request: ClassifyRequest):
    """Priority class (1 = most urgent) for a status and averaged vitals."""
    priority = classify(
        request.status.strip(),
        request.avg_hr,
        request.avg_sys,
        request.avg_dia,
        request.avg_spo2,
    )
    return ClassifyResponse(priority_class=int(priority), label=priority.name)


# ---- Run with uvicorn ----
if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
