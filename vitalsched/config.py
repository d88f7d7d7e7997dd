"""
Configuration
=============
Centralised settings for data/report locations and logging.
Loads overrides from a project-level .env file.
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

# ── Paths ───────────────────────────────────────────────────────────────
PROJECT_ROOT = Path(__file__).resolve().parent.parent

# ── Load .env ───────────────────────────────────────────────────────────
load_dotenv(PROJECT_ROOT / ".env")


@dataclass
class Settings:
    data_dir: Path = Path("data")
    reports_dir: Path = Path("reports")
    log_level: str = "INFO"
    log_file: Optional[str] = None

    @property
    def vitals_file(self) -> Path:
        return self.data_dir / "patient_vitals.csv"

    @property
    def summary_file(self) -> Path:
        return self.data_dir / "patient_summary.csv"

    @classmethod
    def from_env(cls) -> "Settings":
        return cls(
            data_dir=Path(os.getenv("VITALSCHED_DATA_DIR", "data")),
            reports_dir=Path(os.getenv("VITALSCHED_REPORTS_DIR", "reports")),
            log_level=os.getenv("VITALSCHED_LOG_LEVEL", "INFO"),
            log_file=os.getenv("VITALSCHED_LOG_FILE") or None,
        )


settings = Settings.from_env()
