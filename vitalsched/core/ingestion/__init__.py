"""
Data Ingestion Module

Reads the raw vitals export and the per-patient summary table that
drives the scheduling engine.
"""
from .summary import SummaryTable, SUMMARY_COLUMNS, parse_row, parse_summary, read_summary
from .vitals import (
    DataQualityReport,
    aggregate_vitals,
    check_data_quality,
    load_vitals,
    normalise_vitals,
    summary_frame,
    write_summary,
)

__all__ = [
    "SummaryTable",
    "SUMMARY_COLUMNS",
    "parse_row",
    "parse_summary",
    "read_summary",
    "DataQualityReport",
    "aggregate_vitals",
    "check_data_quality",
    "load_vitals",
    "normalise_vitals",
    "summary_frame",
    "write_summary",
]
