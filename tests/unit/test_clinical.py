"""
Unit Tests for Priority Classification

Tests for the priority classifier and vitals status derivation.
"""
import pytest

from vitalsched.core.clinical import (
    PatientStatus,
    PriorityClass,
    classify,
    classify_patient,
    derive_status,
)


class TestClassify:
    """Tests for classify()."""

    @pytest.mark.parametrize("vitals", [
        (75, 120, 80, 98),
        (200, 220, 140, 70),
        (40, 80, 50, 85),
    ])
    def test_normal_is_routine_for_any_vitals(self, vitals):
        """NORMAL status never escalates, whatever the vitals."""
        assert classify(PatientStatus.NORMAL, *vitals) == PriorityClass.ROUTINE
        assert classify("NORMAL", *vitals) == 3

    def test_warning_default_is_urgent(self):
        """WARNING without dangerous vitals is class 2."""
        assert classify("WARNING", 100, 120, 80, 92) == 2

    def test_low_spo2_warning_default(self):
        """SpO2 of exactly 92 does not escalate."""
        assert classify(PatientStatus.WARNING, 100, 120, 80, 92.0) == PriorityClass.URGENT

    def test_heart_rate_escalation(self):
        assert classify("WARNING", 140, 120, 80, 98) == PriorityClass.CRITICAL

    def test_spo2_escalation(self):
        assert classify("WARNING", 80, 120, 80, 90) == PriorityClass.CRITICAL

    def test_spo2_escalation_wins_over_normal_heart_rate(self):
        """SpO2 below 92 escalates even at HR 100."""
        assert classify("WARNING", 100, 120, 80, 90) == PriorityClass.CRITICAL

    def test_systolic_escalation(self):
        assert classify("WARNING", 80, 161, 80, 98) == PriorityClass.CRITICAL

    def test_diastolic_escalation(self):
        assert classify("WARNING", 80, 120, 101, 98) == PriorityClass.CRITICAL

    def test_thresholds_are_strict(self):
        """Values exactly on a threshold stay at class 2."""
        assert classify("WARNING", 130, 160, 100, 92) == PriorityClass.URGENT

    def test_unknown_status_is_routine(self):
        """Anything that is not WARNING classifies as 3."""
        assert classify("CRITICAL", 200, 200, 200, 50) == PriorityClass.ROUTINE

    def test_classify_patient(self, make_patient):
        patient = make_patient("P1", 2, PatientStatus.WARNING, sys_bp=170)
        assert classify_patient(patient) == PriorityClass.CRITICAL


class TestDeriveStatus:
    """Tests for derive_status()."""

    def test_normal_ranges(self):
        assert derive_status(75, 120, 80, 98) == PatientStatus.NORMAL

    def test_boundaries_are_normal(self):
        assert derive_status(100, 140, 90, 95) == PatientStatus.NORMAL
        assert derive_status(60, 90, 60, 95) == PatientStatus.NORMAL

    @pytest.mark.parametrize("vitals", [
        (101, 120, 80, 98),
        (59, 120, 80, 98),
        (75, 141, 80, 98),
        (75, 89, 80, 98),
        (75, 120, 91, 98),
        (75, 120, 59, 98),
        (75, 120, 80, 94.9),
    ])
    def test_out_of_range_is_warning(self, vitals):
        assert derive_status(*vitals) == PatientStatus.WARNING
