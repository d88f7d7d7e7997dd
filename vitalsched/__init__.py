"""
Patient vitals scheduling simulator.

Aggregates patient vital-sign readings and replays the per-patient record
counts through FCFS, SJF, Priority and Round Robin scheduling.
"""

__version__ = "1.0.0"
