"""
CPU scheduling simulator.

Simulates First-Come First-Serve, non-preemptive Shortest Job First and
Round Robin over a set of processes, producing per-process completion,
turnaround and waiting times together with a Gantt chart timeline.
"""

from .algorithms import ALGORITHMS, run_algorithm, simulate_fcfs, simulate_rr, simulate_sjf
from .models import Process, ScheduleResult, Segment

__all__ = [
    "ALGORITHMS",
    "Process",
    "ScheduleResult",
    "Segment",
    "run_algorithm",
    "simulate_fcfs",
    "simulate_rr",
    "simulate_sjf",
]
