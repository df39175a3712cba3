from __future__ import annotations

from typing import List

from .errors import EmptyProcessSetError, IncompleteScheduleError
from .models import Process, ScheduleResult, SystemMetrics


def compute_system_metrics(result: ScheduleResult) -> SystemMetrics:
    """
    Compute busy/idle time, throughput and CPU utilization from the timeline.
    """
    makespan = result.timeline[-1].end_time if result.timeline else 0
    cpu_busy_time = sum(s.duration for s in result.timeline if not s.is_idle)
    idle_time = sum(s.duration for s in result.timeline if s.is_idle)

    throughput = len(result.processes) / makespan if makespan > 0 else 0.0
    cpu_utilization = cpu_busy_time / makespan if makespan > 0 else 0.0

    system = SystemMetrics(
        cpu_busy_time=cpu_busy_time,
        idle_time=idle_time,
        makespan=makespan,
        throughput=throughput,
        cpu_utilization=cpu_utilization,
    )
    result.system = system
    return system


def summarize_process_metrics(processes: List[Process]) -> dict:
    """
    Return average turnaround and waiting time of a finished process set.
    """
    if not processes:
        raise EmptyProcessSetError("Cannot average metrics over zero processes")

    unfinished = [p.pid for p in processes if not p.done]
    if unfinished:
        raise IncompleteScheduleError(f"Processes not finished yet: {unfinished}")

    n = len(processes)
    return {
        "avg_turnaround": sum(p.turnaround_time for p in processes) / n,
        "avg_waiting": sum(p.waiting_time for p in processes) / n,
    }
