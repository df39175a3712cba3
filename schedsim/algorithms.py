from __future__ import annotations

import logging
from collections import deque
from typing import Deque, List, Optional

from .errors import (
    DuplicatePidError,
    EmptyProcessSetError,
    InvalidArrivalTimeError,
    InvalidBurstTimeError,
    InvalidPidError,
    InvalidQuantumError,
    SchedulerError,
)
from .metrics import compute_system_metrics
from .models import Process, ScheduleResult, Segment

logger = logging.getLogger(__name__)


def validate_processes(processes: List[Process]) -> None:
    """
    Reject process sets the simulators cannot schedule meaningfully.
    """
    if not processes:
        raise EmptyProcessSetError("At least one process is required")

    seen: set[int] = set()
    for p in processes:
        if p.pid <= 0:
            raise InvalidPidError(f"Process ids must be positive, got {p.pid}")
        if p.pid in seen:
            raise DuplicatePidError(f"Duplicate process id: {p.pid}")
        seen.add(p.pid)
        if p.arrival_time < 0:
            raise InvalidArrivalTimeError(f"P{p.pid} has negative arrival time: {p.arrival_time}")
        if p.burst_time <= 0:
            raise InvalidBurstTimeError(f"P{p.pid} must have a positive burst time, got {p.burst_time}")


def _working_copies(processes: List[Process]) -> List[Process]:
    validate_processes(processes)
    return [p.working_copy() for p in processes]


def _idle(timeline: List[Segment], start: int, end: int) -> None:
    logger.debug("CPU idle [%d, %d)", start, end)
    timeline.append(Segment(pid=None, start_time=start, end_time=end))


def _finalize(algorithm: str, quantum: Optional[int], procs: List[Process], timeline: List[Segment]) -> ScheduleResult:
    result = ScheduleResult(
        algorithm=algorithm,
        quantum=quantum,
        processes=sorted(procs, key=lambda p: p.pid),
        timeline=timeline,
    )
    compute_system_metrics(result)
    return result


def simulate_fcfs(processes: List[Process], quantum: Optional[int] = None) -> ScheduleResult:
    """
    First-Come First-Serve (non-preemptive) scheduling.

    Simultaneous arrivals run in pid order.
    """
    procs = sorted(_working_copies(processes), key=lambda p: (p.arrival_time, p.pid))

    time = 0
    timeline: List[Segment] = []

    for p in procs:
        if time < p.arrival_time:
            _idle(timeline, time, p.arrival_time)
            time = p.arrival_time

        start_time = time
        time += p.burst_time
        timeline.append(Segment(pid=p.pid, start_time=start_time, end_time=time))
        logger.debug("FCFS: P%d runs [%d, %d)", p.pid, start_time, time)
        p.finish(time)

    return _finalize("FCFS", None, procs, timeline)


def simulate_sjf(processes: List[Process], quantum: Optional[int] = None) -> ScheduleResult:
    """
    Shortest Job First (non-preemptive).

    At each decision point, among processes that have arrived and are not yet
    completed, choose the one with the smallest burst time. Ties go to the
    earlier arrival, then the lower pid. The chosen process always runs to
    completion, even if a shorter job arrives meanwhile.
    """
    procs = _working_copies(processes)

    time = 0
    timeline: List[Segment] = []
    completed = 0

    while completed < len(procs):
        ready = [p for p in procs if not p.done and p.arrival_time <= time]

        if not ready:
            next_arrival = min(p.arrival_time for p in procs if not p.done)
            _idle(timeline, time, next_arrival)
            time = next_arrival
            continue

        p = min(ready, key=lambda x: (x.burst_time, x.arrival_time, x.pid))

        start_time = time
        time += p.burst_time
        timeline.append(Segment(pid=p.pid, start_time=start_time, end_time=time))
        logger.debug("SJF: P%d runs [%d, %d) with %d ready", p.pid, start_time, time, len(ready))
        p.finish(time)
        completed += 1

    return _finalize("SJF (non-preemptive)", None, procs, timeline)


def simulate_rr(processes: List[Process], quantum: Optional[int] = None) -> ScheduleResult:
    """
    Round Robin scheduling with a fixed time quantum.

    The ready queue holds indices into the arrival-sorted working copies.
    Processes that arrive during a slice are queued ahead of the process
    returning from that slice. Adjacent slices of the same process are not
    merged.
    """
    if quantum is None or quantum <= 0:
        raise InvalidQuantumError(f"Round Robin requires a positive quantum, got {quantum!r}")

    procs = sorted(_working_copies(processes), key=lambda p: (p.arrival_time, p.pid))
    n = len(procs)

    time = 0
    timeline: List[Segment] = []
    ready: Deque[int] = deque()
    next_idx = 0  # first process not yet enqueued

    def enqueue_arrivals(current_time: int) -> None:
        nonlocal next_idx
        while next_idx < n and procs[next_idx].arrival_time <= current_time:
            ready.append(next_idx)
            next_idx += 1

    enqueue_arrivals(time)

    finished = 0
    while finished < n:
        if not ready:
            if next_idx >= n:
                raise SchedulerError("Round Robin queue drained with unfinished processes")
            arrival = procs[next_idx].arrival_time
            _idle(timeline, time, arrival)
            time = arrival
            enqueue_arrivals(time)
            continue

        idx = ready.popleft()
        p = procs[idx]

        run_time = min(p.remaining_time, quantum)
        slice_start = time
        time += run_time
        p.remaining_time -= run_time
        timeline.append(Segment(pid=p.pid, start_time=slice_start, end_time=time))
        logger.debug("RR: P%d runs [%d, %d), %d left", p.pid, slice_start, time, p.remaining_time)

        enqueue_arrivals(time)

        if p.remaining_time > 0:
            ready.append(idx)
        else:
            p.finish(time)
            finished += 1

    return _finalize("Round Robin", quantum, procs, timeline)


ALGORITHMS = {
    "fcfs": simulate_fcfs,
    "sjf": simulate_sjf,
    "rr": simulate_rr,
}


def run_algorithm(name: str, processes: List[Process], quantum: Optional[int] = None) -> ScheduleResult:
    """
    Dispatch to the requested algorithm. Quantum is only used by round-robin.
    """
    name = name.lower()
    if name not in ALGORITHMS:
        raise SchedulerError(f"Unknown algorithm '{name}' (choose from {', '.join(ALGORITHMS)})")

    func = ALGORITHMS[name]
    return func(processes, quantum=quantum)
