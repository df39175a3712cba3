from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional


@dataclass
class Process:
    pid: int
    arrival_time: int
    burst_time: int
    remaining_time: int = 0
    done: bool = False
    completion_time: int = 0
    turnaround_time: int = 0
    waiting_time: int = 0

    def working_copy(self) -> "Process":
        """
        Fresh, unfinished copy of this process for a single simulation run.
        """
        return Process(
            pid=self.pid,
            arrival_time=self.arrival_time,
            burst_time=self.burst_time,
            remaining_time=self.burst_time,
        )

    def finish(self, clock: int) -> None:
        self.remaining_time = 0
        self.done = True
        self.completion_time = clock
        self.turnaround_time = self.completion_time - self.arrival_time
        self.waiting_time = self.turnaround_time - self.burst_time


@dataclass
class Segment:
    """
    One contiguous interval [start_time, end_time) of the Gantt chart.

    A segment with ``pid=None`` means the CPU was idle.
    """

    pid: Optional[int]
    start_time: int
    end_time: int

    @property
    def is_idle(self) -> bool:
        return self.pid is None

    @property
    def duration(self) -> int:
        return self.end_time - self.start_time

    @property
    def label(self) -> str:
        return "IDLE" if self.pid is None else f"P{self.pid}"


@dataclass
class SystemMetrics:
    cpu_busy_time: int
    idle_time: int
    makespan: int
    throughput: float
    cpu_utilization: float


@dataclass
class ScheduleResult:
    algorithm: str
    quantum: Optional[int]
    processes: List[Process] = field(default_factory=list)
    timeline: List[Segment] = field(default_factory=list)
    system: Optional[SystemMetrics] = None
