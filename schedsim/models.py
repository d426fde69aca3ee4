from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional


@dataclass(frozen=True)
class Process:
    pid: int
    arrival_time: int
    burst_time: int
    priority: int = 0


@dataclass
class ProcessRun:
    """
    Working copy of a process owned by a single scheduler invocation.

    ``remaining_burst`` is consumed by the preemptive schedulers; the
    remaining fields are filled in once the process completes.
    """

    process: Process
    remaining_burst: Optional[int] = None
    exit_time: Optional[int] = None
    turnaround_time: Optional[int] = None
    waiting_time: Optional[int] = None

    def __post_init__(self) -> None:
        if self.remaining_burst is None:
            self.remaining_burst = self.process.burst_time

    @property
    def pid(self) -> int:
        return self.process.pid

    def complete(self, exit_time: int) -> None:
        self.remaining_burst = 0
        self.exit_time = exit_time
        self.turnaround_time = exit_time - self.process.arrival_time
        self.waiting_time = self.turnaround_time - self.process.burst_time

    def to_metrics(self) -> ProcessMetrics:
        if self.exit_time is None:
            raise ValueError(f"process {self.pid} has not completed")
        return ProcessMetrics(
            pid=self.process.pid,
            priority=self.process.priority,
            burst_time=self.process.burst_time,
            arrival_time=self.process.arrival_time,
            waiting_time=self.waiting_time,
            turnaround_time=self.turnaround_time,
            completion_time=self.exit_time,
        )


@dataclass(frozen=True)
class ScheduledSlice:
    """
    One contiguous slice of execution for a process in the Gantt chart.
    """

    pid: int
    start_time: int
    end_time: int

    @property
    def duration(self) -> int:
        return self.end_time - self.start_time


@dataclass(frozen=True)
class ProcessMetrics:
    pid: int
    priority: int
    burst_time: int
    arrival_time: int
    waiting_time: int
    turnaround_time: int
    completion_time: int


@dataclass
class SystemMetrics:
    # None means "no data" (empty workload).
    avg_waiting: Optional[float]
    avg_turnaround: Optional[float]
    throughput: Optional[float]
    completed: int = 0
    cpu_busy_time: int = 0
    makespan: int = 0
    cpu_utilization: Optional[float] = None


@dataclass
class ScheduleResult:
    algorithm: str
    quantum: Optional[int]
    processes: List[ProcessMetrics] = field(default_factory=list)
    timeline: List[ScheduledSlice] = field(default_factory=list)
    system: Optional[SystemMetrics] = None
