from __future__ import annotations

import logging
from collections import deque
from typing import Callable, Deque, Dict, List, Optional, Sequence

from .metrics import compute_system_metrics
from .models import Process, ProcessMetrics, ProcessRun, ScheduleResult, ScheduledSlice

logger = logging.getLogger(__name__)

DEFAULT_QUANTUM = 4


def schedule_fcfs(processes: Sequence[Process], quantum: Optional[int] = None) -> ScheduleResult:
    """
    First-Come First-Serve (non-preemptive).

    Processes are served in the order given; nothing is reordered, so callers
    wanting arrival order must supply the sequence sorted by arrival.
    """
    service_time = 0
    timeline: List[ScheduledSlice] = []
    metrics: List[ProcessMetrics] = []

    for p in processes:
        waiting_time = max(0, service_time - p.arrival_time)
        start_time = p.arrival_time + waiting_time
        service_time = start_time + p.burst_time

        timeline.append(ScheduledSlice(pid=p.pid, start_time=start_time, end_time=service_time))

        run = ProcessRun(p)
        run.complete(service_time)
        metrics.append(run.to_metrics())
        logger.debug("fcfs: pid=%s ran [%d, %d) after waiting %d", p.pid, start_time, service_time, waiting_time)

    result = ScheduleResult(algorithm="First-come, first-serve", quantum=None, processes=metrics, timeline=timeline)
    compute_system_metrics(result)
    return result


def schedule_sjf(processes: Sequence[Process], quantum: Optional[int] = None) -> ScheduleResult:
    """
    Shortest Job First (non-preemptive, static ordering).

    The whole input is ordered once by burst length (stable, so equal bursts
    keep their input order) and then run to completion one after another,
    idling until each process has arrived. The order is never revisited as
    processes arrive.
    """
    ordered = sorted(processes, key=lambda p: p.burst_time)

    current_time = 0
    timeline: List[ScheduledSlice] = []
    metrics: List[ProcessMetrics] = []

    for p in ordered:
        if current_time < p.arrival_time:
            logger.debug("sjf: cpu idle [%d, %d)", current_time, p.arrival_time)
            current_time = p.arrival_time

        start_time = current_time
        current_time = start_time + p.burst_time

        timeline.append(ScheduledSlice(pid=p.pid, start_time=start_time, end_time=current_time))

        run = ProcessRun(p)
        run.complete(current_time)
        metrics.append(run.to_metrics())
        logger.debug("sjf: pid=%s ran [%d, %d)", p.pid, start_time, current_time)

    result = ScheduleResult(algorithm="Shortest-job-first", quantum=None, processes=metrics, timeline=timeline)
    compute_system_metrics(result)
    return result


class _SJFPriorityMachine:
    """
    Unit-time state machine behind :func:`schedule_sjf_priority`.

    Holds a ready queue and a single running slot. Each call to :meth:`tick`
    advances the simulation by one time unit:

    1. processes arriving at the current time join the ready queue;
    2. a running process with no time left completes here;
    3. an idle CPU takes the ready process with the shortest burst, ties
       going to the lower priority value, then to queue order;
    4. the running process consumes one unit.

    A dispatched process is never preempted.
    """

    def __init__(self, processes: Sequence[Process]) -> None:
        self.runs = [ProcessRun(p) for p in processes]
        self.current_time = 0
        self.ready: List[ProcessRun] = []
        self.running: Optional[ProcessRun] = None
        self.timeline: List[ScheduledSlice] = []
        self.completed = 0

    @property
    def done(self) -> bool:
        return self.completed == len(self.runs)

    def tick(self) -> None:
        for run in self.runs:
            if run.process.arrival_time == self.current_time:
                self.ready.append(run)

        if self.running is not None and self.running.remaining_burst == 0:
            finished = self.running
            finished.complete(self.current_time)
            self.timeline.append(
                ScheduledSlice(
                    pid=finished.pid,
                    start_time=self.current_time - finished.process.burst_time,
                    end_time=self.current_time,
                )
            )
            self.running = None
            self.completed += 1
            logger.debug("sjf-priority: pid=%s completed at %d", finished.pid, self.current_time)

        if self.running is None and self.ready:
            self.ready.sort(key=lambda r: (r.process.burst_time, r.process.priority))
            self.running = self.ready.pop(0)
            logger.debug("sjf-priority: dispatched pid=%s at %d", self.running.pid, self.current_time)

        if self.running is not None:
            self.running.remaining_burst -= 1

        self.current_time += 1


def schedule_sjf_priority(processes: Sequence[Process], quantum: Optional[int] = None) -> ScheduleResult:
    """
    Shortest Job First with priority tie-break, simulated tick by tick.

    Unlike :func:`schedule_sjf` the choice is made from the processes that
    have actually arrived, each time the CPU becomes free. Lower priority
    values win ties on burst length. Metrics rows follow input order.
    """
    machine = _SJFPriorityMachine(processes)
    while not machine.done:
        machine.tick()

    metrics = [run.to_metrics() for run in machine.runs]
    result = ScheduleResult(
        algorithm="Shortest-job-first with Priority",
        quantum=None,
        processes=metrics,
        timeline=machine.timeline,
    )
    compute_system_metrics(result)
    return result


def schedule_rr(processes: Sequence[Process], quantum: Optional[int] = None) -> ScheduleResult:
    """
    Round Robin scheduling with a fixed time quantum.

    Arrivals are admitted at the top of every iteration, before the head of
    the ready queue is dispatched. A process that exhausts its quantum goes
    back to the tail of the queue, ahead of anything admitted on the next
    iteration. Metrics rows follow completion order.
    """
    if quantum is None:
        quantum = DEFAULT_QUANTUM
    if quantum <= 0:
        raise ValueError("Round Robin requires a positive quantum")

    pending: Deque[ProcessRun] = deque(ProcessRun(p) for p in sorted(processes, key=lambda p: p.arrival_time))
    ready: Deque[ProcessRun] = deque()

    clock = 0
    timeline: List[ScheduledSlice] = []
    metrics: List[ProcessMetrics] = []

    while pending or ready:
        while pending and pending[0].process.arrival_time <= clock:
            ready.append(pending.popleft())

        if not ready:
            clock += 1
            continue

        current = ready.popleft()

        if current.remaining_burst > quantum:
            timeline.append(ScheduledSlice(pid=current.pid, start_time=clock, end_time=clock + quantum))
            clock += quantum
            current.remaining_burst -= quantum
            ready.append(current)
            logger.debug("rr: pid=%s preempted at %d, %d left", current.pid, clock, current.remaining_burst)
        else:
            timeline.append(
                ScheduledSlice(pid=current.pid, start_time=clock, end_time=clock + current.remaining_burst)
            )
            clock += current.remaining_burst
            current.complete(clock)
            metrics.append(current.to_metrics())
            logger.debug("rr: pid=%s completed at %d", current.pid, clock)

    result = ScheduleResult(algorithm="Round-robin", quantum=quantum, processes=metrics, timeline=timeline)
    compute_system_metrics(result)
    return result


ALGORITHMS: Dict[str, Callable[..., ScheduleResult]] = {
    "fcfs": schedule_fcfs,
    "sjf": schedule_sjf,
    "sjf-priority": schedule_sjf_priority,
    "rr": schedule_rr,
}

DEFAULT_ORDER = tuple(ALGORITHMS)


def run_algorithm(name: str, processes: Sequence[Process], quantum: Optional[int] = None) -> ScheduleResult:
    """
    Dispatch to the requested algorithm on a private copy of the workload.
    Quantum is only used by round-robin.
    """
    name = name.lower()
    if name not in ALGORITHMS:
        raise ValueError(f"Unknown algorithm '{name}'")

    func = ALGORITHMS[name]
    logger.info("running %s on %d processes", name, len(processes))
    return func(list(processes), quantum=quantum)
