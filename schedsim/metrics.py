from __future__ import annotations

from typing import Dict, List, Optional

from .models import ProcessMetrics, ScheduleResult, SystemMetrics


def _mean(values: List[int]) -> Optional[float]:
    if not values:
        return None
    return sum(values) / len(values)


def compute_system_metrics(result: ScheduleResult) -> SystemMetrics:
    """
    Compute averages, throughput and CPU utilization given populated
    per-process metrics and timeline slices.

    Throughput is completed processes per unit time, measured up to the
    last exit. An empty result reports every ratio as ``None``.
    """
    if not result.processes:
        system = SystemMetrics(avg_waiting=None, avg_turnaround=None, throughput=None)
        result.system = system
        return system

    completed = len(result.processes)
    makespan = max(p.completion_time for p in result.processes)
    cpu_busy_time = sum(slice_.duration for slice_ in result.timeline)

    summary = summarize_process_metrics(result.processes)
    system = SystemMetrics(
        avg_waiting=summary["avg_waiting"],
        avg_turnaround=summary["avg_turnaround"],
        throughput=completed / makespan if makespan > 0 else None,
        completed=completed,
        cpu_busy_time=cpu_busy_time,
        makespan=makespan,
        cpu_utilization=cpu_busy_time / makespan if makespan > 0 else None,
    )
    result.system = system
    return system


def summarize_process_metrics(processes: List[ProcessMetrics]) -> Dict[str, Optional[float]]:
    """
    Return averages of the key per-process metrics for quick comparison.
    """
    return {
        "avg_waiting": _mean([p.waiting_time for p in processes]),
        "avg_turnaround": _mean([p.turnaround_time for p in processes]),
    }
