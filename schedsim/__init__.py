"""
CPU scheduling simulator.

Runs FCFS, SJF, SJF with priority tie-breaks and Round-Robin over a fixed
workload and reports the Gantt schedule and wait/turnaround/throughput
metrics of each policy.
"""

__all__ = ["algorithms", "cli"]
