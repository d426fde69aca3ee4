"""
Rendering of schedule results: titles, schedule tables and comparisons.
"""

from __future__ import annotations

from typing import Iterable, Optional

from rich import box
from rich.console import Console
from rich.table import Table

from .gantt import build_rich_gantt, render_gantt
from .models import ScheduleResult

NOT_APPLICABLE = "n/a"


def render_title(title: str) -> str:
    rule = "-" * (len(title) * 2)
    indent = " " * (len(title) // 2)
    return "\n".join([rule, f"{indent} {title}", rule])


def _fmt(value: Optional[float], suffix: str = "") -> str:
    if value is None:
        return NOT_APPLICABLE
    return f"{value:.2f}{suffix}"


def build_schedule_table(result: ScheduleResult, plain: bool = False) -> Table:
    """
    Per-process table in the scheduler's emission order, with the averages
    and throughput in the footer.
    """
    system = result.system
    table = Table(
        title="Schedule table",
        box=box.ASCII if plain else box.SIMPLE_HEAVY,
        show_footer=True,
    )

    footers = {
        "Wait": f"Average\n{_fmt(system.avg_waiting if system else None)}",
        "Turnaround": f"Average\n{_fmt(system.avg_turnaround if system else None)}",
        "Exit": f"Throughput\n{_fmt(system.throughput if system else None, '/t')}",
    }
    for header in ("ID", "Priority", "Burst", "Arrival", "Wait", "Turnaround", "Exit"):
        justify = "center" if header in {"ID", "Priority"} else "right"
        table.add_column(header, footer=footers.get(header, ""), justify=justify)

    for p in result.processes:
        table.add_row(
            str(p.pid),
            str(p.priority),
            str(p.burst_time),
            str(p.arrival_time),
            str(p.waiting_time),
            str(p.turnaround_time),
            str(p.completion_time),
        )

    return table


def build_comparison_table(results: Iterable[ScheduleResult], title: str = "Algorithm comparison") -> Table:
    table = Table(title=title, box=box.SIMPLE_HEAVY)
    table.add_column("Algorithm")
    table.add_column("Quantum", justify="right")
    table.add_column("Avg waiting", justify="right")
    table.add_column("Avg turnaround", justify="right")
    table.add_column("Throughput", justify="right")
    table.add_column("CPU utilization", justify="right")

    for result in results:
        system = result.system
        utilization = system.cpu_utilization if system else None
        table.add_row(
            result.algorithm,
            "" if result.quantum is None else str(result.quantum),
            _fmt(system.avg_waiting if system else None),
            _fmt(system.avg_turnaround if system else None),
            _fmt(system.throughput if system else None, "/t"),
            NOT_APPLICABLE if utilization is None else f"{utilization * 100:.1f}%",
        )

    return table


def print_result(console: Console, result: ScheduleResult, plain: bool = False) -> None:
    console.print(render_title(result.algorithm), markup=False, highlight=False)
    if result.quantum is not None:
        console.print(f"[bold]Quantum:[/bold] {result.quantum}")

    if plain:
        console.print(render_gantt(result.timeline), markup=False, highlight=False)
    else:
        panel, time_marks = build_rich_gantt(result.timeline)
        console.print(panel)
        if time_marks:
            console.print(time_marks, highlight=False)

    console.print()
    console.print(build_schedule_table(result, plain=plain))
    console.print()
