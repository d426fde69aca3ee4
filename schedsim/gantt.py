from __future__ import annotations

from typing import Dict, List, Sequence, Tuple

from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from .models import ScheduledSlice

CELL_WIDTH = 8


def render_gantt(slices: Sequence[ScheduledSlice]) -> str:
    """
    Plain-text Gantt schedule: one ``|  pid  |`` cell per slice in execution
    order, and below it the start time of every slice followed by the stop
    time of the last one.
    """
    if not slices:
        return "Gantt schedule\n(no execution)"

    cells = "|"
    for sl in slices:
        pid = str(sl.pid)
        padding = " " * ((CELL_WIDTH - len(pid)) // 2)
        cells += f"{padding}{pid}{padding}|"

    marks = "\t".join(str(sl.start_time) for sl in slices)
    marks += f"\t{slices[-1].end_time}"

    return "\n".join(["Gantt schedule", cells, marks])


def build_rich_gantt(slices: Sequence[ScheduledSlice]) -> Tuple[Panel, str]:
    """
    Build a Rich Panel containing a colored Gantt chart and a string with time marks.
    """
    if not slices:
        panel = Panel("No execution", title="Gantt schedule")
        return panel, ""

    slices = sorted(slices, key=lambda s: (s.start_time, s.end_time))

    colors = ["red", "green", "yellow", "blue", "magenta", "cyan"]
    pid_to_color: Dict[int, str] = {}

    def pid_color(pid: int) -> str:
        if pid not in pid_to_color:
            idx = len(pid_to_color) % len(colors)
            pid_to_color[pid] = colors[idx]
        return pid_to_color[pid]

    timeline = Text()
    labels = Text()
    time_marks: List[str] = ["0"]
    last_time = 0

    for sl in slices:
        idle_gap = sl.start_time - last_time
        if idle_gap > 0:
            gap_width = max(idle_gap, len(str(sl.start_time)) + 1)
            timeline.append(" " * gap_width)
            labels.append(" " * gap_width)
            time_marks.append(f"{sl.start_time:>{gap_width}}")
            last_time = sl.start_time

        # Cells are at least wide enough for the pid and the end mark.
        label = str(sl.pid)
        width = max(sl.duration, len(label) + 1, len(str(sl.end_time)) + 1)
        timeline.append(" " * width, style=f"on {pid_color(sl.pid)}")
        labels.append(label.ljust(width), style="bold")

        last_time = sl.end_time
        time_marks.append(f"{last_time:>{width}}")

    table = Table.grid(padding=(0, 0))
    table.add_row(timeline)
    table.add_row(labels)

    panel = Panel.fit(table, title="Gantt schedule")
    return panel, "".join(time_marks)
