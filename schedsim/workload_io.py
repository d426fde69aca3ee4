from __future__ import annotations

import csv
import json
import logging
import re
from pathlib import Path
from typing import Iterable, List, Mapping, Sequence

from .models import Process

logger = logging.getLogger(__name__)

_INTEGER = re.compile(r"[+-]?\d+")


class WorkloadError(ValueError):
    """Raised when a workload file cannot be turned into valid processes."""


def load_workload(path: str | Path) -> List[Process]:
    """
    Load a workload from a JSON or CSV file into a list of Process objects.

    Input order is preserved. Bursts must be positive, arrivals non-negative
    and ids unique.
    """
    path = Path(path)
    suffix = path.suffix.lower()

    if suffix == ".json":
        processes = _load_json(path)
    elif suffix == ".csv":
        processes = _load_csv(path)
    else:
        raise WorkloadError(f"Unsupported workload format: {suffix} (use .json or .csv)")

    _check_unique(processes)
    logger.info("loaded %d processes from %s", len(processes), path)
    return processes


def _load_json(path: Path) -> List[Process]:
    try:
        with path.open("r", encoding="utf-8") as f:
            raw = json.load(f)
    except json.JSONDecodeError as exc:
        raise WorkloadError(f"{path}: invalid JSON: {exc}") from exc
    except UnicodeDecodeError as exc:
        raise WorkloadError(f"{path}: not UTF-8 text: {exc}") from exc

    if not isinstance(raw, list):
        raise WorkloadError("JSON workload must be a list of process objects")

    return [_process_from_mapping(entry) for entry in raw]


def _load_csv(path: Path) -> List[Process]:
    try:
        with path.open("r", encoding="utf-8", newline="") as f:
            rows = [[cell.strip() for cell in row] for row in csv.reader(f)]
    except UnicodeDecodeError as exc:
        raise WorkloadError(f"{path}: not UTF-8 text: {exc}") from exc
    except csv.Error as exc:
        raise WorkloadError(f"{path}: invalid CSV: {exc}") from exc
    rows = [row for row in rows if any(row)]

    if rows and rows[0][0].lower() == "pid":
        header = rows[0]
        return [_process_from_mapping(dict(zip(header, row))) for row in rows[1:]]

    return [_process_from_row(row) for row in rows]


def _as_int(value) -> int:
    """
    Accept real integers and integer strings only; floats, booleans and
    anything else are rejected rather than truncated.
    """
    if isinstance(value, int) and not isinstance(value, bool):
        return value
    if isinstance(value, str) and _INTEGER.fullmatch(value.strip()):
        return int(value)
    raise ValueError(f"not an integer: {value!r}")


def _process_from_row(row: Sequence[str]) -> Process:
    """
    Headerless row: ``id,burst,arrival[,priority]``.
    """
    if len(row) not in (3, 4):
        raise WorkloadError(f"Invalid process row (want id,burst,arrival[,priority]): {row!r}")
    try:
        pid, burst_time, arrival_time = (_as_int(cell) for cell in row[:3])
        priority = _as_int(row[3]) if len(row) == 4 and row[3] != "" else 0
    except ValueError as exc:
        raise WorkloadError(f"Invalid process row: {row!r}") from exc

    return _validated(pid, arrival_time, burst_time, priority, row)


def _process_from_mapping(mapping: Mapping) -> Process:
    try:
        pid = _as_int(mapping["pid"])
        arrival_time = _as_int(mapping["arrival_time"])
        burst_time = _as_int(mapping["burst_time"])
        priority_val = mapping.get("priority")
        priority = _as_int(priority_val) if priority_val not in (None, "") else 0
    except (KeyError, TypeError, ValueError, AttributeError) as exc:
        raise WorkloadError(f"Invalid process entry: {mapping!r}") from exc

    return _validated(pid, arrival_time, burst_time, priority, mapping)


def _validated(pid: int, arrival_time: int, burst_time: int, priority: int, source) -> Process:
    if burst_time <= 0:
        raise WorkloadError(f"Burst time must be positive: {source!r}")
    if arrival_time < 0:
        raise WorkloadError(f"Arrival time must not be negative: {source!r}")
    return Process(pid=pid, arrival_time=arrival_time, burst_time=burst_time, priority=priority)


def _check_unique(processes: Iterable[Process]) -> None:
    seen = set()
    for p in processes:
        if p.pid in seen:
            raise WorkloadError(f"Duplicate process id: {p.pid}")
        seen.add(p.pid)
