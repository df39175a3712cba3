from __future__ import annotations

import csv
import json
from pathlib import Path
from typing import List, Sequence

from .errors import WorkloadFormatError
from .models import Process

SAMPLE_ARRIVALS = (0, 1, 2)
SAMPLE_BURSTS = (5, 3, 8)


def load_workload(path: str | Path) -> List[Process]:
    """
    Load a workload from a JSON or CSV file into a list of Process objects.

    Entries without a ``pid`` get their 1-based position in the file.
    """
    path = Path(path)
    suffix = path.suffix.lower()

    if suffix == ".json":
        return _load_json(path)
    if suffix == ".csv":
        return _load_csv(path)

    raise WorkloadFormatError(f"Unsupported workload format: {suffix} (use .json or .csv)")


def _load_json(path: Path) -> List[Process]:
    with path.open("r", encoding="utf-8") as f:
        try:
            raw = json.load(f)
        except json.JSONDecodeError as exc:
            raise WorkloadFormatError(f"{path}: invalid JSON ({exc})") from exc

    if not isinstance(raw, list):
        raise WorkloadFormatError("JSON workload must be a list of process objects")

    return [_process_from_mapping(entry, position) for position, entry in enumerate(raw, start=1)]


def _load_csv(path: Path) -> List[Process]:
    with path.open("r", encoding="utf-8", newline="") as f:
        reader = csv.DictReader(f)
        return [_process_from_mapping(row, position) for position, row in enumerate(reader, start=1)]


def _as_int(value) -> int:
    # JSON numbers may be floats; never truncate a fractional time
    if isinstance(value, float) and not value.is_integer():
        raise ValueError(f"not a whole number: {value}")
    return int(value)


def _process_from_mapping(mapping, position: int) -> Process:
    try:
        pid_val = mapping.get("pid")
        pid = _as_int(pid_val) if pid_val not in (None, "") else position
        arrival_time = _as_int(mapping["arrival_time"])
        burst_time = _as_int(mapping["burst_time"])
    except (AttributeError, KeyError, TypeError, ValueError) as exc:
        raise WorkloadFormatError(f"Invalid process entry: {mapping!r}") from exc

    return Process(pid=pid, arrival_time=arrival_time, burst_time=burst_time)


def processes_from_times(arrivals: Sequence[int], bursts: Sequence[int]) -> List[Process]:
    if len(arrivals) != len(bursts):
        raise WorkloadFormatError(
            f"Got {len(arrivals)} arrival times but {len(bursts)} burst times"
        )
    return [
        Process(pid=pid, arrival_time=at, burst_time=bt)
        for pid, (at, bt) in enumerate(zip(arrivals, bursts), start=1)
    ]


def sample_workload() -> List[Process]:
    """Three processes: AT 0, 1, 2 and BT 5, 3, 8."""
    return processes_from_times(SAMPLE_ARRIVALS, SAMPLE_BURSTS)

