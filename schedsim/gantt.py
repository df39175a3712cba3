from __future__ import annotations

from typing import Dict, List

from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from .models import Segment


def render_gantt(segments: List[Segment]) -> str:
    """
    Plain-text Gantt chart: one row of labels, then each segment's start
    time followed by the final end time.
    """
    if not segments:
        return "Gantt chart: (none)"

    labels = "".join(f"| {s.label} " for s in segments) + "|"
    times = "\t".join(str(s.start_time) for s in segments) + f"\t{segments[-1].end_time}"

    return "\n".join(["Gantt Chart:", labels, times])


def build_rich_gantt(segments: List[Segment]) -> tuple[Panel, str]:
    """
    Build a Rich Panel containing a colored Gantt chart and a string with time marks.
    """
    if not segments:
        panel = Panel("No execution", title="Gantt Chart")
        return panel, ""

    colors = ["red", "green", "yellow", "blue", "magenta", "cyan"]
    pid_to_color: Dict[int, str] = {}

    def pid_color(pid: int) -> str:
        if pid not in pid_to_color:
            idx = len(pid_to_color) % len(colors)
            pid_to_color[pid] = colors[idx]
        return pid_to_color[pid]

    timeline = Text()
    labels = Text()
    time_marks = str(segments[0].start_time)

    for seg in segments:
        # wide enough for the label and the end-time mark
        width = max(len(seg.label), len(str(seg.end_time))) + 1
        width = max(width, seg.duration)

        if seg.is_idle:
            timeline.append("." * width, style="dim")
            labels.append(seg.label.ljust(width), style="dim")
        else:
            timeline.append(" " * width, style=f"on {pid_color(seg.pid)}")
            labels.append(seg.label.ljust(width), style="bold")

        time_marks += f"{seg.end_time:>{width}}"

    table = Table.grid(padding=(0, 0))
    table.add_row(timeline)
    table.add_row(labels)

    panel = Panel.fit(table, title="Gantt Chart")
    return panel, time_marks
