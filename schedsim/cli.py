from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import List, Optional

from rich import box
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table

from .algorithms import ALGORITHMS, run_algorithm
from .errors import SchedulerError
from .gantt import build_rich_gantt, render_gantt
from .metrics import summarize_process_metrics
from .models import Process, ScheduleResult
from .workload_io import load_workload, processes_from_times, sample_workload

logger = logging.getLogger(__name__)

DEFAULT_QUANTUM = 2

MENU_CHOICES = {
    "1": "fcfs",
    "2": "sjf",
    "3": "rr",
}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="schedsim",
        description="CPU scheduling simulator (FCFS, SJF non-preemptive, Round Robin).",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Log every scheduling decision.",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    run_parser = subparsers.add_parser("run", help="Run one scheduling algorithm on a workload.")
    run_parser.add_argument(
        "--algorithm",
        "-a",
        required=True,
        choices=sorted(ALGORITHMS),
        help="Algorithm to use.",
    )
    _add_source_arguments(run_parser)
    run_parser.add_argument(
        "--quantum",
        "-q",
        type=int,
        default=None,
        help=f"Time quantum for round-robin (default: {DEFAULT_QUANTUM}; ignored by FCFS and SJF).",
    )
    run_parser.add_argument(
        "--plain",
        action="store_true",
        help="Print the Gantt chart as plain text instead of a colored panel.",
    )

    compare_parser = subparsers.add_parser(
        "compare",
        help="Run several algorithms on the same workload and compare average metrics.",
    )
    _add_source_arguments(compare_parser)
    compare_parser.add_argument(
        "--algorithms",
        "-a",
        nargs="+",
        choices=list(ALGORITHMS),
        default=list(ALGORITHMS),
        help="Algorithms to compare (default: fcfs sjf rr).",
    )
    compare_parser.add_argument(
        "--quantum",
        "-q",
        type=int,
        default=DEFAULT_QUANTUM,
        help=f"Time quantum used for RR when included (default: {DEFAULT_QUANTUM}).",
    )

    subparsers.add_parser(
        "menu",
        help="Interactive prompts: enter processes, then pick an algorithm.",
    )

    return parser


def _add_source_arguments(parser: argparse.ArgumentParser) -> None:
    source = parser.add_mutually_exclusive_group(required=True)
    source.add_argument(
        "--workload",
        "-w",
        help="Path to JSON or CSV workload file.",
    )
    source.add_argument(
        "--sample",
        action="store_true",
        help="Use the built-in sample (AT 0,1,2 / BT 5,3,8).",
    )


def _setup_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
    )


def resolve_quantum(quantum: Optional[int]) -> int:
    """
    Substitute the default quantum for a missing or non-positive one.
    """
    if quantum is None:
        return DEFAULT_QUANTUM
    if quantum <= 0:
        logger.warning("Quantum %d is not positive; using %d", quantum, DEFAULT_QUANTUM)
        return DEFAULT_QUANTUM
    return quantum


def _load_source(args: argparse.Namespace) -> List[Process]:
    if args.sample:
        return sample_workload()
    return load_workload(Path(args.workload))


def _run(name: str, processes: List[Process], quantum: Optional[int]) -> ScheduleResult:
    q = resolve_quantum(quantum) if name == "rr" else None
    return run_algorithm(name, processes, quantum=q)


def _print_result(result: ScheduleResult, plain: bool = False) -> None:
    console = Console()

    console.print(f"[bold]Algorithm:[/bold] {result.algorithm}")
    if result.quantum is not None:
        console.print(f"[bold]Quantum:[/bold] {result.quantum}")

    console.print()

    if plain:
        console.print(escape(render_gantt(result.timeline)))
    else:
        panel, time_marks = build_rich_gantt(result.timeline)
        console.print(panel)
        if time_marks:
            console.print(time_marks)

    console.print()

    proc_table = Table(title="Per-process metrics", box=box.SIMPLE_HEAVY)
    proc_table.add_column("Process", justify="center")
    for h in ["AT", "BT", "CT", "TAT", "WT"]:
        proc_table.add_column(h, justify="right")

    for p in result.processes:
        proc_table.add_row(
            f"P{p.pid}",
            str(p.arrival_time),
            str(p.burst_time),
            str(p.completion_time),
            str(p.turnaround_time),
            str(p.waiting_time),
        )

    console.print(proc_table)
    console.print()

    summary = summarize_process_metrics(result.processes)
    sys_table = Table(title="Summary", box=box.SIMPLE_HEAVY)
    sys_table.add_column("Metric")
    sys_table.add_column("Value", justify="right")

    sys_table.add_row("Average TAT", f"{summary['avg_turnaround']:.2f}")
    sys_table.add_row("Average WT", f"{summary['avg_waiting']:.2f}")
    if result.system:
        sys = result.system
        sys_table.add_row("Makespan", str(sys.makespan))
        sys_table.add_row("Idle time", str(sys.idle_time))
        sys_table.add_row("Throughput (proc/time)", f"{sys.throughput:.3f}")
        sys_table.add_row("CPU utilization", f"{sys.cpu_utilization*100:.1f}%")

    console.print(sys_table)


def _print_compare(processes: List[Process], algorithms: List[str], quantum: int, title: str) -> None:
    console = Console()

    summary_table = Table(title=title, box=box.SIMPLE_HEAVY)
    summary_table.add_column("Algorithm")
    summary_table.add_column("Quantum", justify="right")
    summary_table.add_column("Avg TAT", justify="right")
    summary_table.add_column("Avg WT", justify="right")
    summary_table.add_column("CPU util.", justify="right")

    for alg in algorithms:
        result = _run(alg, processes, quantum)
        summary = summarize_process_metrics(result.processes)
        summary_table.add_row(
            result.algorithm,
            "" if result.quantum is None else str(result.quantum),
            f"{summary['avg_turnaround']:.2f}",
            f"{summary['avg_waiting']:.2f}",
            f"{result.system.cpu_utilization*100:.1f}%",
        )

    console.print(summary_table)


def _ask_int(prompt: str, minimum: int) -> int:
    console = Console()
    while True:
        raw = input(prompt).strip()
        try:
            value = int(raw)
        except ValueError:
            console.print(f"[red]Not a number: {escape(repr(raw))}[/red]")
            continue
        if value < minimum:
            console.print(f"[red]Value must be at least {minimum}.[/red]")
            continue
        return value


def _prompt_processes() -> List[Process]:
    console = Console()
    use_sample = input("Use sample input? [Enter=yes, n=no]: ").strip().lower()
    if use_sample in {"", "y", "yes", "1"}:
        console.print("Sample loaded: 3 processes (AT: 0,1,2 BT: 5,3,8)")
        return sample_workload()

    n = _ask_int("Number of processes: ", minimum=1)
    arrivals: List[int] = []
    bursts: List[int] = []
    for pid in range(1, n + 1):
        arrivals.append(_ask_int(f"P{pid} Arrival Time: ", minimum=0))
        bursts.append(_ask_int(f"P{pid} Burst Time  : ", minimum=1))
    return processes_from_times(arrivals, bursts)


def _interactive_menu() -> None:
    console = Console()
    try:
        _menu_loop(console)
    except EOFError:
        # stdin closed (Ctrl-D or exhausted pipe)
        console.print()


def _menu_loop(console: Console) -> None:
    console.print("[bold cyan]CPU Scheduling Simulator[/bold cyan] (FCFS, SJF non-preemptive, RR)")
    processes = _prompt_processes()

    while True:
        console.print("\n[bold]Choose algorithm:[/bold] [dim](q to quit)[/dim]")
        console.print("  [yellow]1[/yellow]. FCFS")
        console.print("  [yellow]2[/yellow]. SJF (non-preemptive)")
        console.print("  [yellow]3[/yellow]. Round Robin")
        console.print("  [yellow]4[/yellow]. Compare all")
        console.print("  [yellow]5[/yellow]. Enter new processes")

        choice = input("Select [1-5 or q]: ").strip().lower()
        if choice in {"q", "quit", "exit"}:
            return

        if choice == "5":
            processes = _prompt_processes()
            continue

        quantum = None
        if choice in {"3", "4"}:
            q_in = input(f"Enter quantum [{DEFAULT_QUANTUM}]: ").strip()
            try:
                quantum = int(q_in) if q_in else None
            except ValueError:
                console.print("[red]Invalid quantum; using default.[/red]")

        try:
            if choice == "4":
                _print_compare(processes, list(ALGORITHMS), resolve_quantum(quantum), "Algorithm comparison")
            elif choice in MENU_CHOICES:
                _print_result(_run(MENU_CHOICES[choice], processes, quantum))
            else:
                console.print("[red]Invalid choice.[/red]")
        except SchedulerError as exc:
            console.print(f"[red]Error: {escape(str(exc))}[/red]")


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    _setup_logging(args.verbose)

    console = Console()

    try:
        if args.command == "run":
            processes = _load_source(args)
            _print_result(_run(args.algorithm, processes, args.quantum), plain=args.plain)
            return 0

        if args.command == "compare":
            processes = _load_source(args)
            title = "Algorithm comparison: " + ("sample" if args.sample else args.workload)
            _print_compare(processes, args.algorithms, resolve_quantum(args.quantum), title)
            return 0

        if args.command == "menu":
            _interactive_menu()
            return 0
    except (SchedulerError, OSError) as exc:
        console.print(f"[red]Error: {escape(str(exc))}[/red]")
        return 1

    parser.error(f"Unknown command: {args.command}")
    return 1


if __name__ == "__main__":
    raise SystemExit(main())
