# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Human-facing console output.

The grading pipeline never prints. It calls a Reporter at the points a
person watching the run cares about, and ConsoleReporter turns those
calls into colored lines and a progress bar with rich. Tests pass their
own Reporter to see exactly what the pipeline announced.
"""

from pathlib import Path
from typing import Optional, Protocol

from rich.console import Console
from rich.markup import escape
from rich.progress import (
    BarColumn,
    MofNCompleteColumn,
    Progress,
    SpinnerColumn,
    TaskID,
    TimeElapsedColumn,
    TimeRemainingColumn,
)

from rustgrade.config.schema import GraderConfig
from rustgrade.grading.models import Statistics
from rustgrade.reporting.writer import format_pass_rate


class Reporter(Protocol):
    """Everything the pipeline can tell the person running it."""

    def run_started(self, description: str) -> None: ...

    def discovered(self, count: int) -> None: ...

    def progress_started(self, total: int) -> None: ...

    def progress_advanced(self) -> None: ...

    def progress_finished(self) -> None: ...

    def exercise_started(self, name: str) -> None: ...

    def captured_output(self, stdout: str, stderr: str) -> None: ...

    def compile_failed(self, name: str) -> None: ...

    def exercise_finished(self, name: str, success: bool) -> None: ...

    def summary(self, statistics: Statistics) -> None: ...

    def report_saved(self, path: Path) -> None: ...


class ConsoleReporter:
    """Reporter that writes to the terminal with rich."""

    def __init__(self, console: Optional[Console] = None) -> None:
        self.console = console or Console()
        self._progress: Optional[Progress] = None
        self._task: Optional[TaskID] = None

    def run_started(self, description: str) -> None:
        self.console.print(f"[bold blue]{escape(description)}[/bold blue]")

    def discovered(self, count: int) -> None:
        self.console.print(f"[bold blue]Found[/bold blue] {count} [bold blue]exercise files[/bold blue]")

    def progress_started(self, total: int) -> None:
        self._progress = Progress(
            SpinnerColumn(style="green"),
            TimeElapsedColumn(),
            BarColumn(complete_style="cyan", finished_style="blue"),
            MofNCompleteColumn(),
            TimeRemainingColumn(),
            console=self.console,
            transient=False,
        )
        self._task = self._progress.add_task("grading", total=total)
        self._progress.start()

    def progress_advanced(self) -> None:
        if self._progress is not None and self._task is not None:
            self._progress.advance(self._task)

    def progress_finished(self) -> None:
        if self._progress is None:
            return
        self._progress.stop()
        self._progress = None
        self._task = None
        self.console.print("[green]Grading complete![/green]")

    def exercise_started(self, name: str) -> None:
        self.console.print(f"[bold blue]Grading exercise:[/bold blue] {escape(name)}", highlight=False)

    def captured_output(self, stdout: str, stderr: str) -> None:
        for text in (stdout, stderr):
            if text:
                self.console.out(text.rstrip("\n"), highlight=False)

    def compile_failed(self, name: str) -> None:
        self.console.print(f"[bold red]Compilation failed:[/bold red] {escape(name)}", highlight=False)

    def exercise_finished(self, name: str, success: bool) -> None:
        if success:
            self.console.print(f"[bold green]✓[/bold green] {escape(name)}", highlight=False)
        else:
            self.console.print(f"[bold red]✗[/bold red] {escape(name)}", highlight=False)

    def summary(self, statistics: Statistics) -> None:
        self.console.print("[bold green]Grading summary[/bold green]")
        self.console.print(f"[blue]Total exercises[/blue]: {statistics.total_exercises}")
        self.console.print(f"[green]Passed[/green]: {statistics.total_succeeds}")
        self.console.print(f"[red]Failed[/red]: {statistics.total_failures}")
        self.console.print(f"[blue]Total time[/blue]: {statistics.total_time}s")
        self.console.print(f"[green]Pass rate[/green]: {format_pass_rate(statistics)}")

    def report_saved(self, path: Path) -> None:
        self.console.print(f"[blue]Grade report saved to {escape(str(path))}[/blue]", highlight=False)

    def error(self, message: str) -> None:
        self.console.print(f"[bold red]Error:[/bold red] {escape(message)}", highlight=False)

    def settings(self, settings: GraderConfig) -> None:
        self.console.print(f"[blue]Build directory[/blue]: {escape(settings.build_directory)}", highlight=False)
        self.console.print(f"[blue]Report path[/blue]: {escape(settings.report_path)}", highlight=False)
        self.console.print(
            f"[blue]Managed-project marker[/blue]: '{escape(settings.managed_marker)}' "
            f"(allow-list: {escape(', '.join(settings.managed_allowlist))})",
            highlight=False,
        )

    def toolchain(self, name: str, path: Optional[str], version: Optional[str]) -> None:
        if path is None:
            self.console.print(f"[red]✗[/red] {escape(name)}: not found on PATH", highlight=False)
            return
        self.console.print(
            f"[green]✓[/green] {escape(name)}: {escape(version or 'version unknown')} ({escape(path)})",
            highlight=False,
        )
