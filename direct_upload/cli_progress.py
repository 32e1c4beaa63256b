"""Console rendering and progress helpers for the direct-up CLI."""
from __future__ import annotations

from typing import Any, Dict, Optional

from rich.console import Console
from rich.panel import Panel
from rich.progress import (
    BarColumn,
    Progress,
    SpinnerColumn,
    TaskID,
    TextColumn,
    TimeElapsedColumn,
)
from rich.table import Table

from .models import UploadResult

console = Console()

PHASE_LABELS = (
    (100, "done"),
    (90, "resolving"),
    (20, "transferring"),
    (10, "reading file"),
    (0, "negotiating"),
)


def _phase_for(percent: int) -> str:
    for threshold, label in PHASE_LABELS:
        if percent >= threshold:
            return label
    return "starting"


def _human_size(value: int) -> str:
    size = float(max(value, 0))
    units = ["B", "KB", "MB", "GB", "TB"]
    unit_idx = 0
    while size >= 1024.0 and unit_idx < len(units) - 1:
        size /= 1024.0
        unit_idx += 1
    if unit_idx == 0:
        return f"{int(size)} {units[unit_idx]}"
    return f"{size:.2f} {units[unit_idx]}"


def render_configuration_summary(config: Dict[str, Any]) -> None:
    """Render startup configuration summary."""
    table = Table.grid(padding=(0, 2))
    table.add_column(style="bold cyan", justify="right")
    table.add_column(style="white")

    for key, value in config.items():
        rendered = "-" if value is None else str(value)
        table.add_row(key, rendered)

    panel = Panel(
        table,
        title="[bold green]direct-up[/bold green]",
        subtitle="[dim]presigned upload[/dim]",
        border_style="blue",
    )
    console.print(panel)


class SingleFileUploadProgress:
    """Single-file upload progress renderer driven by percent milestones."""

    def __init__(self, filename: str, size_bytes: int = 0):
        self.filename = filename
        self.size_bytes = size_bytes
        self._started = False
        self._task_id: Optional[TaskID] = None
        self._progress = Progress(
            SpinnerColumn(),
            TextColumn("[bold cyan]{task.fields[filename]}", justify="left"),
            BarColumn(bar_width=42),
            TextColumn("[progress.percentage]{task.percentage:>3.0f}%"),
            TextColumn("[dim]{task.fields[phase]}"),
            TimeElapsedColumn(),
            expand=False,
            console=console,
        )

    def start(self) -> None:
        if self._started:
            return
        self._progress.start()
        self._task_id = self._progress.add_task(
            "upload",
            filename=f"{self.filename[:48]} ({_human_size(self.size_bytes)})",
            phase="starting",
            total=100,
        )
        self._started = True

    def update(self, percent: int) -> None:
        if not self._started:
            self.start()
        self._progress.update(self._task_id, completed=percent, phase=_phase_for(percent))

    def complete(self, result: Optional[UploadResult] = None, error: Optional[str] = None) -> None:
        if self._started:
            self._progress.stop()
            self._started = False

        if result is not None:
            console.print(f"[green]Uploaded:[/green] {result.name}")
            console.print(f"  url: {result.url}")
            console.print(f"  key: {result.key}")
            return

        suffix = f" - {error}" if error else ""
        console.print(f"[red]Failed:[/red] {self.filename}{suffix}")

    def get_callback(self):
        def callback(percent: int) -> None:
            self.update(percent)

        return callback
