from rich.console import Console
from rich.markup import escape
from rich.progress import Progress, SpinnerColumn, TextColumn, TimeElapsedColumn
from typing import Optional

from ..analytics import LoggingSink, StatusSink, TimedEvent

def create_progress(console: Optional[Console] = None) -> Progress:
    return Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        TimeElapsedColumn(),
        console=console,
        transient=True,
    )

class ProgressSink(LoggingSink):
    """Shows each pipeline event on a rich status line while keeping LoggingSink totals."""

    def __init__(self, progress: Progress, description: str = "Generating story..."):
        super().__init__()
        self.progress = progress
        self.task_id = progress.add_task(description, total=None)

    def on_event(self, event: TimedEvent) -> None:
        super().on_event(event)
        message = StatusSink.describe(event)
        if not message:
            return
        style = "green" if event.ok else "red"
        self.progress.console.print(f"[{style}]{escape(message)}[/{style}]")
        if event.name == "story-evaluation" and event.ok:
            self.progress.update(self.task_id, description="Reviewing evaluation...")
        elif event.name == "targeted-revisions":
            self.progress.update(self.task_id, description="Re-evaluating revised story...")
        else:
            self.progress.update(self.task_id, description="Evaluating story...")
