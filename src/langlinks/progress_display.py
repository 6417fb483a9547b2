"""
Rich live panel showing extraction progress.

The panel is redrawn in place instead of scrolling log lines, which keeps
the terminal readable during multi-hour passes over a full Wikidata dump.
"""

import time
from typing import Any, Dict, Optional

from rich import box
from rich.console import Console
from rich.live import Live
from rich.panel import Panel
from rich.table import Table
from rich.text import Text


class ProgressDisplay:
    """
    Context manager for a live-updating panel of counters.

    Usage:
        with ProgressDisplay("Extracting dictionaries") as progress:
            for n, triple in enumerate(triples, 1):
                progress.update(triples=n, items=items_flushed)

    The first metric passed to update() drives the Rate line. With
    enabled=False nothing is rendered but metrics are still tracked,
    so callers need no separate quiet code path.
    """

    def __init__(
        self,
        title: str = "Progress",
        update_interval: int = 100000,
        refresh_per_second: int = 4,
        enabled: bool = True,
        console: Optional[Console] = None,
    ):
        self.title = title
        self.update_interval = max(1, update_interval)
        self.refresh_per_second = refresh_per_second
        self.enabled = enabled
        self.console = console

        self.metrics: Dict[str, Any] = {}
        self.calls = 0
        self.start_time = 0.0
        self._live: Optional[Live] = None
        self._rate_key: Optional[str] = None

    def __enter__(self):
        self.start_time = time.time()
        if self.enabled:
            self._live = Live(
                self._render(),
                refresh_per_second=self.refresh_per_second,
                console=self.console,
            )
            self._live.__enter__()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        if self._live is not None:
            self._live.update(self._render())
            self._live.__exit__(exc_type, exc_val, exc_tb)
            self._live = None
        return False

    def update(self, **metrics: Any) -> None:
        """Record metrics; the panel is redrawn every update_interval calls."""
        self.calls += 1
        self.metrics.update(metrics)

        if self._rate_key is None and metrics:
            self._rate_key = next(iter(metrics))

        if self._live is not None and self.calls % self.update_interval == 0:
            self._live.update(self._render())

    @property
    def elapsed(self) -> float:
        return time.time() - self.start_time if self.start_time else 0.0

    def _rows(self):
        for key, value in self.metrics.items():
            yield key.replace('_', ' ').capitalize(), self._format(value)

        elapsed = self.elapsed
        yield "Elapsed", self._format_duration(elapsed)

        count = self.metrics.get(self._rate_key) if self._rate_key else None
        if elapsed > 0 and isinstance(count, (int, float)):
            yield "Rate", f"{count / elapsed:,.1f}/s"

    def _render(self) -> Panel:
        grid = Table.grid(padding=(0, 2))
        grid.add_column(justify="left", no_wrap=True)
        grid.add_column(justify="right", no_wrap=True)

        for label, value in self._rows():
            grid.add_row(Text(f"{label}:", style="bold grey50"), Text(value, style="bright_cyan"))

        return Panel(grid, title=self.title, box=box.SIMPLE, border_style="bright_black")

    @staticmethod
    def _format(value: Any) -> str:
        if isinstance(value, bool):
            return str(value)
        if isinstance(value, int):
            return f"{value:,}"
        if isinstance(value, float):
            return f"{value:,.2f}"
        return str(value)

    @staticmethod
    def _format_duration(seconds: float) -> str:
        hours, rest = divmod(int(seconds), 3600)
        minutes, secs = divmod(rest, 60)
        if hours:
            return f"{hours:02d}:{minutes:02d}:{secs:02d}"
        return f"{minutes:02d}:{secs:02d}"
