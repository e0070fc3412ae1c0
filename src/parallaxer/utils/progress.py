"""
Progress and status reporting.

The orchestrator reports through a ProgressSink: a fractional progress
value, a short status text and free-form log lines. Sinks are
fire-and-forget: the pipeline never waits on them or reads anything back.
"""

from __future__ import annotations

import time
from typing import Callable, List, Optional


class ProgressSink:
    """Silent sink; subclasses override the hooks they care about."""

    def report_progress(self, fraction: float) -> None:
        pass

    def report_status(self, text: str) -> None:
        pass

    def report_log_line(self, text: str) -> None:
        pass


def clamp_fraction(fraction: float) -> float:
    return max(0.0, min(1.0, float(fraction)))


class ConsoleProgressSink(ProgressSink):
    """Renders a single-line progress bar with ETA on the terminal."""

    def __init__(self, width: int = 40, show_log: bool = True):
        self.width = width
        self.show_log = show_log
        self.start_time = time.time()
        self.fraction = 0.0
        self.status = ""

    def report_progress(self, fraction: float) -> None:
        self.fraction = clamp_fraction(fraction)
        self._display()

    def report_status(self, text: str) -> None:
        self.status = text
        self._display()

    def report_log_line(self, text: str) -> None:
        if self.show_log:
            # Clear the bar line before printing a full log line
            print(f"\r{' ' * (self.width + 60)}\r{text}", flush=True)

    def _display(self):
        filled = int(round(self.fraction * self.width))
        bar = "#" * filled + "-" * (self.width - filled)
        elapsed = time.time() - self.start_time
        if 0 < self.fraction < 1:
            eta = elapsed / self.fraction * (1 - self.fraction)
            eta_str = f"ETA: {eta:.1f}s"
        else:
            eta_str = "ETA: --"
        print(
            f"\r[{bar}] {self.fraction * 100:5.1f}% {self.status} - {eta_str}",
            end="",
            flush=True,
        )

    def finish(self, message: str = "Processing complete") -> None:
        elapsed = time.time() - self.start_time
        print(f"\r{message} - Total time: {elapsed:.1f}s")


class CallbackProgressSink(ProgressSink):
    """Forwards reports to plain callables, e.g. a UI's widgets."""

    def __init__(
        self,
        on_progress: Optional[Callable[[float], None]] = None,
        on_status: Optional[Callable[[str], None]] = None,
        on_log: Optional[Callable[[str], None]] = None,
    ):
        self.on_progress = on_progress
        self.on_status = on_status
        self.on_log = on_log

    def report_progress(self, fraction: float) -> None:
        if self.on_progress:
            self.on_progress(clamp_fraction(fraction))

    def report_status(self, text: str) -> None:
        if self.on_status:
            self.on_status(text)

    def report_log_line(self, text: str) -> None:
        if self.on_log:
            self.on_log(text)


class RecordingProgressSink(ProgressSink):
    """Keeps every report in memory; handy for tests and run summaries."""

    def __init__(self):
        self.progress: List[float] = []
        self.statuses: List[str] = []
        self.log_lines: List[str] = []

    def report_progress(self, fraction: float) -> None:
        self.progress.append(clamp_fraction(fraction))

    def report_status(self, text: str) -> None:
        self.statuses.append(text)

    def report_log_line(self, text: str) -> None:
        self.log_lines.append(text)
