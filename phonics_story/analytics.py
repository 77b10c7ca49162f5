"""Timed pipeline events and the sinks that consume them."""

import time
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Callable, Iterator, Optional, Protocol

from loguru import logger

STAGE_LABELS = {
    "story-generation": "Generated story",
    "story-evaluation": "Evaluated story",
    "targeted-revisions": "Revised sentences",
}


@dataclass
class TimedEvent:
    name: str
    pass_number: int
    ok: bool
    duration_ms: float
    meta: dict = field(default_factory=dict)


class AnalyticsSink(Protocol):
    def on_event(self, event: TimedEvent) -> None:
        ...


class NullSink:
    def on_event(self, event: TimedEvent) -> None:
        pass


class LoggingSink:
    """Logs every event and keeps running totals for a summary."""

    def __init__(self):
        self.events: list[TimedEvent] = []
        self.counters = {
            "stories_generated": 0,
            "evaluations": 0,
            "revision_passes": 0,
            "revisions_applied": 0,
        }

    def on_event(self, event: TimedEvent) -> None:
        self.events.append(event)
        self._update_counters(event)

        status = "ok" if event.ok else "failed"
        label = STAGE_LABELS.get(event.name, event.name)
        details = ", ".join(f"{k}={v}" for k, v in event.meta.items())
        message = f"[pass {event.pass_number}] {label} ({status}) in {event.duration_ms:.1f}ms"
        if details:
            message += f" | {details}"

        if event.ok:
            logger.info(message)
        else:
            logger.warning(message)

    def _update_counters(self, event: TimedEvent) -> None:
        if not event.ok:
            return
        if event.name == "story-generation":
            self.counters["stories_generated"] += 1
        elif event.name == "story-evaluation":
            self.counters["evaluations"] += 1
        elif event.name == "targeted-revisions":
            self.counters["revision_passes"] += 1
            self.counters["revisions_applied"] += int(event.meta.get("revisions_applied", 0))

    def summary(self) -> dict:
        total = len(self.events)
        successful = sum(1 for e in self.events if e.ok)
        durations = [e.duration_ms for e in self.events]
        return {
            "total_events": total,
            "successful_events": successful,
            "failed_events": total - successful,
            "success_rate": round(successful / total * 100) if total else 0,
            "total_time_ms": round(sum(durations)),
            "avg_event_ms": round(sum(durations) / total) if total else 0,
            "slowest_event_ms": max(durations) if durations else 0,
            "fastest_event_ms": min(durations) if durations else 0,
            **self.counters,
        }


class StatusSink:
    """Turns pipeline events into short status lines for a user interface."""

    def __init__(self, callback: Callable[[str], None]):
        self.callback = callback

    def on_event(self, event: TimedEvent) -> None:
        message = self.describe(event)
        if message:
            self.callback(message)

    @staticmethod
    def describe(event: TimedEvent) -> Optional[str]:
        meta = event.meta
        if not event.ok:
            return f"{STAGE_LABELS.get(event.name, event.name)} failed: {meta.get('error', 'unknown error')}"
        if event.name == "story-generation":
            return f'Generated story: "{meta.get("title") or "Untitled"}"'
        if event.name == "story-evaluation":
            score = meta.get("overall_score")
            verdict = "meets standards" if meta.get("meets_standards") else "needs work"
            if isinstance(score, (int, float)):
                return f"Evaluated story: score {score:.2f}, {verdict}"
            return f"Evaluated story: {verdict}"
        if event.name == "targeted-revisions":
            return (
                f"Revised {meta.get('revisions_applied', 0)} of "
                f"{meta.get('critical_revisions', 0)} flagged sentences"
            )
        return None


def _emit(sink: Optional[AnalyticsSink], event: TimedEvent) -> None:
    if sink is None:
        return
    try:
        sink.on_event(event)
    except Exception as e:
        logger.warning(f"Analytics sink rejected event {event.name}: {e}")


@contextmanager
def timed(name: str, pass_number: int, sink: Optional[AnalyticsSink]) -> Iterator[dict]:
    """Time a block and report it to ``sink``.

    The yielded dict becomes the event metadata on success. An exception
    leaving the block is reported with ``ok=False`` and re-raised.
    """
    meta: dict = {}
    start = time.perf_counter()
    try:
        yield meta
    except BaseException as exc:
        duration = (time.perf_counter() - start) * 1000
        _emit(sink, TimedEvent(name, pass_number, False, duration, {"error": str(exc) or type(exc).__name__}))
        raise
    duration = (time.perf_counter() - start) * 1000
    _emit(sink, TimedEvent(name, pass_number, True, duration, meta))
