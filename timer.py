"""Single countdown timer bound to at most one routine slot."""
from __future__ import annotations
import time
from dataclasses import dataclass
from typing import Callable, Optional


TIMES_UP_MESSAGE = "Time's Up! Take a 10 min break."


@dataclass
class TimerEvent:
    slot_id: str
    message: str = TIMES_UP_MESSAGE


def format_time_left(seconds: int) -> str:
    minutes, secs = divmod(max(0, seconds), 60)
    return f"{minutes}:{secs:02d}"


class SlotTimer:
    """
    Idle, or Running(slot_id, seconds_remaining).

    Starting the running slot again stops it and drops the elapsed time.
    Starting a different slot retargets the timer from that slot's full
    duration.
    """

    def __init__(self, on_finished: Optional[Callable[[TimerEvent], None]] = None):
        self.active_slot_id: Optional[str] = None
        self.seconds_remaining: int = 0
        self.last_tick_at: Optional[float] = None
        self.on_finished = on_finished

    @property
    def is_running(self) -> bool:
        return self.active_slot_id is not None

    def is_running_for(self, slot_id: str) -> bool:
        return self.active_slot_id == slot_id

    def start(self, slot_id: str, minutes: int, now: Optional[float] = None) -> None:
        if self.active_slot_id == slot_id:
            self.stop()
            return
        self.active_slot_id = slot_id
        self.seconds_remaining = max(0, minutes) * 60
        self.last_tick_at = time.monotonic() if now is None else now

    def stop(self) -> None:
        self.active_slot_id = None
        self.seconds_remaining = 0
        self.last_tick_at = None

    def tick(self) -> Optional[TimerEvent]:
        """Advance one second. Returns an event when the countdown ends."""
        if not self.is_running:
            return None
        if self.seconds_remaining > 0:
            self.seconds_remaining -= 1
        if self.seconds_remaining > 0:
            return None

        event = TimerEvent(slot_id=self.active_slot_id)
        self.stop()
        if self.on_finished is not None:
            self.on_finished(event)
        return event

    def advance(self, now: Optional[float] = None) -> Optional[TimerEvent]:
        """
        Tick once for every whole second since the last tick. Page reruns
        call this freely; less than a second of wall time ticks nothing.
        """
        if not self.is_running:
            return None
        now = time.monotonic() if now is None else now
        if self.last_tick_at is None:
            self.last_tick_at = now
            return None

        elapsed = int(now - self.last_tick_at)
        if elapsed <= 0:
            return None
        self.last_tick_at += elapsed
        for _ in range(min(elapsed, self.seconds_remaining + 1)):
            event = self.tick()
            if event is not None:
                return event
        return None

    def time_left(self) -> str:
        return format_time_left(self.seconds_remaining)
