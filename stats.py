from __future__ import annotations
from datetime import date
from decimal import Decimal, ROUND_HALF_UP
from typing import Dict, List
import pandas as pd
from models import DailyStats, RoutineSlot


STATS_COLUMNS = ["Date", "Completed", "Total", "Completion %", "Minutes studied"]


def _percent(part: int, whole: int, places: int = 0) -> Decimal:
    # halves round up, not to even
    exact = Decimal(part * 100) / Decimal(whole or 1)
    return exact.quantize(Decimal(1).scaleb(-places), rounding=ROUND_HALF_UP)


def completion_percent(slots: List[RoutineSlot]) -> int:
    done = sum(1 for s in slots if s.is_completed)
    return int(_percent(done, len(slots)))


def day_stats(slots: List[RoutineSlot]) -> DailyStats:
    completed = [s for s in slots if s.is_completed]
    return DailyStats(
        total_slots=len(slots),
        completed_slots=len(completed),
        minutes_studied=sum(s.duration_minutes for s in completed),
    )


def stats_frame(daily_stats: Dict[date, DailyStats]) -> pd.DataFrame:
    """Stats history as a table, newest day first."""
    rows = [
        {
            "Date": d,
            "Completed": s.completed_slots,
            "Total": s.total_slots,
            "Completion %": float(_percent(s.completed_slots, s.total_slots, 1)),
            "Minutes studied": s.minutes_studied,
        }
        for d, s in daily_stats.items()
    ]
    if not rows:
        return pd.DataFrame(columns=STATS_COLUMNS)
    return pd.DataFrame(rows, columns=STATS_COLUMNS).sort_values(by="Date", ascending=False).reset_index(drop=True)
