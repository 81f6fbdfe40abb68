import time
from typing import Callable

Clock = Callable[[], int]

def wall_clock_ms() -> int:
    """Current wall-clock time in epoch milliseconds."""
    return int(time.time() * 1000)

def time_since(ts_ms: int, now_ms: int) -> str:
    """Compact age label: 'just now', then minutes, hours, days."""
    minutes = (now_ms - ts_ms) // 60000
    if minutes < 1:
        return "just now"
    if minutes < 60:
        return f"{minutes}m"
    hours = minutes // 60
    if hours < 24:
        return f"{hours}h"
    return f"{hours // 24}d"
