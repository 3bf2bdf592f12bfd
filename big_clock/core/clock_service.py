"""
Clock Service - Produces the fixed-format clock string from local time
"""
from datetime import datetime
from typing import Callable, Optional


CLOCK_TEXT_LENGTH = 12


class ClockService:
    """
    Local wall-clock time formatted as ``HH:MM:SS.mmm``.
    """

    def __init__(self, now: Optional[Callable[[], datetime]] = None):
        """
        Args:
            now: Time source, defaults to ``datetime.now`` (local time)
        """
        self._now = now or datetime.now

    def get_current_time(self) -> datetime:
        return self._now()

    @staticmethod
    def format_clock(dt: datetime) -> str:
        """Format a datetime as a 12 character clock string with milliseconds."""
        return f"{dt.strftime('%H:%M:%S')}.{dt.microsecond // 1000:03d}"

    def clock_string(self) -> str:
        return self.format_clock(self.get_current_time())
