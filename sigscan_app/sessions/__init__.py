"""Trading-session and market-hours lookup"""

from .calendar import SessionCalendar

__all__ = ["SessionCalendar"]
