"""
Session calendar.

Answers which trading sessions are active and whether a symbol's market is
open at a given instant. The session table comes from configuration and the
instant from an injected clock, so lookups are pure and testable.
"""

from datetime import datetime
from typing import Optional

from ..config.defaults import SessionParams, SessionWindow
from ..models.signals import MarketStatus
from ..utils.time import Clock, ensure_utc, resolve_time


def _in_window(window: SessionWindow, hour: int) -> bool:
    if window.start_hour <= window.end_hour:
        return window.start_hour <= hour < window.end_hour
    # Window wraps past midnight, e.g. Sydney 21:00-06:00
    return hour >= window.start_hour or hour < window.end_hour


class SessionCalendar:
    """Read-only lookup over a configured session table."""

    def __init__(self, params: Optional[SessionParams] = None, clock: Optional[Clock] = None):
        self.params = params or SessionParams()
        self.clock = clock

    def now(self) -> datetime:
        return resolve_time(self.clock)

    def active_sessions(self, moment: Optional[datetime] = None) -> tuple[str, ...]:
        """Names of sessions whose window contains the given instant."""
        moment = ensure_utc(moment) if moment is not None else self.now()
        if self._in_weekly_close(moment):
            return ()
        return tuple(
            window.name for window in self.params.windows
            if _in_window(window, moment.hour)
        )

    def is_open(self, symbol: str, moment: Optional[datetime] = None) -> bool:
        """
        Whether the symbol's market trades at the given instant.

        Symbols with an always-open prefix (crypto by default) never close;
        everything else closes for the weekly close window.
        """
        if symbol.startswith(tuple(self.params.always_open_prefixes)):
            return True
        moment = ensure_utc(moment) if moment is not None else self.now()
        return not self._in_weekly_close(moment)

    def market_status(self, symbol: str, moment: Optional[datetime] = None) -> MarketStatus:
        """Session facts for one symbol at one instant."""
        moment = ensure_utc(moment) if moment is not None else self.now()
        return MarketStatus(
            is_open=self.is_open(symbol, moment),
            active_sessions=self.active_sessions(moment),
        )

    def _in_weekly_close(self, moment: datetime) -> bool:
        hour_of_week = moment.weekday() * 24 + moment.hour
        close_at = self.params.weekly_close_weekday * 24 + self.params.weekly_close_hour
        open_at = self.params.weekly_open_weekday * 24 + self.params.weekly_open_hour

        if close_at <= open_at:
            return close_at <= hour_of_week < open_at
        # Close window wraps past the end of the week
        return hour_of_week >= close_at or hour_of_week < open_at
