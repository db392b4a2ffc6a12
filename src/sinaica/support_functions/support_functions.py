"""Support functions for requests and dates"""

from __future__ import annotations

import enum
import time
from datetime import date, datetime
from typing import Optional, Union

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry


ISO = "%Y-%m-%d"
YMD = "%Y%m%d"


def to_iso(d: Optional[Union[str, date, datetime]] = None) -> str:
    """Convert to ISO format; None means today."""
    if d is None:
        return date.today().strftime(ISO)
    if isinstance(d, (date, datetime)):
        return d.strftime(ISO)
    s = str(d).strip()
    if len(s) == 8 and s.isdigit():
        return datetime.strptime(s, YMD).strftime(ISO)
    return datetime.strptime(s[:10], ISO).strftime(ISO)


class TimeWindow(enum.IntEnum):
    """Span of history the series endpoint returns (`rango` form field)."""
    DAY = 1
    WEEK = 2
    TWO_WEEKS = 3
    MONTH = 4

    @classmethod
    def parse(cls, value: Union["TimeWindow", int, str]) -> "TimeWindow":
        """Accept a member, its number (1-4) or its name ("week", "two-weeks")."""
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            key = value.strip().upper().replace("-", "_")
            if key.isdigit():
                value = int(key)
            elif key in cls.__members__:
                return cls[key]
            else:
                raise ValueError(f"Unknown time window {value!r}; use one of {[m.name.lower() for m in cls]}")
        try:
            return cls(int(value))
        except (TypeError, ValueError) as e:
            raise ValueError(f"Unknown time window {value!r}; expected 1-4") from e


class Pacer:
    """Simple rate pacer: ensures a minimum delay between requests."""
    def __init__(self, min_interval_sec: float = 0.0):
        self.min_interval = max(0.0, float(min_interval_sec))
        self._last = 0.0

    def wait(self):
        """Wait between request"""
        if self.min_interval <= 0:
            return
        sleep_for = self.min_interval - (time.time() - self._last)
        if sleep_for > 0:
            time.sleep(sleep_for)
        self._last = time.time()


def make_session(
                total_retries: int = 3,
                backoff: float = 0.6
                ) -> requests.Session:
    """Make request session"""
    s = requests.Session()
    retry = Retry(
        total=total_retries,
        connect=total_retries,
        read=total_retries,
        status=total_retries,
        backoff_factor=backoff,
        status_forcelist=(429, 500, 502, 503, 504),
        allowed_methods=("GET", "POST"),
        raise_on_status=False,
    )
    adapter = HTTPAdapter(max_retries=retry, pool_connections=4, pool_maxsize=4)
    s.mount("http://", adapter)
    s.mount("https://", adapter)
    return s
