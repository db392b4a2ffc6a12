"""Abstract portal client: fetch a page, pull out the embedded JSON literal"""


from __future__ import annotations

import abc
import json
import re
import time
from typing import Any, Dict, List, Mapping, Optional, Pattern, Union

import requests
from bs4 import BeautifulSoup

from src.sinaica.errors import ExtractionError, TransportError
from src.sinaica.support_functions.support_functions import (
    Pacer,
    make_session
)
from src.utils.ai_logger import get_logger
from src.utils.config import config

log = get_logger("api")

# Whatever json.loads can produce
GenericValue = Union[Dict[str, Any], List[Any], str, int, float, bool, None]


class PortalDataAPI(abc.ABC):
    """
    Base class for portals that embed their data as JavaScript literals in
    server-rendered HTML instead of exposing an API.

    Transport failures are retried by the same request, `max_retries` times
    (0 retries forever) with a linear `backoff_sec` pause between attempts.
    Parse failures are never retried: they mean the page layout changed.
    """
    def __init__(
                self,
                name: str,
                timeout_sec: float = config.timeout_sec,
                max_retries: int = config.max_retries,
                backoff_sec: float = config.backoff_sec,
                min_interval_sec: float = config.min_interval_sec,
                session: Optional[requests.Session] = None,
                ):
        self.name = name
        self.timeout_sec = timeout_sec
        self.max_retries = max(0, int(max_retries))
        self.backoff_sec = max(0.0, float(backoff_sec))
        self.session = session or make_session()
        self.pacer = Pacer(min_interval_sec=min_interval_sec)

    @abc.abstractmethod
    def fetch_pollutants(self, station_id: str, start_date=None, time_window=1) -> Dict[str, GenericValue]:
        """Return the series of every tracked pollutant for one station."""

    # --------------------------------------------------------------------
    # Extraction
    # --------------------------------------------------------------------
    def extract(
                self,
                url: str,
                pattern: Union[str, Pattern[str]],
                method: str = "GET",
                headers: Optional[Mapping[str, str]] = None,
                body: Optional[Mapping[str, Any]] = None,
                ) -> GenericValue:
        """
        Fetch `url` and return the JSON literal captured by the first group
        of `pattern`, parsed.

        String patterns are compiled with re.MULTILINE so `^`/`$` anchor on
        lines of the page, the way the portal writes one assignment per line.
        """
        if isinstance(pattern, str):
            pattern = re.compile(pattern, re.MULTILINE)

        response = self._request(method, url, headers=headers, body=body)

        # Re-serializing the parsed tree normalizes markup quirks (stray
        # whitespace in tags, unclosed elements) before matching.
        page = str(BeautifulSoup(response.content, "html.parser"))

        match = pattern.search(page)
        if match is None:
            raise ExtractionError("pattern not found", {"url": url, "pattern": pattern.pattern})

        literal = match.group(1)
        try:
            return json.loads(literal)
        except ValueError as e:
            raise ExtractionError(
                "malformed payload",
                {"url": url, "error": str(e), "excerpt": literal[:80]},
            ) from e

    # --------------------------------------------------------------------
    # Transport
    # --------------------------------------------------------------------
    def _request(
                self,
                method: str,
                url: str,
                headers: Optional[Mapping[str, str]] = None,
                body: Optional[Mapping[str, Any]] = None,
                ) -> requests.Response:
        method = method.upper()
        if method not in ("GET", "POST"):
            raise ValueError(f"Unsupported HTTP method: {method}")

        attempt = 0
        while True:
            attempt += 1
            self.pacer.wait()
            try:
                if method == "POST":
                    r = self.session.post(url, headers=dict(headers or {}), data=dict(body or {}),
                                          timeout=self.timeout_sec)
                else:
                    r = self.session.get(url, headers=dict(headers or {}), timeout=self.timeout_sec)
                r.raise_for_status()
                return r
            except requests.RequestException as e:
                if self.max_retries and attempt > self.max_retries:
                    log.error("%s %s gave up after %d attempts: %s", method, url, attempt, e)
                    raise TransportError(url, attempt, e) from e
                log.warning("%s %s failed (attempt %d): %s", method, url, attempt, e)
                if self.backoff_sec:
                    time.sleep(self.backoff_sec * attempt)
