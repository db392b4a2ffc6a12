"""Station catalog and criteria-pollutant series from SINAICA (sinaica.inecc.gob.mx)."""

from __future__ import annotations

import dataclasses
import re
from datetime import date, datetime
from typing import Callable, Dict, List, Optional, Tuple, Union

from src.sinaica.api_abstract import GenericValue, PortalDataAPI
from src.sinaica.catalog import CRITERIA_POLLUTANTS, Catalog, Station, build_catalog
from src.sinaica.support_functions.support_functions import TimeWindow, to_iso
from src.utils.ai_logger import get_logger
from src.utils.config import config

log = get_logger("api_sinaica")

DateLike = Union[str, date, datetime, None]
WindowLike = Union[TimeWindow, int, str]
StationCallback = Callable[[Station], None]

CATALOG_PATTERN = re.compile(r"^.*var cump = (.+);\s*$", re.MULTILINE)
SERIES_PATTERN = re.compile(r"^.*var dat = (.+);\s*$", re.MULTILINE)
SERIES_HEADERS = {
    "Content-Type": "application/x-www-form-urlencoded",
    "charset": "UTF-8",
}


class SinaicaAPI(PortalDataAPI):
    """
    SINAICA portal client.
    - get_catalog(): states -> networks -> stations, fetched once per instance
    - fetch_pollutants(): the six criteria pollutants for one station
    - enrich_in_place() / enrich_snapshot(): pollutants for every station of a state
    """
    CATALOG_URL = config.catalog_url
    SERIES_URL = config.series_url

    def __init__(self, name: str = "sinaica", **kwargs):
        super().__init__(name=name, **kwargs)
        self._catalog: Optional[Catalog] = None

    # --------------------------------------------------------------------
    # Public API
    # --------------------------------------------------------------------
    def get_catalog(self, refresh: bool = False) -> Catalog:
        """Catalog owned by this instance; the portal is hit on first use only."""
        if self._catalog is None or refresh:
            log.info("Obtaining general data from %s", self.CATALOG_URL)
            self._catalog = build_catalog(self.extract(self.CATALOG_URL, CATALOG_PATTERN))
        return self._catalog

    def fetch_pollutants(
                        self,
                        station_id: str,
                        start_date: DateLike = None,
                        time_window: WindowLike = TimeWindow.DAY,
                        ) -> Dict[str, GenericValue]:
        """
        Series for every criteria pollutant of one station, starting at
        `start_date` (today when None) and spanning `time_window`.
        Values are whatever the portal returns, untouched.
        """
        params = {
            "estacionId": station_id,
            "fechaIni": to_iso(start_date),
            "rango": int(TimeWindow.parse(time_window)),
            "tipoDatos": "",
        }
        data: Dict[str, GenericValue] = {}
        for pollutant in CRITERIA_POLLUTANTS:
            data[pollutant] = self.extract(
                self.SERIES_URL,
                SERIES_PATTERN,
                method="POST",
                headers=SERIES_HEADERS,
                body={**params, "param": pollutant},
            )
        return data

    def enrich_snapshot(
                        self,
                        catalog: Catalog,
                        state_name: str,
                        start_date: DateLike = None,
                        time_window: WindowLike = TimeWindow.DAY,
                        on_station: Optional[StationCallback] = None,
                        ) -> List[Station]:
        """Copies of the state's stations carrying pollutant data; `catalog` is left alone."""
        return [
            dataclasses.replace(station, pollutants=pollutants)
            for station, pollutants in self._fetch_state(catalog, state_name, start_date,
                                                         time_window, on_station)
        ]

    def enrich_in_place(
                        self,
                        catalog: Catalog,
                        state_name: str,
                        start_date: DateLike = None,
                        time_window: WindowLike = TimeWindow.DAY,
                        on_station: Optional[StationCallback] = None,
                        ) -> List[Station]:
        """
        Store pollutant data on the catalog's own stations and return them.
        Nothing is written until every station has been fetched.
        """
        fetched = self._fetch_state(catalog, state_name, start_date, time_window, on_station)
        for station, pollutants in fetched:
            station.pollutants = pollutants
        return [station for station, _ in fetched]

    def enrich(
                self,
                state_name: str,
                persist: bool = False,
                start_date: DateLike = None,
                time_window: WindowLike = TimeWindow.DAY,
                catalog: Optional[Catalog] = None,
                on_station: Optional[StationCallback] = None,
                ) -> List[Station]:
        """Enrich this instance's catalog (or `catalog`): in place when `persist`, else copies."""
        catalog = catalog if catalog is not None else self.get_catalog()
        operation = self.enrich_in_place if persist else self.enrich_snapshot
        return operation(catalog, state_name, start_date, time_window, on_station)

    # --------------------------------------------------------------------
    # Internal functions
    # --------------------------------------------------------------------
    def _fetch_state(
                    self,
                    catalog: Catalog,
                    state_name: str,
                    start_date: DateLike,
                    time_window: WindowLike,
                    on_station: Optional[StationCallback],
                    ) -> List[Tuple[Station, Dict[str, GenericValue]]]:
        state = catalog.find_state(state_name)
        start_iso = to_iso(start_date)
        window = TimeWindow.parse(time_window)

        log.info("Obtaining data from stations in %s (%s, %s)", state.name, start_iso, window.name.lower())
        results = []
        for network in state.networks:
            log.info("***** Network: %s (%d stations)", network.name, len(network.stations))
            for station in network.stations:
                results.append((station, self.fetch_pollutants(station.id, start_iso, window)))
                if on_station is not None:
                    on_station(station)
        return results


def load_catalog(api: Optional[SinaicaAPI] = None) -> Catalog:
    """Build the catalog once at application start; the caller owns it."""
    return (api or SinaicaAPI()).get_catalog()
