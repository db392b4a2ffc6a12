"""
State -> Network -> Station catalog built from the portal's `var cump` literal.

The root literal mixes real entries (keyed by numeric state ids) with
unrelated metadata keys living in the same object. Numeric keys are states;
everything else is dropped. Entries are projected into dataclasses and any
missing field fails with a SchemaError naming its key path.
"""

from __future__ import annotations

import math
from dataclasses import asdict, dataclass, field
from typing import Any, Dict, Iterator, List, Mapping, Optional, Tuple

import pandas as pd

from src.sinaica.errors import NotFoundError, SchemaError
from src.utils.ai_logger import get_logger

log = get_logger("catalog")

# Criteria pollutants, in the order the portal lists them
CRITERIA_POLLUTANTS: Tuple[str, ...] = ("CO", "NO2", "O3", "SO2", "PM10", "PM2.5")


def empty_pollutants() -> Dict[str, Any]:
    """Every tracked code present, none fetched yet."""
    return {code: None for code in CRITERIA_POLLUTANTS}


@dataclass
class GPS:
    lat: Any
    lng: Any


@dataclass
class Station:
    id: str
    name: str
    code: str
    gps: GPS
    pollutants: Dict[str, Any] = field(default_factory=empty_pollutants)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class Network:
    id: str
    name: str
    code: str
    stations: List[Station] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class State:
    id: str
    name: str
    code: str
    gps: GPS
    networks: List[Network] = field(default_factory=list)

    def iter_stations(self) -> Iterator[Tuple[Network, Station]]:
        for network in self.networks:
            for station in network.stations:
                yield network, station

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class Catalog:
    """Ordered states of the portal. Only enrichment mutates it after build."""
    states: List[State] = field(default_factory=list)

    def __iter__(self) -> Iterator[State]:
        return iter(self.states)

    def __len__(self) -> int:
        return len(self.states)

    def find_state(self, name: str) -> State:
        """Case-insensitive exact name match; first match wins."""
        wanted = name.strip().casefold()
        for state in self.states:
            if state.name.casefold() == wanted:
                return state
        raise NotFoundError(name)

    def state_names(self) -> List[str]:
        return [s.name for s in self.states]

    def iter_stations(self) -> Iterator[Tuple[State, Network, Station]]:
        for state in self.states:
            for network, station in state.iter_stations():
                yield state, network, station

    def to_dict(self) -> List[Dict[str, Any]]:
        return [s.to_dict() for s in self.states]

    def stations_frame(self, state_name: Optional[str] = None) -> pd.DataFrame:
        """
        Flat station table, one row per station:
          ['state','state_code','network','network_code','station_id','station','station_code','lat','lng']
        """
        states = [self.find_state(state_name)] if state_name else self.states
        rows = [
            {
                "state": state.name,
                "state_code": state.code,
                "network": network.name,
                "network_code": network.code,
                "station_id": station.id,
                "station": station.name,
                "station_code": station.code,
                "lat": station.gps.lat,
                "lng": station.gps.lng,
            }
            for state in states
            for network, station in state.iter_stations()
        ]
        return pd.DataFrame(rows, columns=[
            "state", "state_code", "network", "network_code",
            "station_id", "station", "station_code", "lat", "lng",
        ])


# --------------------------------------------------------------------
# Building
# --------------------------------------------------------------------
def is_numeric_key(key: Any) -> bool:
    """True for keys like "1" or "12.0"; metadata keys fail this."""
    try:
        return math.isfinite(float(str(key)))
    except ValueError:
        return False


def _mapping(value: Any, path: str) -> Mapping[str, Any]:
    if not isinstance(value, Mapping):
        raise SchemaError(path, f"expected an object, got {type(value).__name__}")
    return value


def _require(entry: Mapping[str, Any], path: str, *names: str) -> List[Any]:
    values = []
    for name in names:
        if name not in entry:
            raise SchemaError(f"{path}.{name}", "missing required field")
        values.append(entry[name])
    return values


def _build_station(key: str, raw: Any, path: str) -> Station:
    entry = _mapping(raw, path)
    name, code, lat, lng = _require(entry, path, "nom", "cod", "lat", "long")
    return Station(id=key, name=name, code=code, gps=GPS(lat=lat, lng=lng))


def _build_network(key: str, raw: Any, path: str) -> Network:
    entry = _mapping(raw, path)
    name, code, stations = _require(entry, path, "nom", "cod", "ests")
    stations_path = f"{path}.ests"
    return Network(
        id=key,
        name=name,
        code=code,
        stations=[
            _build_station(str(k), v, f"{stations_path}.{k}")
            for k, v in _mapping(stations, stations_path).items()
        ],
    )


def _build_state(key: str, raw: Any) -> State:
    path = key
    entry = _mapping(raw, path)
    name, code, lat, lng, networks = _require(entry, path, "nom", "cod", "lat", "long", "redes")
    networks_path = f"{path}.redes"
    return State(
        id=key,
        name=name,
        code=code,
        gps=GPS(lat=lat, lng=lng),
        networks=[
            _build_network(str(k), v, f"{networks_path}.{k}")
            for k, v in _mapping(networks, networks_path).items()
        ],
    )


def build_catalog(root: Any) -> Catalog:
    """Project the root `var cump` object into a Catalog, in source order."""
    entries = _mapping(root, "$")
    states = []
    for key, raw in entries.items():
        if not is_numeric_key(key):
            log.debug("Skipping non-state entry %r", key)
            continue
        states.append(_build_state(str(key), raw))
    log.info("Catalog built: %d states, %d stations",
             len(states), sum(len(n.stations) for s in states for n in s.networks))
    return Catalog(states=states)
