"""
SINAICA Air-Quality Module
=======================================================

* Retrieves air-quality data from SINAICA, the Mexican national air-quality
information system (https://sinaica.inecc.gob.mx).
* The portal has no API: it embeds its data as JavaScript assignments in
server-rendered HTML (`var cump = {...};` for the station tree,
`var dat = [...];` for pollutant series). This module fetches those pages,
extracts the literals and turns them into a typed catalog.

* Notes
- Transport failures are retried (SINAICA_MAX_RETRIES, 0 = forever);
  parse failures are not.
- Dates are sent as ISO "YYYY-MM-DD"; "YYYYMMDD" is accepted too.

* Model
------
Catalog
    State (id, name, code, gps)
        Network (id, name, code)
            Station (id, name, code, gps, pollutants)

Criteria pollutants: CO, NO2, O3, SO2, PM10, PM2.5
Time windows: day, week, two weeks, month
"""

from src.sinaica.api_sinaica import SinaicaAPI, load_catalog
from src.sinaica.catalog import (
    CRITERIA_POLLUTANTS,
    GPS,
    Catalog,
    Network,
    State,
    Station,
    build_catalog,
)
from src.sinaica.errors import (
    ExtractionError,
    NotFoundError,
    SchemaError,
    SinaicaError,
    TransportError,
)
from src.sinaica.support_functions.support_functions import TimeWindow

__all__ = [
    "SinaicaAPI",
    "load_catalog",
    "CRITERIA_POLLUTANTS",
    "GPS",
    "Catalog",
    "Network",
    "State",
    "Station",
    "build_catalog",
    "ExtractionError",
    "NotFoundError",
    "SchemaError",
    "SinaicaError",
    "TransportError",
    "TimeWindow",
]
