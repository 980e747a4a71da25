"""Static geographic knowledge for the Tampa Bay service region.

City keys are lowercase with single spaces. Tables are read-only mappings so
they can be shared across concurrent requests; pass alternates to
``GeoKnowledgeBase`` to cover more counties instead of editing these.
"""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import TYPE_CHECKING

from climapermit.models.enums import County

if TYPE_CHECKING:
    from collections.abc import Mapping


@dataclass(frozen=True)
class Airport:
    """Airport reference point used for height-restriction screening."""

    name: str
    code: str
    latitude: float
    longitude: float
    max_height_ft: float = 35.0


@dataclass(frozen=True)
class WaterfrontRegion:
    """Bounding region treated as waterfront when FEMA data is unavailable.

    A point is inside when ``min_latitude < lat < max_latitude`` and
    ``lng < max_longitude`` (everything west of the line is on the water).
    """

    name: str
    min_latitude: float
    max_latitude: float
    max_longitude: float

    def contains(self, latitude: float, longitude: float) -> bool:
        return (
            self.min_latitude < latitude < self.max_latitude
            and longitude < self.max_longitude
        )


# Approximate city centers, used when precision geocoding fails.
CITY_COORDINATES: Mapping[str, tuple[float, float]] = MappingProxyType({
    # Hillsborough
    "tampa": (27.9506, -82.4572),
    "brandon": (27.9378, -82.2859),
    "plant city": (28.0186, -82.1129),
    "ruskin": (27.7209, -82.4326),
    "apollo beach": (27.7731, -82.4073),
    # Pasco (mostly inland; only the Gulf cities are on the water)
    "wesley chapel": (28.2416, -82.3275),
    "land o lakes": (28.2189, -82.4573),
    "land o' lakes": (28.2189, -82.4573),
    "trinity": (28.1831, -82.6729),
    "zephyrhills": (28.2336, -82.1812),
    "dade city": (28.3647, -82.1959),
    "new port richey": (28.2442, -82.7193),
    "port richey": (28.2728, -82.7193),
    "hudson": (28.3644, -82.6940),
    # Pinellas
    "st. petersburg": (27.7676, -82.6403),
    "clearwater": (27.9659, -82.8001),
})

# Central Florida default when the city is not in the table either.
REGION_DEFAULT_COORDINATES: tuple[float, float] = (28.0, -82.5)

CITY_COUNTIES: Mapping[str, County] = MappingProxyType({
    # Hillsborough
    "tampa": County.HILLSBOROUGH,
    "temple terrace": County.HILLSBOROUGH,
    "plant city": County.HILLSBOROUGH,
    "brandon": County.HILLSBOROUGH,
    "riverview": County.HILLSBOROUGH,
    "ruskin": County.HILLSBOROUGH,
    "apollo beach": County.HILLSBOROUGH,
    "wimauma": County.HILLSBOROUGH,
    "valrico": County.HILLSBOROUGH,
    "seffner": County.HILLSBOROUGH,
    "thonotosassa": County.HILLSBOROUGH,
    # Pasco
    "new port richey": County.PASCO,
    "port richey": County.PASCO,
    "dade city": County.PASCO,
    "zephyrhills": County.PASCO,
    "wesley chapel": County.PASCO,
    "land o lakes": County.PASCO,
    "land o' lakes": County.PASCO,
    "trinity": County.PASCO,
    "hudson": County.PASCO,
    "bayonet point": County.PASCO,
    "holiday": County.PASCO,
    "lutz": County.PASCO,  # straddles the Hillsborough line
    "san antonio": County.PASCO,
    "shady hills": County.PASCO,
    "port st. john": County.PASCO,
    # Pinellas
    "st. petersburg": County.PINELLAS,
    "st petersburg": County.PINELLAS,
    "clearwater": County.PINELLAS,
    "largo": County.PINELLAS,
    "pinellas park": County.PINELLAS,
    "dunedin": County.PINELLAS,
    "tarpon springs": County.PINELLAS,
    "safety harbor": County.PINELLAS,
    "belleair": County.PINELLAS,
    # Manatee
    "bradenton": County.MANATEE,
    "palmetto": County.MANATEE,
    # Sarasota
    "sarasota": County.SARASOTA,
})

DEFAULT_COUNTY: County = County.HILLSBOROUGH

# Incorporated municipalities -> permit office. Anything missing here is
# permitted by the county.
INCORPORATED_CITIES: Mapping[str, str] = MappingProxyType({
    # Hillsborough
    "tampa": "City of Tampa Development Services",
    "temple terrace": "City of Temple Terrace Building Dept",
    "plant city": "City of Plant City Building Dept",
    # Pasco
    "new port richey": "City of New Port Richey Building Department",
    "port richey": "City of Port Richey Building Department",
    "dade city": "City of Dade City Building Department",
    "zephyrhills": "City of Zephyrhills Building Department",
    # Pinellas
    "st. petersburg": "City of St. Petersburg Development Review",
    "clearwater": "City of Clearwater Building Dept",
    "largo": "City of Largo Building Services",
    # Manatee
    "bradenton": "City of Bradenton Building Dept",
})

AIRPORTS: tuple[Airport, ...] = (
    Airport("Tampa International Airport (TPA)", "TPA", 27.9755, -82.5333),
    Airport("St. Pete-Clearwater International Airport (PIE)", "PIE", 27.9102, -82.6874),
    Airport("Peter O. Knight Airport (TPF)", "TPF", 27.9156, -82.4493),
    Airport("Tampa Executive Airport (VDF)", "VDF", 28.0140, -82.3453),
    Airport("Albert Whitted Airport (SPG)", "SPG", 27.7651, -82.6270),
    Airport("Sarasota-Bradenton International Airport (SRQ)", "SRQ", 27.3954, -82.5544),
)

AIRPORT_RADIUS_MILES: float = 10.0

HISTORIC_CITIES: frozenset[str] = frozenset({
    "tampa",
    "st. petersburg",
    "ybor city",
    "dade city",
})

# HOA approval usually gates the permit in these master-planned areas.
HOA_HEAVY_CITIES: Mapping[County, frozenset[str]] = MappingProxyType({
    County.PASCO: frozenset({
        "wesley chapel",
        "land o lakes",
        "land o' lakes",
        "trinity",
        "lutz",
    }),
})

COASTAL_REVIEW_CITIES: Mapping[County, frozenset[str]] = MappingProxyType({
    County.PASCO: frozenset({
        "new port richey",
        "port richey",
        "hudson",
        "bayonet point",
        "holiday",
    }),
})

WATERFRONT_REGIONS: tuple[WaterfrontRegion, ...] = (
    WaterfrontRegion("Pasco Gulf coast", 28.1, 28.4, -82.65),
    WaterfrontRegion("Tampa Bay waterfront", 27.7, 28.0, -82.45),
    WaterfrontRegion("Pinellas peninsula", 27.6, 28.2, -82.65),
)

# West of these longitudes a site is treated as coastal.
COASTAL_WIND_LONGITUDE: float = -82.3
ENVIRONMENTAL_REVIEW_LONGITUDE: float = -82.4
