"""Curated destination reference data: city centres and headline attractions."""

from dataclasses import dataclass

from backend.app.models.common import Geo


@dataclass(frozen=True)
class Attraction:
    name: str
    lat: float
    lng: float

    @property
    def geo(self) -> Geo:
        return Geo(lat=self.lat, lng=self.lng)


@dataclass(frozen=True)
class DestinationInfo:
    center: Geo
    attractions: tuple[Attraction, ...]


def _dest(lat: float, lng: float, *attractions: tuple[str, float, float]) -> DestinationInfo:
    return DestinationInfo(
        center=Geo(lat=lat, lng=lng),
        attractions=tuple(Attraction(name, a_lat, a_lng) for name, a_lat, a_lng in attractions),
    )


DESTINATIONS: dict[str, DestinationInfo] = {
    "reykjavik": _dest(
        64.1466, -21.9426,
        ("Hallgrimskirkja", 64.1417, -21.9267),
        ("Harpa Concert Hall", 64.1504, -21.9327),
        ("Sun Voyager", 64.1476, -21.9223),
        ("Perlan", 64.1291, -21.9176),
    ),
    "paris": _dest(
        48.8566, 2.3522,
        ("Eiffel Tower", 48.8584, 2.2945),
        ("Louvre Museum", 48.8606, 2.3376),
        ("Notre-Dame", 48.8530, 2.3499),
        ("Champs-Élysées", 48.8698, 2.3078),
    ),
    "london": _dest(
        51.5074, -0.1278,
        ("Big Ben", 51.5007, -0.1246),
        ("Tower of London", 51.5081, -0.0759),
        ("British Museum", 51.5194, -0.1270),
    ),
    "tokyo": _dest(
        35.6762, 139.6503,
        ("Shibuya Crossing", 35.6595, 139.7004),
        ("Senso-ji Temple", 35.7148, 139.7967),
        ("Tokyo Tower", 35.6586, 139.7454),
    ),
    "new york": _dest(
        40.7128, -74.0060,
        ("Times Square", 40.7580, -73.9855),
        ("Central Park", 40.7829, -73.9654),
        ("Statue of Liberty", 40.6892, -74.0445),
    ),
    "dubai": _dest(
        25.2048, 55.2708,
        ("Burj Khalifa", 25.1972, 55.2744),
        ("Dubai Mall", 25.1985, 55.2796),
        ("Palm Jumeirah", 25.1124, 55.1390),
    ),
    "singapore": _dest(
        1.3521, 103.8198,
        ("Marina Bay Sands", 1.2834, 103.8607),
        ("Gardens by the Bay", 1.2816, 103.8636),
        ("Sentosa Island", 1.2494, 103.8303),
    ),
    "bangkok": _dest(
        13.7563, 100.5018,
        ("Grand Palace", 13.7500, 100.4914),
        ("Wat Arun", 13.7437, 100.4888),
        ("Chatuchak Market", 13.7999, 100.5503),
    ),
    "bali": _dest(
        -8.3405, 115.0920,
        ("Tanah Lot", -8.6212, 115.0868),
        ("Ubud", -8.5069, 115.2625),
        ("Uluwatu Temple", -8.8291, 115.0849),
    ),
    "rome": _dest(
        41.9028, 12.4964,
        ("Colosseum", 41.8902, 12.4922),
        ("Vatican City", 41.9029, 12.4534),
        ("Trevi Fountain", 41.9009, 12.4833),
    ),
    "barcelona": _dest(
        41.3851, 2.1734,
        ("Sagrada Familia", 41.4036, 2.1744),
        ("Park Güell", 41.4145, 2.1527),
        ("La Rambla", 41.3797, 2.1746),
    ),
    "amsterdam": _dest(
        52.3676, 4.9041,
        ("Anne Frank House", 52.3752, 4.8840),
        ("Rijksmuseum", 52.3600, 4.8852),
        ("Van Gogh Museum", 52.3584, 4.8811),
    ),
    "maldives": _dest(
        3.2028, 73.2207,
        ("Male City", 4.1755, 73.5093),
        ("Maafushi Island", 3.9408, 73.4871),
    ),
    "sydney": _dest(
        -33.8688, 151.2093,
        ("Sydney Opera House", -33.8568, 151.2153),
        ("Harbour Bridge", -33.8523, 151.2108),
        ("Bondi Beach", -33.8908, 151.2743),
    ),
    "vienna": _dest(
        48.2082, 16.3738,
        ("Schönbrunn Palace", 48.1851, 16.3122),
        ("St. Stephen Cathedral", 48.2085, 16.3731),
        ("Belvedere Palace", 48.1915, 16.3808),
    ),
}


def lookup_destination(destination: str) -> DestinationInfo | None:
    """Find curated data for a destination by substring match."""
    dest_lower = destination.lower()
    for key, info in DESTINATIONS.items():
        if key in dest_lower:
            return info
    return None
