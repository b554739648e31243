"""
Star sightings and the hand-collected observation set.

The manual data was read off an online planetarium (in-the-sky.org) with the
date and time set to 2017-03-05 20:00 -08:00 for every sighting.  Values have
a resolution of 0.1 degrees but are only good to about +/-0.2 degrees, which
is roughly what someone with a hand sextant and a dark sky could achieve.
"""

from dataclasses import dataclass
from typing import List

# 2017-03-05 20:00 -08:00 as seconds since the Unix epoch
MANUAL_OBSERVATION_UNIX_TIME = 1488772800.0


@dataclass(frozen=True)
class StarObservation:
    """A single sighting of one star from one location."""
    latitude: float   # Observer latitude (degrees North)
    longitude: float  # Observer longitude (degrees East)
    name: str         # Star name
    azimuth: float    # Degrees East of North of the nearest horizon point
    elevation: float  # Degrees above the horizon

    def __str__(self) -> str:
        return (f"lat={self.latitude}, lng={self.longitude}, name=\"{self.name}\", "
                f"az={self.azimuth:.3f}, el={self.elevation:.3f}")


# (latitude, longitude, name, azimuth, elevation)
_MANUAL_SIGHTINGS = [
    (38, -122, "Capella", 302.8, 71.2),
    (38, -122, "Betelgeuse", 205.0, 57.2),
    (38, -122, "Rigel", 210.5, 38.8),
    (38, -122, "Aldebaran", 242.9, 53.9),
    (38, -122, "Sirius", 181.1, 35.2),
    (38, -122, "Procyon", 157.5, 55.2),
    (38, -122, "Polaris", 359.3, 38.2),
    (38, -122, "Dubhe", 36.9, 44.8),

    (38, -113, "Capella", 299.1, 65.1),
    (38, -113, "Betelgeuse", 219.1, 53.3),
    (38, -113, "Rigel", 220.3, 34.6),
    (38, -113, "Aldebaran", 251.6, 47.2),
    (38, -113, "Sirius", 191.5, 34.4),
    (38, -113, "Procyon", 173.3, 57.0),
    (38, -113, "Polaris", 359.2, 38.1),
    (38, -113, "Dubhe", 36.4, 49.1),

    (38, -104, "Capella", 298.2, 58.9),
    (38, -104, "Betelgeuse", 230.9, 48.3),
    (38, -104, "Rigel", 229.1, 29.7),
    (38, -104, "Aldebaran", 258.9, 40.4),
    (38, -104, "Sirius", 201.5, 32.5),
    (38, -104, "Procyon", 189.8, 56.9),
    (38, -104, "Polaris", 359.1, 38.1),
    (38, -104, "Dubhe", 34.7, 53.2),

    (38, -95, "Capella", 298.7, 52.5),
    (38, -95, "Betelgeuse", 240.5, 42.3),
    (38, -95, "Rigel", 236.8, 24.0),
    (38, -95, "Aldebaran", 265.2, 33.4),
    (38, -95, "Sirius", 210.9, 29.3),
    (38, -95, "Procyon", 205.3, 54.6),
    (38, -95, "Polaris", 359.1, 37.9),
    (38, -95, "Dubhe", 31.7, 57.1),

    (38, -86, "Capella", 300.2, 46.3),
    (38, -86, "Betelgeuse", 248.6, 35.9),
    (38, -86, "Rigel", 243.7, 17.8),
    (38, -86, "Aldebaran", 271.0, 26.2),
    (38, -86, "Sirius", 219.5, 25.2),
    (38, -86, "Procyon", 218.8, 50.9),
    (38, -86, "Polaris", 359.2, 37.8),
    (38, -86, "Dubhe", 26.9, 60.6),
]


def manual_observations() -> List[StarObservation]:
    """Return the hand-collected sightings taken at MANUAL_OBSERVATION_UNIX_TIME."""
    return [StarObservation(float(lat), float(lng), name, az, el)
            for lat, lng, name, az, el in _MANUAL_SIGHTINGS]
