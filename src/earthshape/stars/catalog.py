#!/usr/bin/env python3
"""
Star Catalog

A small, fixed catalog of celestial coordinates used to synthesize sightings
for times and places that were not measured by hand.  Entries are written the
way the in-the-sky.org catalog prints them: right ascension as "HHhMMmSSs"
and declination as "+DD°MM'SS\"".

Key Functions:
- CatalogEntry.parse: Build an entry from catalog strings (fails fast on bad input)
- greenwich_mean_sidereal_time: GMST in hours for a Unix time
- CatalogEntry.make_observation: Azimuth/elevation of the entry for an observer
- default_catalog / sun_position: The hardcoded data

Usage:
    from earthshape.stars.catalog import CatalogEntry, MANUAL_OBSERVATION_UNIX_TIME

    sirius = CatalogEntry.parse("Sirius", "06h45m09s", "-16°42'47\"")
    obs = sirius.make_observation(MANUAL_OBSERVATION_UNIX_TIME, 38.0, -122.0)
"""

import re
import numpy as np
import logging
from typing import List
from dataclasses import dataclass

from astropy.coordinates import Angle

from .observations import StarObservation, MANUAL_OBSERVATION_UNIX_TIME

logger = logging.getLogger(__name__)

_RA_PATTERN = re.compile(r"(\d+)h(\d+)m(\d+)s")
_DEC_PATTERN = re.compile(r"([-+]?)(\d+)°(\d+)'(\d+)\"")

# J2000.0 epoch (2000-01-01 12:00 UT) as Unix time
J2000_UNIX_TIME = 946728000.0
SECONDS_PER_DAY = 86400.0


class CatalogFormatError(ValueError):
    """A catalog angle string does not have the expected format."""


@dataclass(frozen=True)
class CatalogEntry:
    """One star's position on the celestial sphere."""
    name: str
    right_ascension_degrees: float  # East of the vernal equinox along the equator
    declination_degrees: float      # North of the celestial equator

    @classmethod
    def parse(cls, name: str, right_ascension: str, declination: str) -> 'CatalogEntry':
        """
        Construct an entry from catalog strings.

        Args:
            name: Star name
            right_ascension: Time-style string such as "05h16m41s"
            declination: Degree-style string such as "-08°12'05\""

        Returns:
            CatalogEntry with both angles in degrees

        Raises:
            CatalogFormatError: If either string is malformed or out of range
        """
        return cls(name,
                   _parse_right_ascension(right_ascension),
                   _parse_declination(declination))

    def make_observation(self, unix_time: float, latitude: float,
                         longitude: float) -> StarObservation:
        """
        Sky position of this entry for an observer.

        Args:
            unix_time: Seconds since 1970-01-01 00:00 UT
            latitude: Observer latitude, degrees North
            longitude: Observer longitude, degrees East

        Returns:
            StarObservation with azimuth in [0, 360) and elevation in [-90, 90]

        Notes:
            Hour angle H = GMST + longitude - RA.  The standard horizontal
            coordinate formulas give an azimuth measured from South, so 180
            degrees is added to measure it from North.
        """
        gmst_degrees = greenwich_mean_sidereal_time(unix_time) * 15.0
        hour_angle = np.radians(gmst_degrees + longitude - self.right_ascension_degrees)
        lat = np.radians(latitude)
        dec = np.radians(self.declination_degrees)

        azimuth = np.arctan2(
            np.sin(hour_angle),
            np.cos(hour_angle) * np.sin(lat) - np.tan(dec) * np.cos(lat))
        elevation = np.arcsin(np.clip(
            np.sin(lat) * np.sin(dec) + np.cos(lat) * np.cos(dec) * np.cos(hour_angle),
            -1.0, 1.0))

        azimuth_deg = float(np.degrees(azimuth) + 180.0) % 360.0
        return StarObservation(float(latitude), float(longitude), self.name,
                               azimuth_deg, float(np.degrees(elevation)))


def _parse_right_ascension(text: str) -> float:
    match = _RA_PATTERN.fullmatch(text.strip())
    if match is None:
        raise CatalogFormatError(f"Could not parse right ascension: {text!r}")

    hours, minutes, seconds = (int(g) for g in match.groups())
    if hours >= 24 or minutes >= 60 or seconds >= 60:
        raise CatalogFormatError(f"Right ascension out of range: {text!r}")

    return float(Angle(f"{hours}h{minutes}m{seconds}s").degree)


def _parse_declination(text: str) -> float:
    match = _DEC_PATTERN.fullmatch(text.strip())
    if match is None:
        raise CatalogFormatError(f"Could not parse declination: {text!r}")

    sign = match.group(1)
    degrees, minutes, seconds = (int(g) for g in match.groups()[1:])
    if degrees > 90 or minutes >= 60 or seconds >= 60:
        raise CatalogFormatError(f"Declination out of range: {text!r}")

    # The sign applies to the whole angle, including a "-00" degree field
    magnitude = float(Angle(f"{degrees}d{minutes}m{seconds}s").degree)
    if magnitude > 90.0:
        raise CatalogFormatError(f"Declination out of range: {text!r}")
    return -magnitude if sign == "-" else magnitude


def greenwich_mean_sidereal_time(unix_time: float) -> float:
    """
    Greenwich Mean Sidereal Time in hours, modulo 24.

    GMST = 18.697374558 + 24.06570982441908 * D, where D is the number of
    days elapsed since J2000.0.
    """
    elapsed_days = (unix_time - J2000_UNIX_TIME) / SECONDS_PER_DAY
    gmst = 18.697374558 + 24.06570982441908 * elapsed_days
    return float(gmst - np.floor(gmst / 24.0) * 24.0)


def default_catalog() -> List[CatalogEntry]:
    """The bright stars used by the manual observations (source: in-the-sky.org)."""
    return [
        CatalogEntry.parse("Capella", "05h16m41s", "+45°59'56\""),
        CatalogEntry.parse("Betelgeuse", "05h55m10s", "+07°24'25\""),
        CatalogEntry.parse("Rigel", "05h14m32s", "-08°12'05\""),
        CatalogEntry.parse("Aldebaran", "04h35m55s", "+16°30'35\""),
        CatalogEntry.parse("Sirius", "06h45m09s", "-16°42'47\""),
        CatalogEntry.parse("Procyon", "07h39m18s", "+05°13'39\""),
        CatalogEntry.parse("Polaris", "02h31m47s", "+89°15'50\""),
        CatalogEntry.parse("Dubhe", "11h03m43s", "+61°45'03\""),
    ]


def sun_position() -> CatalogEntry:
    """
    Approximate apparent position of the Sun at MANUAL_OBSERVATION_UNIX_TIME.

    Only good for deciding whether the Sun's glare hides the stars on that
    night; there is no ephemeris for other dates.
    """
    return CatalogEntry.parse("Sun", "23h04m45s", "-05°54'00\"")


__all__ = [
    'CatalogEntry',
    'CatalogFormatError',
    'MANUAL_OBSERVATION_UNIX_TIME',
    'default_catalog',
    'greenwich_mean_sidereal_time',
    'sun_position',
]
