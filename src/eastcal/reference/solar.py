# reference/solar.py

"""
Low-precision solar model used to place sunrise for start-of-day policies.

Truncated Meeus series (solar longitude to ~0.01 deg, Equation of Time to a
few seconds), which is far below the one-day granularity of calendar dates.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import date, datetime, timedelta, timezone
from typing import Optional

from ..core.time import to_jdn, year_decimal_approx

J2000_TT = 2451545.0  # JD(TT) at J2000.0


def wrap_deg(x_deg: float) -> float:
    """Wrap degrees to [0,360)."""
    y = math.fmod(x_deg, 360.0)
    if y < 0:
        y += 360.0
    return y


def T_centuries(jd_tt: float) -> float:
    """Julian centuries from J2000.0 in TT."""
    return (jd_tt - J2000_TT) / 36525.0


def delta_t_seconds(y: float) -> float:
    """
    TT - UT in seconds, Espenak-Meeus polynomials for 1900..2150 and the
    Morrison-Stephenson parabola elsewhere.
    """
    if 1900 <= y < 1920:
        t = y - 1900
        return -2.79 + 1.494119 * t - 0.0598939 * t**2 + 0.0061966 * t**3 - 0.000197 * t**4
    if 1920 <= y < 1941:
        t = y - 1920
        return 21.20 + 0.84493 * t - 0.076100 * t**2 + 0.0020936 * t**3
    if 1941 <= y < 1961:
        t = y - 1950
        return 29.07 + 0.407 * t - t**2 / 233 + t**3 / 2547
    if 1961 <= y < 1986:
        t = y - 1975
        return 45.45 + 1.067 * t - t**2 / 260 - t**3 / 718
    if 1986 <= y < 2005:
        t = y - 2000
        return (
            63.86 + 0.3345 * t - 0.060374 * t**2 + 0.0017275 * t**3
            + 0.000651814 * t**4 + 0.00002373599 * t**5
        )
    if 2005 <= y < 2050:
        t = y - 2000
        return 62.92 + 0.32217 * t + 0.005589 * t**2
    u = (y - 1820) / 100
    if 2050 <= y < 2150:
        return -20 + 32 * u * u - 0.5628 * (2150 - y)
    return -20 + 32 * u * u


def mean_obliquity_deg(T: float) -> float:
    """IAU 2006 mean obliquity of the ecliptic (degrees)."""
    eps_arcsec = (
        84381.406
        - 46.836769 * T
        - 0.0001831 * T * T
        + 0.00200340 * T**3
    )
    return eps_arcsec / 3600.0


@dataclass(frozen=True)
class SolarCoordinates:
    """Mean, true and apparent solar longitude (degrees)."""
    L0_deg: float
    L_true_deg: float
    L_app_deg: float


def solar_longitude(jd_tt: float) -> SolarCoordinates:
    T = T_centuries(jd_tt)
    L0 = wrap_deg(280.46646 + 36000.76983 * T + 0.0003032 * T * T)
    M_rad = math.radians(357.52911 + 35999.05029 * T - 0.0001537 * T * T)

    # equation of center
    C = (
        (1.914602 - 0.004817 * T - 0.000014 * T * T) * math.sin(M_rad)
        + (0.019993 - 0.000101 * T) * math.sin(2.0 * M_rad)
        + 0.000289 * math.sin(3.0 * M_rad)
    )
    L_true = wrap_deg(L0 + C)

    # aberration and leading nutation term
    omega_rad = math.radians(125.04452 - 1934.136261 * T)
    L_app = wrap_deg(L_true - 0.00569 - 0.00478 * math.sin(omega_rad))
    return SolarCoordinates(L0_deg=L0, L_true_deg=L_true, L_app_deg=L_app)


def equation_of_time_minutes(jd_tt: float) -> float:
    """Apparent minus mean solar time, in minutes."""
    coords = solar_longitude(jd_tt)
    eps_rad = math.radians(mean_obliquity_deg(T_centuries(jd_tt)))
    lam = math.radians(coords.L_app_deg)
    alpha_deg = wrap_deg(math.degrees(math.atan2(math.cos(eps_rad) * math.sin(lam), math.cos(lam))))
    diff_deg = wrap_deg(coords.L0_deg - alpha_deg + 180.0) - 180.0
    return 4.0 * diff_deg


def sunrise_hour_angle_deg(jd_tt: float, lat_deg: float, h0_deg: float = -0.833) -> Optional[float]:
    """Hour angle of sunrise (degrees), or None during polar day/night."""
    coords = solar_longitude(jd_tt)
    eps_rad = math.radians(mean_obliquity_deg(T_centuries(jd_tt)))
    delta = math.asin(math.sin(eps_rad) * math.sin(math.radians(coords.L_app_deg)))
    phi = math.radians(lat_deg)

    cos_H0 = (math.sin(math.radians(h0_deg)) - math.sin(phi) * math.sin(delta)) / (math.cos(phi) * math.cos(delta))
    if cos_H0 < -1.0 or cos_H0 > 1.0:
        return None
    return math.degrees(math.acos(cos_H0))


def sunrise_utc(d: date, lat_deg: float, lon_deg_east: float, h0_deg: float = -0.833) -> Optional[datetime]:
    """
    Instant of sunrise on the local (mean solar) date d, as aware UTC datetime.
    Returns None if the sun does not rise or set on that day.
    """
    dT = delta_t_seconds(year_decimal_approx(d)) / 86400.0
    # JDN is noon UTC; shift to local noon
    jd_utc = to_jdn(d) - lon_deg_east / 360.0

    rise_lmt_hours = None
    for _ in range(2):
        jd_tt = jd_utc + dT
        H0 = sunrise_hour_angle_deg(jd_tt, lat_deg, h0_deg)
        if H0 is None:
            return None
        rise_lmt_hours = 12.0 - H0 / 15.0 - equation_of_time_minutes(jd_tt) / 60.0
        # refine at the event itself
        jd_utc = to_jdn(d) - 0.5 + (rise_lmt_hours - lon_deg_east / 15.0) / 24.0

    start = datetime(d.year, d.month, d.day, tzinfo=timezone.utc)
    return start + timedelta(hours=rise_lmt_hours - lon_deg_east / 15.0)
