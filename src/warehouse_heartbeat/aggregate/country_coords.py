"""Utility: small static ISO2 → (longitude, latitude) table for the comet map.

Only the most common destination countries are listed; anything else is
drawn at the US centroid.
"""

# New York warehouse, origin of every comet
ORIGIN = (-74.0060, 40.7128)

COUNTRY_COORDS = {
    "US": (-98.35, 39.50),
    "CA": (-106.35, 56.13),
    "MX": (-102.55, 23.63),
    "GB": (-3.43, 55.38),
    "DE": (10.45, 51.16),
    "FR": (2.21, 46.23),
    "ES": (-3.75, 40.46),
    "IT": (12.57, 41.87),
    "NL": (5.29, 52.13),
    "BE": (4.47, 50.50),
    "AU": (133.78, -25.27),
    "NZ": (174.89, -40.90),
    "BR": (-51.93, -14.23),
    "AR": (-63.62, -38.42),
    "CL": (-71.54, -35.68),
    "ZA": (22.94, -30.56),
    "JP": (138.25, 36.20),
    "CN": (104.19, 35.86),
    "IN": (78.96, 20.59),
    "SG": (103.82, 1.35),
    "KR": (127.98, 37.66),
}

FALLBACK_COUNTRY = "US"

def get_coords(country: str) -> tuple[float, float]:
    """Return the (longitude, latitude) for an ISO2 code, or the fallback.

    Args:
        country: ISO 3166-1 alpha-2 code as published in the feed.

    Returns:
        Coordinates of the country, or of the US when it is not listed.
    """
    return COUNTRY_COORDS.get(country, COUNTRY_COORDS[FALLBACK_COUNTRY])
