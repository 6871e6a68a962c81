"""City cost multipliers for location-based adjustment.

Multipliers are empirical and relative to a national baseline of 1.00.
Lookup is by exact city name; unlisted cities use the default.
"""

from __future__ import annotations

LOCATION_MULTIPLIERS: dict[str, float] = {
    # Tier 1 - high cost
    "Mumbai": 1.30,
    "Navi Mumbai": 1.25,
    "Thane": 1.22,
    "Delhi": 1.25,
    "New Delhi": 1.25,
    "Gurgaon": 1.28,
    "Noida": 1.22,
    "Bangalore": 1.20,
    "Bengaluru": 1.20,
    "Hyderabad": 1.15,
    "Chennai": 1.15,
    "Pune": 1.15,
    # Tier 2 - medium cost
    "Ahmedabad": 1.10,
    "Surat": 1.08,
    "Jaipur": 1.10,
    "Kochi": 1.05,
    "Coimbatore": 1.05,
    "Indore": 1.05,
    "Chandigarh": 1.12,
    "Lucknow": 1.02,
    "Visakhapatnam": 1.00,
    "Nagpur": 1.00,
    "Vadodara": 1.05,
}

# Tier 3 and everything not listed above
DEFAULT_LOCATION_MULTIPLIER: float = 0.95
