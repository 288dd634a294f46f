"""
Coordinates for the US freight hubs used by seeded loads and lanes.
Keys are canonical "City, ST" labels.
"""

CITY_COORDS: dict[str, dict] = {
    "Los Angeles, CA": {"lat": 34.0522, "lng": -118.2437},
    "Phoenix, AZ": {"lat": 33.4484, "lng": -112.0740},
    "Chicago, IL": {"lat": 41.8781, "lng": -87.6298},
    "New York, NY": {"lat": 40.7128, "lng": -74.0060},
    "Dallas, TX": {"lat": 32.7767, "lng": -96.7970},
    "Atlanta, GA": {"lat": 33.7490, "lng": -84.3880},
    "Seattle, WA": {"lat": 47.6062, "lng": -122.3321},
    "Portland, OR": {"lat": 45.5152, "lng": -122.6784},
    "Miami, FL": {"lat": 25.7617, "lng": -80.1918},
    "Houston, TX": {"lat": 29.7604, "lng": -95.3698},
    "Denver, CO": {"lat": 39.7392, "lng": -104.9903},
    "Salt Lake City, UT": {"lat": 40.7608, "lng": -111.8910},
    "Boston, MA": {"lat": 42.3601, "lng": -71.0589},
    "Washington, DC": {"lat": 38.9072, "lng": -77.0369},
    "San Francisco, CA": {"lat": 37.7749, "lng": -122.4194},
    "Las Vegas, NV": {"lat": 36.1699, "lng": -115.1398},
    "Philadelphia, PA": {"lat": 39.9526, "lng": -75.1652},
    "Charlotte, NC": {"lat": 35.2271, "lng": -80.8431},
    "Detroit, MI": {"lat": 42.3314, "lng": -83.0458},
    "Indianapolis, IN": {"lat": 39.7684, "lng": -86.1581},
    "San Diego, CA": {"lat": 32.7157, "lng": -117.1611},
    "Nashville, TN": {"lat": 36.1627, "lng": -86.7816},
    "Memphis, TN": {"lat": 35.1495, "lng": -90.0490},
    "Sacramento, CA": {"lat": 38.5816, "lng": -121.4944},
    "Orlando, FL": {"lat": 28.5383, "lng": -81.3792},
    "Minneapolis, MN": {"lat": 44.9778, "lng": -93.2650},
    "Kansas City, MO": {"lat": 39.0997, "lng": -94.5786},
    "Columbus, OH": {"lat": 39.9612, "lng": -82.9988},
    "Milwaukee, WI": {"lat": 43.0389, "lng": -87.9065},
    "Louisville, KY": {"lat": 38.2527, "lng": -85.7585},
    "Tampa, FL": {"lat": 27.9506, "lng": -82.4572},
    "Jacksonville, FL": {"lat": 30.3322, "lng": -81.6557},
    "Baltimore, MD": {"lat": 39.2904, "lng": -76.6122},
    "Raleigh, NC": {"lat": 35.7796, "lng": -78.6382},
    "Austin, TX": {"lat": 30.2672, "lng": -97.7431},
    "San Antonio, TX": {"lat": 29.4241, "lng": -98.4936},
    "Oklahoma City, OK": {"lat": 35.4676, "lng": -97.5164},
    "Tulsa, OK": {"lat": 36.1540, "lng": -95.9928},
    "Omaha, NE": {"lat": 41.2565, "lng": -95.9345},
    "Wichita, KS": {"lat": 37.6872, "lng": -97.3301},
    "Cleveland, OH": {"lat": 41.4993, "lng": -81.6944},
    "Pittsburgh, PA": {"lat": 40.4406, "lng": -79.9959},
    "Cincinnati, OH": {"lat": 39.1031, "lng": -84.5120},
    "Buffalo, NY": {"lat": 42.8864, "lng": -78.8784},
    "Rochester, NY": {"lat": 43.1566, "lng": -77.6088},
    "Richmond, VA": {"lat": 37.5407, "lng": -77.4360},
    "Norfolk, VA": {"lat": 36.8468, "lng": -76.2852},
    "Greensboro, NC": {"lat": 36.0726, "lng": -79.7920},
    "Birmingham, AL": {"lat": 33.5207, "lng": -86.8025},
    "Jackson, MS": {"lat": 32.2988, "lng": -90.1848},
    "Little Rock, AR": {"lat": 34.7465, "lng": -92.2896},
    "Des Moines, IA": {"lat": 41.5868, "lng": -93.6250},
    "Fargo, ND": {"lat": 46.8772, "lng": -96.7898},
    "Sioux Falls, SD": {"lat": 43.5446, "lng": -96.7311},
    "Rapid City, SD": {"lat": 44.0805, "lng": -103.2310},
    "New Orleans, LA": {"lat": 29.9511, "lng": -90.0715},
}

# Hubs that receive a larger share of seeded traffic
HUB_CITIES = [
    "Chicago, IL",
    "Dallas, TX",
    "Atlanta, GA",
    "Los Angeles, CA",
    "New York, NY",
]

# Load board cities (New Orleans only appears on legacy lanes)
LOAD_CITIES = [name for name in CITY_COORDS if name != "New Orleans, LA"]

CITY_ALIASES: dict[str, str] = {
    "nyc": "New York, NY",
    "la": "Los Angeles, CA",
    "dfw": "Dallas, TX",
    "atl": "Atlanta, GA",
    "chi": "Chicago, IL",
    "slc": "Salt Lake City, UT",
    "sf": "San Francisco, CA",
    "dc": "Washington, DC",
    "kc": "Kansas City, MO",
    "okc": "Oklahoma City, OK",
    "nola": "New Orleans, LA",
    "vegas": "Las Vegas, NV",
    "philly": "Philadelphia, PA",
}

# lowercase label -> canonical label
_LOWER_INDEX = {name.lower(): name for name in CITY_COORDS}


def canonical_city(label: str) -> str | None:
    """Exact (case-insensitive) or alias lookup. Returns the canonical label."""
    key = " ".join(label.lower().split())
    if key in CITY_ALIASES:
        return CITY_ALIASES[key]
    return _LOWER_INDEX.get(key)


def split_label(label: str) -> tuple[str, str]:
    """'Salt Lake City, UT' -> ('Salt Lake City', 'UT')."""
    city, _, state = label.rpartition(",")
    if not city:
        return label.strip(), ""
    return city.strip(), state.strip()
