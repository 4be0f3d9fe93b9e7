import math
from typing import Any, Dict, Tuple

KM_PER_DEGREE_LAT = 111.0
DEFAULT_RESULTS_PER_PAGE = 25

# node parameter -> WiGLE query key
LOCATION_KEYS = {
    "query_road": "road",
    "query_city": "city",
    "query_region": "region",
    "query_postalcode": "postalCode",
    "query_country": "country",
}


def bounding_box(lat: float, lon: float, radius_km: float) -> Tuple[float, float, float, float]:
    """Approximate a circle of ``radius_km`` around (lat, lon) with a lat/lon box.

    Flat-earth approximation: one degree of latitude is taken as 111 km and
    the longitude delta is widened by 1/cos(lat). Nothing is clamped, so the
    box is meaningless near the poles (cos(lat) -> 0) or across the
    antimeridian.

    Returns (latrange1, latrange2, longrange1, longrange2).
    """
    dlat = radius_km / KM_PER_DEGREE_LAT
    dlon = radius_km / (KM_PER_DEGREE_LAT * math.cos(lat * math.pi / 180))
    return lat - dlat, lat + dlat, lon - dlon, lon + dlon


def build_query(params: Dict[str, Any]) -> Dict[str, Any]:
    """Build the network search query string from resolved node parameters."""
    query: Dict[str, Any] = {}
    if params.get("query_ssid"):
        query["ssidlike"] = params["query_ssid"]
    if params.get("query_bssid"):
        query["netid"] = params["query_bssid"]

    if params.get("filter_geo"):
        lat1, lat2, lon1, lon2 = bounding_box(
            float(params.get("query_lat") or 0),
            float(params.get("query_lon") or 0),
            float(params.get("query_radius") or 0),
        )
        query["latrange1"] = lat1
        query["latrange2"] = lat2
        query["longrange1"] = lon1
        query["longrange2"] = lon2

    if params.get("filter_location"):
        for param, key in LOCATION_KEYS.items():
            value = params.get(param)
            if value is not None and str(value).strip() != "":
                query[key] = value

    options = params.get("options") or {}
    query["resultsPerPage"] = options.get("results_per_page") or DEFAULT_RESULTS_PER_PAGE
    return query
