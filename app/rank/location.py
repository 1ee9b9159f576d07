"""Fuzzy matching of listing locations against a preferred location."""

from typing import Optional

# Two-letter postal abbreviation -> full state name
STATE_NAMES = {
    "al": "alabama",
    "ak": "alaska",
    "az": "arizona",
    "ar": "arkansas",
    "ca": "california",
    "co": "colorado",
    "ct": "connecticut",
    "de": "delaware",
    "dc": "district of columbia",
    "fl": "florida",
    "ga": "georgia",
    "hi": "hawaii",
    "id": "idaho",
    "il": "illinois",
    "in": "indiana",
    "ia": "iowa",
    "ks": "kansas",
    "ky": "kentucky",
    "la": "louisiana",
    "me": "maine",
    "md": "maryland",
    "ma": "massachusetts",
    "mi": "michigan",
    "mn": "minnesota",
    "ms": "mississippi",
    "mo": "missouri",
    "mt": "montana",
    "ne": "nebraska",
    "nv": "nevada",
    "nh": "new hampshire",
    "nj": "new jersey",
    "nm": "new mexico",
    "ny": "new york",
    "nc": "north carolina",
    "nd": "north dakota",
    "oh": "ohio",
    "ok": "oklahoma",
    "or": "oregon",
    "pa": "pennsylvania",
    "ri": "rhode island",
    "sc": "south carolina",
    "sd": "south dakota",
    "tn": "tennessee",
    "tx": "texas",
    "ut": "utah",
    "vt": "vermont",
    "va": "virginia",
    "wa": "washington",
    "wv": "west virginia",
    "wi": "wisconsin",
    "wy": "wyoming",
}

ANY_LOCATION = {"", "any", "any location"}


def is_any_location(location: Optional[str]) -> bool:
    """True when a preferred location places no constraint."""
    return location is None or location.strip().lower() in ANY_LOCATION


def _split(location: str) -> tuple[str, Optional[str]]:
    if "," not in location:
        return location.strip(), None
    city, state = location.split(",", 1)
    return city.strip(), state.strip()


def _canonical_state(state: str) -> str:
    return STATE_NAMES.get(state, state)


def states_match(a: str, b: str) -> bool:
    """Compare two lower-cased state strings, full name or abbreviation."""
    if a == b:
        return True
    return _canonical_state(a) == _canonical_state(b)


def location_matches(business_location: str, preferred_location: str) -> bool:
    """Does a listing location satisfy a preferred location?

    Case-insensitive. Direct substring containment in either direction is a
    match ("Denver, CO" vs "CO"). Otherwise both strings are split on the
    first comma into (city, state); equal cities with equal states, or
    states that are the same once abbreviations are expanded
    ("Houston, TX" vs "Houston, Texas"), match.
    """
    business = (business_location or "").strip().lower()
    preferred = (preferred_location or "").strip().lower()

    if not business:
        return False
    if preferred in business or business in preferred:
        return True

    business_city, business_state = _split(business)
    preferred_city, preferred_state = _split(preferred)

    if business_state is None or preferred_state is None:
        return False
    if not business_city or business_city != preferred_city:
        return False

    return states_match(business_state, preferred_state)
