"""Country names, ISO codes, aliases and city-to-country resolution for visa lookups."""

COUNTRY_TO_ISO: dict[str, str] = {
    "afghanistan": "AF", "albania": "AL", "algeria": "DZ", "argentina": "AR", "armenia": "AM",
    "australia": "AU", "austria": "AT", "azerbaijan": "AZ", "bahrain": "BH", "bangladesh": "BD",
    "belgium": "BE", "bhutan": "BT", "bolivia": "BO", "brazil": "BR", "bulgaria": "BG",
    "cambodia": "KH", "canada": "CA", "chile": "CL", "china": "CN", "colombia": "CO",
    "costa rica": "CR", "croatia": "HR", "cuba": "CU", "cyprus": "CY", "czech republic": "CZ",
    "denmark": "DK", "dominican republic": "DO", "ecuador": "EC", "egypt": "EG",
    "estonia": "EE", "ethiopia": "ET", "fiji": "FJ", "finland": "FI", "france": "FR",
    "georgia": "GE", "germany": "DE", "ghana": "GH", "greece": "GR", "hong kong": "HK",
    "hungary": "HU", "iceland": "IS", "india": "IN", "indonesia": "ID", "iran": "IR",
    "iraq": "IQ", "ireland": "IE", "israel": "IL", "italy": "IT", "jamaica": "JM",
    "japan": "JP", "jordan": "JO", "kazakhstan": "KZ", "kenya": "KE", "kuwait": "KW",
    "laos": "LA", "latvia": "LV", "lebanon": "LB", "lithuania": "LT", "luxembourg": "LU",
    "macau": "MO", "malaysia": "MY", "maldives": "MV", "malta": "MT", "mauritius": "MU",
    "mexico": "MX", "monaco": "MC", "mongolia": "MN", "montenegro": "ME", "morocco": "MA",
    "myanmar": "MM", "nepal": "NP", "netherlands": "NL", "new zealand": "NZ", "nigeria": "NG",
    "north korea": "KP", "norway": "NO", "oman": "OM", "pakistan": "PK", "panama": "PA",
    "peru": "PE", "philippines": "PH", "poland": "PL", "portugal": "PT", "qatar": "QA",
    "romania": "RO", "russia": "RU", "rwanda": "RW", "saudi arabia": "SA", "serbia": "RS",
    "seychelles": "SC", "singapore": "SG", "slovakia": "SK", "slovenia": "SI",
    "south africa": "ZA", "south korea": "KR", "spain": "ES", "sri lanka": "LK",
    "sweden": "SE", "switzerland": "CH", "taiwan": "TW", "tanzania": "TZ", "thailand": "TH",
    "tunisia": "TN", "turkey": "TR", "uganda": "UG", "ukraine": "UA",
    "united arab emirates": "AE", "united kingdom": "GB", "united states": "US",
    "uruguay": "UY", "uzbekistan": "UZ", "vatican": "VA", "venezuela": "VE", "vietnam": "VN",
    "zambia": "ZM", "zimbabwe": "ZW",
}

ISO_TO_COUNTRY: dict[str, str] = {code: name for name, code in COUNTRY_TO_ISO.items()}

COUNTRY_ALIASES: dict[str, str] = {
    "usa": "united states", "us": "united states", "america": "united states",
    "uk": "united kingdom", "england": "united kingdom", "great britain": "united kingdom",
    "britain": "united kingdom", "uae": "united arab emirates", "korea": "south korea",
    "czechia": "czech republic", "burma": "myanmar", "holland": "netherlands",
}

CITY_TO_COUNTRY: dict[str, str] = {
    "paris": "france", "nice": "france", "lyon": "france", "london": "united kingdom",
    "edinburgh": "united kingdom", "tokyo": "japan", "osaka": "japan", "kyoto": "japan",
    "rome": "italy", "milan": "italy", "venice": "italy", "florence": "italy",
    "barcelona": "spain", "madrid": "spain", "lisbon": "portugal", "porto": "portugal",
    "amsterdam": "netherlands", "berlin": "germany", "munich": "germany", "vienna": "austria",
    "prague": "czech republic", "zurich": "switzerland", "geneva": "switzerland",
    "reykjavik": "iceland", "athens": "greece", "santorini": "greece", "istanbul": "turkey",
    "dubai": "united arab emirates", "abu dhabi": "united arab emirates", "doha": "qatar",
    "bangkok": "thailand", "phuket": "thailand", "bali": "indonesia", "jakarta": "indonesia",
    "singapore": "singapore", "kuala lumpur": "malaysia", "hong kong": "hong kong",
    "seoul": "south korea", "beijing": "china", "shanghai": "china", "hanoi": "vietnam",
    "ho chi minh city": "vietnam", "delhi": "india", "new delhi": "india", "mumbai": "india",
    "goa": "india", "male": "maldives", "sydney": "australia", "melbourne": "australia",
    "auckland": "new zealand", "new york": "united states", "los angeles": "united states",
    "san francisco": "united states", "miami": "united states", "toronto": "canada",
    "vancouver": "canada", "mexico city": "mexico", "cancun": "mexico", "cairo": "egypt",
    "marrakech": "morocco", "cape town": "south africa", "nairobi": "kenya",
    "rio de janeiro": "brazil", "buenos aires": "argentina", "lima": "peru",
}


def normalize_country(value: str) -> str:
    """Resolve a country name, ISO code or alias to the lowercase country name."""
    normalized = value.strip().lower()
    if normalized in COUNTRY_TO_ISO:
        return normalized
    if normalized in COUNTRY_ALIASES:
        return COUNTRY_ALIASES[normalized]
    from_iso = ISO_TO_COUNTRY.get(normalized.upper()) if len(normalized) == 2 else None
    return from_iso or normalized


def destination_country(destination: str) -> str:
    """Resolve 'Tokyo, Japan', 'Tokyo' or 'Japan' to a normalized country name."""
    if "," in destination:
        return normalize_country(destination.split(",")[-1])
    normalized = normalize_country(destination)
    if normalized in COUNTRY_TO_ISO:
        return normalized
    return CITY_TO_COUNTRY.get(destination.strip().lower(), normalized)


def country_code(country: str) -> str:
    """ISO alpha-2 code for a country (first two letters when unknown)."""
    normalized = normalize_country(country)
    return COUNTRY_TO_ISO.get(normalized, country.strip()[:2].upper())


def display_name(country: str) -> str:
    return " ".join(word.capitalize() for word in normalize_country(country).split())
