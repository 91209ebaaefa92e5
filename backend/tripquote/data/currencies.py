"""Country to currency mapping used when a trip has no configured currency."""

# ISO 3166-1 alpha-2 → ISO 4217
COUNTRY_CURRENCIES: dict[str, str] = {
    # Southeast Asia
    "TH": "THB", "MY": "MYR", "SG": "SGD", "ID": "IDR", "VN": "VND",
    "PH": "PHP", "KH": "KHR", "LA": "LAK", "MM": "MMK",
    # South Asia
    "IN": "INR", "LK": "LKR", "NP": "NPR", "BT": "BTN", "MV": "MVR",
    # East Asia
    "JP": "JPY", "KR": "KRW", "CN": "CNY", "HK": "HKD", "TW": "TWD",
    # Middle East
    "AE": "AED", "QA": "QAR", "KW": "KWD", "OM": "OMR", "SA": "SAR",
    "BH": "BHD", "TR": "TRY",
    # Europe
    "GB": "GBP", "CH": "CHF", "FR": "EUR", "DE": "EUR", "IT": "EUR",
    "ES": "EUR", "NL": "EUR", "AT": "EUR", "GR": "EUR", "PT": "EUR",
    # Americas / Oceania / Africa
    "US": "USD", "CA": "CAD", "AU": "AUD", "NZ": "NZD", "ZA": "ZAR",
    "MU": "MUR", "EG": "EGP",
}

# Lower-cased country names → ISO 3166-1 alpha-2
COUNTRY_NAMES: dict[str, str] = {
    "thailand": "TH", "malaysia": "MY", "singapore": "SG", "indonesia": "ID",
    "vietnam": "VN", "philippines": "PH", "cambodia": "KH", "laos": "LA",
    "myanmar": "MM", "india": "IN", "sri lanka": "LK", "nepal": "NP",
    "bhutan": "BT", "maldives": "MV", "japan": "JP", "south korea": "KR",
    "china": "CN", "hong kong": "HK", "taiwan": "TW",
    "uae": "AE", "united arab emirates": "AE", "dubai": "AE",
    "qatar": "QA", "kuwait": "KW", "oman": "OM", "saudi arabia": "SA",
    "bahrain": "BH", "turkey": "TR", "united kingdom": "GB", "uk": "GB",
    "switzerland": "CH", "france": "FR", "germany": "DE", "italy": "IT",
    "spain": "ES", "netherlands": "NL", "austria": "AT", "greece": "GR",
    "portugal": "PT", "united states": "US", "usa": "US", "canada": "CA",
    "australia": "AU", "new zealand": "NZ", "south africa": "ZA",
    "mauritius": "MU", "egypt": "EG",
}

CURRENCY_SYMBOLS: dict[str, str] = {
    "THB": "฿", "MYR": "RM", "SGD": "S$", "IDR": "Rp", "VND": "₫",
    "PHP": "₱", "KHR": "៛", "LAK": "₭", "MMK": "K", "INR": "₹",
    "LKR": "Rs", "NPR": "Rs", "BTN": "Nu.", "MVR": "Rf", "JPY": "¥",
    "KRW": "₩", "CNY": "¥", "HKD": "HK$", "TWD": "NT$", "AED": "د.إ",
    "QAR": "ر.ق", "KWD": "د.ك", "OMR": "ر.ع.", "SAR": "ر.س", "BHD": ".د.ب",
    "TRY": "₺", "GBP": "£", "CHF": "CHF", "EUR": "€", "USD": "$",
    "CAD": "C$", "AUD": "A$", "NZD": "NZ$", "ZAR": "R", "MUR": "₨",
    "EGP": "E£",
}

# Currencies quoted without minor units on client documents.
ZERO_DECIMAL_CURRENCIES: frozenset[str] = frozenset({"JPY", "KRW", "VND", "IDR"})


def country_code(country: str) -> str | None:
    """Return the ISO code for a country given by code or name."""
    key = country.strip()
    if not key:
        return None
    if key.upper() in COUNTRY_CURRENCIES:
        return key.upper()
    return COUNTRY_NAMES.get(key.lower())
