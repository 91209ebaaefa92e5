"""Built-in advisory tax rates, keyed by ISO country code.

Each entry maps a service type to a percentage; the ``all`` entry is the
country default used when no service-specific rate exists.
"""

TAX_RATES: dict[str, dict[str, str]] = {
    "TH": {"all": "7"},
    "IN": {
        "all": "5",
        "transport": "5",
        "hotel": "12",
        "sightseeing": "18",
        "restaurant": "18",
        "entertainment": "18",
    },
    "AE": {"all": "5"},
    "SG": {"all": "9"},
    "MY": {"all": "8", "restaurant": "6"},
    "ID": {"all": "11"},
    "VN": {"all": "10"},
    "LK": {"all": "18"},
    "MV": {"all": "16", "hotel": "17"},
    "JP": {"all": "10"},
    "GB": {"all": "20"},
    "FR": {"all": "20", "hotel": "10", "restaurant": "10"},
    "AU": {"all": "10"},
}

TAX_NAMES: dict[str, str] = {
    "IN": "GST",
    "SG": "GST",
    "AU": "GST",
    "MY": "SST",
}

DEFAULT_TAX_NAME = "VAT"
