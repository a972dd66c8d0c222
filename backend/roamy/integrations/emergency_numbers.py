# Emergency numbers by ISO 3166-1 alpha-2 country code: (police, ambulance, tourist police).
# Countries not listed fall back to the international GSM emergency number.

DEFAULT_EMERGENCY = ("112", "112", None)

EMERGENCY_NUMBERS: dict[str, tuple] = {
    "US": ("911", "911", None), "CA": ("911", "911", None), "MX": ("911", "911", None),
    "GB": ("999", "999", None), "IE": ("112", "112", None), "FR": ("17", "15", None),
    "DE": ("110", "112", None), "IT": ("112", "118", None), "ES": ("091", "061", "902 102 112"),
    "PT": ("112", "112", None), "NL": ("112", "112", None), "BE": ("101", "112", None),
    "CH": ("117", "144", None), "AT": ("133", "144", None), "GR": ("100", "166", "171"),
    "CZ": ("158", "155", None), "PL": ("997", "999", None), "HU": ("107", "104", None),
    "HR": ("192", "194", None), "SE": ("112", "112", None), "NO": ("112", "113", None),
    "DK": ("114", "112", None), "FI": ("112", "112", None), "IS": ("112", "112", None),
    "TR": ("155", "112", "0212 527 4503"), "RU": ("102", "103", None), "IL": ("100", "101", None),
    "AE": ("999", "998", "901"), "SA": ("999", "997", None), "QA": ("999", "999", None),
    "EG": ("122", "123", "126"), "MA": ("19", "15", None), "ZA": ("10111", "10177", None),
    "KE": ("999", "999", None), "TZ": ("112", "114", None), "NG": ("112", "112", None),
    "IN": ("100", "102", "1363"), "LK": ("119", "110", "1912"), "NP": ("100", "102", "1144"),
    "CN": ("110", "120", None), "HK": ("999", "999", None), "TW": ("110", "119", None),
    "JP": ("110", "119", None), "KR": ("112", "119", "1330"), "TH": ("191", "1669", "1155"),
    "VN": ("113", "115", None), "KH": ("117", "119", None), "MY": ("999", "999", None),
    "SG": ("999", "995", None), "ID": ("110", "118", None), "PH": ("911", "911", None),
    "AU": ("000", "000", None), "NZ": ("111", "111", None), "BR": ("190", "192", None),
    "AR": ("911", "107", None), "CL": ("133", "131", None), "PE": ("105", "106", "0800 22221"),
    "CO": ("123", "123", None), "CR": ("911", "911", None), "CU": ("106", "104", None),
}


def emergency_for_country(country_code: str) -> tuple:
    return EMERGENCY_NUMBERS.get((country_code or "").upper(), DEFAULT_EMERGENCY)
