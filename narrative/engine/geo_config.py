# Manual associations for geo features whose descriptions do not name the
# countries they belong to. Keys are dataset names, values canonical
# gazetteer country names. A listed feature is matched only through this map.
HOTSPOT_COUNTRY_MAP = {
    "Strait of Hormuz": ["Iran", "Oman", "United Arab Emirates"],
    "Suez Canal": ["Egypt"],
    "Panama Canal": ["Panama"],
    "Taiwan Strait": ["Taiwan", "China"],
    "South China Sea": ["China", "Vietnam", "Philippines", "Malaysia"],
    "Bering Strait": ["United States", "Russia"],
    "Strait of Malacca": ["Malaysia", "Singapore", "Indonesia"],
    "Bab el-Mandeb": ["Yemen", "Djibouti", "Eritrea"],
    "English Channel": ["United Kingdom", "France"],
    "Bosphorus Strait": ["Turkey"],
}

INFRASTRUCTURE_COUNTRY_MAP = {
    "NYC": ["United States"],
    "Cornwall": ["United Kingdom"],
    "Marseille": ["France"],
    "Mumbai": ["India"],
    "Singapore": ["Singapore"],
    "Hong Kong": ["China", "Hong Kong"],
    "Tokyo": ["Japan"],
    "Sydney": ["Australia"],
    "LA": ["United States"],
    "Miami": ["United States"],
    "Ramstein": ["Germany"],
    "Diego Garcia": ["United Kingdom"],
    "Okinawa": ["Japan"],
    "Guam": ["United States"],
    "Djibouti": ["Djibouti"],
    "Qatar": ["Qatar"],
    "Kaliningrad": ["Russia"],
    "Sevastopol": ["Ukraine", "Russia"],
    "Hainan": ["China"],
    "Natanz": ["Iran"],
    "Yongbyon": ["North Korea"],
    "Dimona": ["Israel"],
    "Bushehr": ["Iran"],
    "Zaporizhzhia": ["Ukraine"],
    "Chernobyl": ["Ukraine"],
    "Fukushima": ["Japan"],
}

CONFLICT_KEYWORDS = ["conflict", "war", "attack", "strike", "military", "battle", "fighting"]
INFRASTRUCTURE_KEYWORDS = ["infrastructure", "cable", "nuclear", "base", "facility", "power plant"]

SITUATION_LOOKBACK_HOURS = 24
MAX_RELEVANT_EVENTS = 5

ACTIVITY_HIGH_MENTIONS = 6
ACTIVITY_HIGH_EVENTS = 5
ACTIVITY_MEDIUM_MENTIONS = 3
ACTIVITY_MEDIUM_EVENTS = 2
