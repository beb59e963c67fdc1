SECTOR_ORDER = [
    "Technology",
    "Finance",
    "Healthcare",
    "Energy",
    "Consumer",
    "Industrial",
    "Materials",
    "Utilities",
]

SECTOR_KEYWORDS = {
    "Technology": [
        "tech",
        "technology",
        "software",
        "semiconductor",
        "chip",
        "ai",
        "artificial intelligence",
        "cloud",
        "computing",
        "digital",
        "internet",
        "cyber",
        "data",
        "algorithm",
        "platform",
        "app",
        "device",
        "hardware",
        "startup",
        "tech company",
        "innovation",
        "digital transformation",
    ],
    "Finance": [
        "bank",
        "financial",
        "finance",
        "market",
        "trading",
        "stock",
        "currency",
        "fed",
        "federal reserve",
        "central bank",
        "economy",
        "inflation",
        "interest rate",
        "bond",
        "investment",
        "investor",
        "marketplace",
        "financial market",
        "stock market",
        "banking",
        "monetary",
        "fiscal",
    ],
    "Healthcare": [
        "health",
        "healthcare",
        "medical",
        "pharma",
        "pharmaceutical",
        "drug",
        "hospital",
        "clinic",
        "treatment",
        "medicine",
        "patient",
        "disease",
        "healthcare sector",
        "medical device",
        "biotech",
        "biotechnology",
        "clinical trial",
        "health system",
        "healthcare provider",
    ],
    "Energy": [
        "oil",
        "gas",
        "energy",
        "renewable",
        "solar",
        "wind",
        "nuclear",
        "power",
        "electricity",
        "fuel",
        "petroleum",
        "crude",
        "energy sector",
        "drilling",
        "refinery",
        "energy market",
        "energy production",
        "energy consumption",
    ],
    "Consumer": [
        "retail",
        "consumer",
        "shopping",
        "brand",
        "store",
        "sales",
        "consumer goods",
        "marketplace",
        "e-commerce",
        "retailer",
        "consumer spending",
        "retail sector",
        "consumer market",
        "shopping mall",
    ],
    "Industrial": [
        "manufacturing",
        "industrial",
        "factory",
        "production",
        "manufacturing sector",
        "industrial sector",
        "plant",
        "manufacturing plant",
        "industrial production",
        "factory output",
        "manufacturing output",
    ],
    "Materials": [
        "steel",
        "copper",
        "commodity",
        "mining",
        "metal",
        "raw materials",
        "commodities",
        "mineral",
        "mining sector",
        "metals market",
        "commodity market",
        "steel production",
        "copper price",
    ],
    "Utilities": [
        "utility",
        "utilities",
        "power",
        "electricity",
        "grid",
        "energy grid",
        "public utility",
        "power plant",
        "electric grid",
        "utility sector",
        "power generation",
        "electricity generation",
    ],
}

POSITIVE_KEYWORDS = [
    "growth",
    "surge",
    "gain",
    "rise",
    "boost",
    "breakthrough",
    "success",
    "profit",
    "increase",
    "up",
    "positive",
    "expansion",
    "recovery",
    "improvement",
    "advance",
    "progress",
    "soar",
    "jump",
    "climb",
    "rally",
    "boom",
    "thrive",
    "flourish",
    "prosper",
    "excel",
    "outperform",
]

NEGATIVE_KEYWORDS = [
    "decline",
    "fall",
    "crash",
    "crisis",
    "loss",
    "breach",
    "attack",
    "failure",
    "decrease",
    "down",
    "negative",
    "recession",
    "collapse",
    "downturn",
    "drop",
    "plunge",
    "slump",
    "dive",
    "tumble",
    "sink",
    "weaken",
    "struggle",
    "fail",
    "breakdown",
    "disruption",
    "shortage",
    "scarcity",
]

HIGH_IMPACT_KEYWORDS = [
    "crisis",
    "crash",
    "breakthrough",
    "emergency",
    "critical",
    "urgent",
    "major",
    "significant",
    "massive",
    "huge",
    "enormous",
    "devastating",
    "catastrophic",
    "revolutionary",
    "transformative",
    "game-changing",
]

# Age thresholds (hours) shared by impact classification and recency decay.
RECENT_HOURS = 2
MEDIUM_HOURS = 6

MIN_CONFIDENCE = 0.3
MAX_CONFIDENCE = 1.0
CONFIDENCE_RATIO_SCALE = 2.0
