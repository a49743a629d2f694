"""
Constants and default parameters for result ranking.
"""

# Field bounds, in UTF-8 bytes
MAX_URL_LENGTH = 200
MAX_TITLE_LENGTH = 100
MAX_EXTRACT_LENGTH = 200

# Length-like match statistics are stored as unsigned 8-bit counters
MAX_COUNTER_VALUE = 255

# Base of the match score: 2 ** (matched_length - total_possible_length)
MATCH_EXPONENT = 2.0

# Substituted for URLs that cannot be parsed
MISSING_URL = "https://_.com"

# Fields scored for every result, in extraction order
FIELD_NAMES = ("title", "extract", "domain", "path")

# Relative weight of each field's match score
#     title and domain dominate, extract counts least
FIELD_WEIGHTS = {
    "title": 4.0,
    "extract": 1.0,
    "domain": 4.0,
    "path": 2.0,
}

# Decay rate of the URL length penalty: exp(-rate * url_bytes)
URL_LENGTH_PENALTY_RATE = 0.04

# Final score divisor
SCORE_SCALE = 10.0
