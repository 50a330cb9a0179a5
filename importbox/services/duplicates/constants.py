"""Defaults for duplicate detection and lead-name matching."""

DEFAULT_SIMILARITY_THRESHOLD = 80
DEFAULT_AMOUNT_TOLERANCE = 0.01
DEFAULT_LEAD_MATCH_THRESHOLD = 85

# Legal suffixes dropped when comparing company names
COMPANY_SUFFIXES = (
    "incorporated",
    "inc.",
    "inc",
    "l.l.c.",
    "llc",
    "ltd.",
    "ltd",
    "limited",
    "corporation",
    "corp.",
    "corp",
)
