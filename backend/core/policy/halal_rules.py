"""
Policy tables for conditional ingredients. Data only; evaluated by policy_adjuster.
Values are status strings; "questionable" is read as "conditional".
"""

GELATIN_UNKNOWN = "gelatin_unknown"
ALCOHOL_TRACE = "alcohol_trace"
SEAFOOD_SHELLFISH = "seafood_shellfish"

# Evaluated in this order; a later tag overrides an earlier one
STRICTNESS_TAGS = (GELATIN_UNKNOWN, ALCOHOL_TRACE)

STRICTNESS_RULES: dict[str, dict[str, str]] = {
    "flexible": {
        GELATIN_UNKNOWN: "questionable",
        ALCOHOL_TRACE: "halal",
    },
    "standard": {
        GELATIN_UNKNOWN: "questionable",
        ALCOHOL_TRACE: "conditional",
    },
    "strict": {
        GELATIN_UNKNOWN: "haram",
        ALCOHOL_TRACE: "haram",
    },
}

SCHOOL_RULES: dict[str, dict[str, str]] = {
    "hanafi": {SEAFOOD_SHELLFISH: "haram"},
    "shafii": {SEAFOOD_SHELLFISH: "halal"},
    "maliki": {SEAFOOD_SHELLFISH: "halal"},
    "hanbali": {SEAFOOD_SHELLFISH: "halal"},
    "jafari": {SEAFOOD_SHELLFISH: "haram"},
}

ANIMAL_DERIVED_CATEGORY = "animal-derived"
GELATIN_MARKERS = ("gelatin",)
ALCOHOL_TRACE_MARKERS = ("vanilla", "extract")
SHELLFISH_MARKERS = ("shellfish", "shrimp", "lobster")


def strictness_rule(level: str, tag: str):
    return STRICTNESS_RULES.get(level, {}).get(tag)


def school_rule(school: str, tag: str):
    return SCHOOL_RULES.get(school, {}).get(tag)
