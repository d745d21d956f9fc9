"""
Runtime settings, read from the environment once at import.

Environment variables:
    VOICEBUY_CATALOG_PATH: product catalog, JSON or CSV (default: data/catalog.json)
    VOICEBUY_PROFILE_PATH: user profile JSON (default: data/mock_user.json)
    VOICEBUY_MATCHER: word, substring or fuzzy (default: word)
    VOICEBUY_FUZZY_CUTOFF: WRatio score cutoff for the fuzzy matcher (default: 78)
    VOICEBUY_DEBUG: show parsing details in the app (default: false)
"""

import os
from pathlib import Path

from matchers import FuzzyMatcher, ProductMatcher, get_matcher

DATA_DIR = Path(__file__).resolve().parent / "data"

CATALOG_PATH = Path(os.getenv("VOICEBUY_CATALOG_PATH", str(DATA_DIR / "catalog.json")))
PROFILE_PATH = Path(os.getenv("VOICEBUY_PROFILE_PATH", str(DATA_DIR / "mock_user.json")))
MATCHER = os.getenv("VOICEBUY_MATCHER", "word")
FUZZY_CUTOFF = int(os.getenv("VOICEBUY_FUZZY_CUTOFF", "78"))
DEBUG = os.getenv("VOICEBUY_DEBUG", "false").lower() in ("1", "true", "yes")


def build_matcher(name: str = None) -> ProductMatcher:
    name = name or MATCHER
    if name.strip().lower() == FuzzyMatcher.name:
        return get_matcher(name, score_cutoff=FUZZY_CUTOFF)
    return get_matcher(name)
