"""Strategies deciding whether a transcript mentions a product name."""

import re
from typing import Dict, Iterable, Iterator, List, Optional, Sequence, Tuple, Type

from rapidfuzz import fuzz

from catalog import Product

_TOKEN_PUNCTUATION = ".,!?;:\"'()[]"

Span = Tuple[int, int]


def tokenize(text: str) -> List[str]:
    """Lower-cased whitespace tokens with surrounding punctuation removed."""
    tokens = (t.strip(_TOKEN_PUNCTUATION) for t in (text or "").lower().split())
    return [t for t in tokens if t]


class ProductMatcher:
    """Base matcher. Subclasses implement ``matches``; ``locate`` gives the
    token span a quantity is read around.

    ``mentioned`` walks the catalog one product at a time; an index-backed
    matcher (trie, Aho-Corasick) can override it to scan the transcript once.
    """

    name = "base"

    def matches(self, transcript: str, product_name: str) -> bool:
        raise NotImplementedError

    def mentioned(self, transcript: str, products: Iterable[Product]) -> Iterator[Product]:
        for product in products:
            if self.matches(transcript, product.name):
                yield product

    def locate(self, tokens: Sequence[str], product_name: str) -> Optional[Span]:
        """Token span (start, end) of the first exact mention of ``product_name``."""
        name_tokens = tokenize(product_name)
        if not name_tokens:
            return None
        width = len(name_tokens)
        for start in range(len(tokens) - width + 1):
            if list(tokens[start : start + width]) == name_tokens:
                return start, start + width
        return None


class SubstringMatcher(ProductMatcher):
    """Case-folded substring containment, so "breadbox" mentions "bread"."""

    name = "substring"

    def matches(self, transcript: str, product_name: str) -> bool:
        needle = product_name.strip().lower()
        if not needle:
            return False
        return needle in (transcript or "").lower()


class WordBoundaryMatcher(ProductMatcher):
    """Case-folded match of the whole name between non-word characters."""

    name = "word"

    def matches(self, transcript: str, product_name: str) -> bool:
        needle = product_name.strip().lower()
        if not needle or not transcript:
            return False
        pattern = r"(?<!\w)" + re.escape(needle) + r"(?!\w)"
        return re.search(pattern, transcript.lower()) is not None


class FuzzyMatcher(ProductMatcher):
    """Tolerates recognition noise by scoring token windows with WRatio."""

    name = "fuzzy"

    def __init__(self, score_cutoff: int = 78):
        self.score_cutoff = score_cutoff

    def matches(self, transcript: str, product_name: str) -> bool:
        needle = product_name.strip().lower()
        if not needle or not transcript:
            return False
        text = transcript.lower()
        if needle in text:
            return True

        tokens = re.findall(r"\w+", text)
        window = len(needle.split())
        for i in range(0, len(tokens) - window + 1):
            candidate = " ".join(tokens[i : i + window])
            if fuzz.WRatio(candidate, needle, score_cutoff=self.score_cutoff):
                return True
        return False

    def locate(self, tokens: Sequence[str], product_name: str) -> Optional[Span]:
        span = super().locate(tokens, product_name)
        if span is not None:
            return span

        needle = " ".join(tokenize(product_name))
        width = len(needle.split())
        if not width:
            return None
        for start in range(len(tokens) - width + 1):
            candidate = " ".join(tokens[start : start + width])
            if fuzz.WRatio(candidate, needle, score_cutoff=self.score_cutoff):
                return start, start + width
        return None


MATCHERS: Dict[str, Type[ProductMatcher]] = {
    SubstringMatcher.name: SubstringMatcher,
    WordBoundaryMatcher.name: WordBoundaryMatcher,
    FuzzyMatcher.name: FuzzyMatcher,
}


def get_matcher(name: str, **kwargs) -> ProductMatcher:
    try:
        cls = MATCHERS[name.strip().lower()]
    except KeyError:
        raise ValueError(f"unknown matcher {name!r}, expected one of {sorted(MATCHERS)}") from None
    return cls(**kwargs)
