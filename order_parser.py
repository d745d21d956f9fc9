"""Turn a transcript and a catalog into an order.

Parsing is a pure function of its inputs: it keeps no state between calls,
performs no I/O and never raises for string input, so partial transcripts can
simply be parsed again as they arrive.
"""

import logging
import re
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from typing import Optional, Tuple

import pandas as pd

from catalog import Catalog, Product
from matchers import ProductMatcher, WordBoundaryMatcher, tokenize

logger = logging.getLogger(__name__)

DEFAULT_QUANTITY = 1
_QUANTITY_RE = re.compile(r"[0-9]+")
_CENT = Decimal("0.01")
_EXACT_MATCHER = ProductMatcher()


@dataclass(frozen=True)
class OrderLine:
    product: Product
    quantity: int = DEFAULT_QUANTITY

    @property
    def line_total(self) -> Decimal:
        return self.product.price * self.quantity


@dataclass(frozen=True)
class Order:
    lines: Tuple[OrderLine, ...] = ()

    @property
    def total(self) -> Decimal:
        return sum((line.line_total for line in self.lines), Decimal(0))

    @property
    def is_empty(self) -> bool:
        return not self.lines

    def to_frame(self) -> pd.DataFrame:
        rows = [
            {
                "product": line.product.name,
                "quantity": line.quantity,
                "unit_price": line.product.price,
                "line_total": line.line_total,
            }
            for line in self.lines
        ]
        return pd.DataFrame(rows, columns=["product", "quantity", "unit_price", "line_total"])


def _as_quantity(token: str) -> Optional[int]:
    if not _QUANTITY_RE.fullmatch(token):
        return None
    value = int(token)
    return value if value > 0 else None


def extract_quantity(transcript: str, product_name: str, matcher: Optional[ProductMatcher] = None) -> int:
    """Quantity spoken next to the first mention of ``product_name``.

    The token right before the mention wins over the token right after it;
    anything else falls back to 1. Multi-word names are matched as a whole
    token sequence; a fuzzy matcher also anchors on misrecognized names.
    """
    tokens = tokenize(transcript)
    span = (matcher or _EXACT_MATCHER).locate(tokens, product_name)
    if span is None:
        return DEFAULT_QUANTITY

    start, end = span
    if start > 0:
        before = _as_quantity(tokens[start - 1])
        if before is not None:
            return before
    if end < len(tokens):
        after = _as_quantity(tokens[end])
        if after is not None:
            return after
    return DEFAULT_QUANTITY


def parse(transcript: str, catalog: Catalog, matcher: Optional[ProductMatcher] = None) -> Order:
    """Order lines for every catalog product mentioned in ``transcript``.

    Lines follow catalog order, one per distinct product name (the first
    catalog entry with a given name wins).
    """
    transcript = transcript or ""
    if not transcript.strip() or catalog.is_empty:
        return Order()

    matcher = matcher or WordBoundaryMatcher()
    seen = set()
    lines = []
    for product in matcher.mentioned(transcript, catalog.products()):
        key = product.name.lower()
        if key in seen:
            continue
        seen.add(key)
        lines.append(OrderLine(product, extract_quantity(transcript, product.name, matcher)))

    order = Order(tuple(lines))
    logger.debug("Parsed %d line(s) from %r, total %s", len(order.lines), transcript, order.total)
    return order


def format_currency(value) -> str:
    if value is None:
        return "—"
    amount = Decimal(str(value)).quantize(_CENT, rounding=ROUND_HALF_UP)
    return f"${amount:,.2f}"
