"""Spoken prompt texts for the listen / confirm / complete flow."""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Union

import pandas as pd

from order_parser import Order, format_currency

logger = logging.getLogger(__name__)

LISTEN_PROMPT = "Please say what you would like to buy."
COMPLETE_PROMPT = "Your order has been placed successfully."
NOTHING_RECOGNIZED = "I did not recognize any items."
NOTHING_HEARD = "I did not hear anything."


@dataclass(frozen=True)
class UserProfile:
    user: str
    address: str
    payment: str
    family_contact: str


def load_user_profile(path: Union[str, Path]) -> Optional[UserProfile]:
    """Read the user profile document; None if it is missing or unreadable."""
    path = Path(path)
    if not path.is_file():
        logger.info("No user profile at %s", path)
        return None
    try:
        raw = pd.read_json(path, typ="series", dtype=False, convert_dates=False)
    except ValueError as e:
        logger.warning("Ignoring malformed user profile %s: %s", path, e)
        return None

    fields = {str(k).strip(): "" if v is None else str(v).strip() for k, v in raw.items()}
    missing = [k for k in ("user", "address", "payment", "familyContact") if k not in fields]
    if missing:
        logger.warning("Ignoring user profile %s, missing %s", path, ", ".join(missing))
        return None
    return UserProfile(
        user=fields["user"],
        address=fields["address"],
        payment=fields["payment"],
        family_contact=fields["familyContact"],
    )


def describe_order(order: Order) -> str:
    if order.is_empty:
        return NOTHING_RECOGNIZED
    parts = [f"{line.quantity} {line.product.name}" for line in order.lines]
    items = parts[0] if len(parts) == 1 else ", ".join(parts[:-1]) + " and " + parts[-1]
    return f"That is {items}, for {format_currency(order.total)}."


def confirmation_prompt(transcript: str, profile: Optional[UserProfile] = None, order: Optional[Order] = None) -> str:
    said = (transcript or "").strip()
    if not said:
        return f"{NOTHING_HEARD} {LISTEN_PROMPT}"
    sentences = [f"You said {said}."]
    if order is not None:
        sentences.append(describe_order(order))
    if profile is not None and profile.address:
        sentences.append(f"Shall I order it to {profile.address}?")
    else:
        sentences.append("Do you want to order it?")
    return " ".join(sentences)
