from __future__ import annotations

import re

_NON_DIGIT = re.compile(r"[^0-9]")


# Gateway wants "+<digits>". Any formatting (spaces, dashes, dots, parens, an
# existing "+") is dropped and a single "+" re-added.
def normalize_number(number: str) -> str:
    return "+" + _NON_DIGIT.sub("", number or "")
