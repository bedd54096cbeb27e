"""Conversion between integer lists and comma-separated text."""

from __future__ import annotations

import re
from collections.abc import Iterable

_INTEGER = re.compile(r"[+-]?[0-9]+")


def csv_to_ints(csv: str) -> list[int]:
    """Parse comma-separated integers, skipping parts that are not integers."""
    if not csv:
        return []
    return [
        int(part)
        for part in (raw.strip() for raw in csv.split(","))
        if _INTEGER.fullmatch(part)
    ]


def ints_to_csv(ints: Iterable[int]) -> str:
    """Join integers with commas."""
    return ",".join(str(n) for n in ints)