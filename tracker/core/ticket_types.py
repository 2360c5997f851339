"""Ticket label/status enumerations and the JSON text form of label sets."""

from __future__ import annotations

import json
from enum import Enum
from typing import Iterable


class Label(str, Enum):
    FEATURE = "Feature"
    BUG = "Bug"
    WONT_FIX = "WontFix"
    DONE = "Done"
    IN_PROGRESS = "InProgress"


class Status(str, Enum):
    OPEN = "Open"
    CLOSED = "Closed"


def normalize_labels(labels: Iterable[Label | str] | None) -> list[Label]:
    """Deduplicate labels and return them in declaration order."""

    chosen = {Label(label) for label in labels or ()}
    return [label for label in Label if label in chosen]


def encode_labels(labels: Iterable[Label | str] | None) -> str:
    # SQLite has no array type, so the set lives in a TEXT column.
    return json.dumps([label.value for label in normalize_labels(labels)])


def decode_labels(raw: str | None) -> list[Label]:
    if not raw:
        return []
    try:
        decoded = json.loads(raw)
    except (TypeError, json.JSONDecodeError):
        return []
    if not isinstance(decoded, list):
        return []
    known = {label.value for label in Label}
    return normalize_labels(item for item in decoded if isinstance(item, str) and item in known)


__all__ = [
    "Label",
    "Status",
    "decode_labels",
    "encode_labels",
    "normalize_labels",
]
