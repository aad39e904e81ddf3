"""Parsers for the compact string fields used by the static tables.

Formats:
  - pipe lists:   ``"a|b|c"`` (a JSON array of strings is accepted too)
  - params:       ``"key=value;key2=3"`` or a JSON object
  - stacks:       ``"item_id_qty|other_item_qty"`` where the id may contain
                  underscores; the quantity follows the *last* underscore

Malformed entries are skipped or defaulted, never raised.
"""

from __future__ import annotations

import json
import logging
from typing import Iterable, Union

from wasteland.core.models import ItemStack

logger = logging.getLogger(__name__)

ParamValue = Union[str, int, float]


def split_pipe(raw: str | Iterable[str] | None) -> list[str]:
    """Split a pipe-delimited field into trimmed, non-empty tokens."""
    if not raw:
        return []
    parts = raw.split("|") if isinstance(raw, str) else raw
    return [str(p).strip() for p in parts if str(p).strip()]


def _coerce(value: str) -> ParamValue:
    try:
        return int(value)
    except ValueError:
        pass
    try:
        return float(value)
    except ValueError:
        return value


def parse_params(raw: str | None) -> dict[str, ParamValue]:
    """Parse ``key=value;key=value`` (or a JSON object) into a dict.

    Numeric values are converted to int/float; anything else stays a string.
    """
    if not raw:
        return {}
    text = raw.strip()
    if text.startswith("{"):
        try:
            loaded = json.loads(text)
        except json.JSONDecodeError:
            logger.debug("Unparseable JSON params %r, falling back to key=value", raw)
        else:
            if isinstance(loaded, dict):
                return loaded

    result: dict[str, ParamValue] = {}
    for pair in text.split(";"):
        key, _, value = pair.partition("=")
        key = key.strip()
        if not key:
            continue
        value = value.strip()
        result[key] = _coerce(value) if value else ""
    return result


def parse_stacks(raw: str | Iterable[str] | None) -> list[ItemStack]:
    """Parse ``id_qty|id_qty`` into stacks, splitting each pair at its last underscore.

    A pair without an underscore is the whole id with quantity 1; a malformed
    or zero quantity also defaults to 1. Negative quantities are kept (they
    are deduction requests). Entries with an empty id are skipped.
    """
    stacks: list[ItemStack] = []
    for entry in split_pipe(raw):
        item_id, sep, qty_str = entry.rpartition("_")
        if not sep:
            stacks.append(ItemStack(entry, 1))
            continue
        if not item_id:
            logger.debug("Stack entry %r has no item id, skipped", entry)
            continue
        try:
            quantity = int(qty_str)
        except ValueError:
            logger.debug("Malformed quantity in stack entry %r, defaulting to 1", entry)
            quantity = 1
        stacks.append(ItemStack(item_id, quantity or 1))
    return stacks


def format_stacks(stacks: Iterable[ItemStack]) -> str:
    """Inverse of :func:`parse_stacks`."""
    return "|".join(f"{s.item_id}_{s.quantity}" for s in stacks)


def merge_stacks(*groups: Iterable[ItemStack]) -> list[ItemStack]:
    """Merge stacks with the same id (first-seen order), dropping empty ones."""
    merged: dict[str, ItemStack] = {}
    for group in groups:
        for stack in group:
            existing = merged.get(stack.item_id)
            if existing is None:
                merged[stack.item_id] = stack.copy()
            else:
                existing.quantity += stack.quantity
    return [s for s in merged.values() if s.quantity > 0]
