"""Badge -> avatar slot resolution.

A student's badges unlock display slots. Each badge id maps to a set of slot
ids; the unlocked slots are the union over all badges held. Badges without a
rule are ignored.

Teachers may store their own table (`slotRules`). When present it replaces
the default table entirely; the two are never merged.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence
from typing import Literal

from avatarapi.models import ConfigurationRecord

RuleSource = Literal["default", "custom"]

DEFAULT_SLOT_RULES: dict[str, tuple[str, ...]] = {
    "1": ("A",),
    "2": ("B",),
    "3": ("C",),
    "4": ("D",),
    "5": ("E",),
    "6": ("F",),
}


def parse_badge_ids(raw: str | None) -> list[str]:
    """Split a comma-separated badge list, dropping blanks.

    Example:
        >>> parse_badge_ids(" 1, 3,,5 ")
        ['1', '3', '5']
    """
    if not raw:
        return []
    return [part.strip() for part in raw.split(",") if part.strip()]


def resolve_slots(
    badge_ids: Iterable[str],
    rules: Mapping[str, Sequence[str]],
) -> list[str]:
    """Compute the slots unlocked by a set of badges.

    Args:
        badge_ids: Badge identifiers held by the student
        rules: Badge id -> slot ids table

    Returns:
        Unlocked slot ids without duplicates, in first-encountered order.
        As a set the result does not depend on the order of `badge_ids`.
    """
    unlocked: dict[str, None] = {}
    for badge_id in badge_ids:
        badge_id = badge_id.strip()
        if not badge_id:
            continue
        for slot in rules.get(badge_id, ()):
            unlocked.setdefault(slot, None)
    return list(unlocked)


def select_rules(
    record: ConfigurationRecord | None,
) -> tuple[Mapping[str, Sequence[str]], RuleSource]:
    """Pick the teacher's own table if they stored one, else the default."""
    if record is not None and record.slot_rules is not None:
        return record.slot_rules, "custom"
    return DEFAULT_SLOT_RULES, "default"


def default_rules_document() -> dict[str, list[str]]:
    """Default table in its JSON shape."""
    return {badge: list(slots) for badge, slots in DEFAULT_SLOT_RULES.items()}
