from __future__ import annotations

from collections.abc import Iterable, Sequence

from .constants import REQUIRED_TAGS, TAG_KEY_RE


def extract_tags(tag_block: str) -> list[str]:
    # Duplicates are kept; only presence matters downstream.
    return [m.group(1) for m in TAG_KEY_RE.finditer(tag_block)]


def find_missing_tags(found_tags: Iterable[str], required: Sequence[str] = REQUIRED_TAGS) -> list[str]:
    present = set(found_tags)
    return [tag for tag in required if tag not in present]
