from __future__ import annotations

from .constants import PROVIDER_RE


def find_provider_starts(content: str) -> list[int]:
    return [m.start() for m in PROVIDER_RE.finditer(content)]


def extract_block(text: str) -> str:
    """Return ``text`` up to and including the brace that closes its first block.

    Depth counting handles nested blocks such as ``default_tags { tags = { ... } }``.
    Unbalanced input is returned whole; callers judge validity by what they find inside.
    """
    depth = 0
    started = False

    for i, ch in enumerate(text):
        if ch == "{":
            started = True
            depth += 1
        elif ch == "}":
            depth -= 1
            if depth == 0 and started:
                return text[: i + 1]

    return text
