"""
Parser for pasted decklists.

Accepted line formats:
    1 Sol Ring
    2x Arcane Signet
    1 - Command Tower

Works with text copied from Moxfield, TappedOut, Archidekt or plain notes.
Comment lines (// or #) and section headers mentioning "commander" or
"sideboard" are skipped. Lines without a leading quantity are ignored.
"""

import re

from deckkeeper.models.card import ParsedLine

# Pattern: "2x Arcane Signet", "1 - Command Tower", "1 Sol Ring"
# Groups: (quantity, card_name)
DECKLIST_LINE_PATTERN = re.compile(r"^(\d+)\s*x?\s*-?\s*(.+)$")

COMMENT_PREFIXES = ("//", "#")

# Any line containing one of these words is treated as a section header.
# Note this also drops cards named with them (e.g. "Commander's Sphere").
SECTION_KEYWORDS = ("commander", "sideboard")


def _is_skipped(line: str) -> bool:
    if line.startswith(COMMENT_PREFIXES):
        return True
    lowered = line.lower()
    return any(keyword in lowered for keyword in SECTION_KEYWORDS)


def parse_decklist_line(line: str) -> ParsedLine | None:
    """
    Parse a single decklist line.

    Args:
        line: One line of pasted text

    Returns:
        ParsedLine, or None if the line is blank, a comment, a section
        header or has no positive leading quantity
    """
    line = line.strip()
    if not line or _is_skipped(line):
        return None

    match = DECKLIST_LINE_PATTERN.match(line)
    if not match:
        return None

    quantity_text, name = match.groups()
    quantity = int(quantity_text)
    name = name.strip()
    if not name or quantity <= 0:
        return None

    return ParsedLine(name=name, quantity=quantity)


def parse_decklist(text: str) -> list[ParsedLine]:
    """
    Parse pasted decklist text into card lines.

    Args:
        text: Raw multi-line text

    Returns:
        ParsedLine objects in input order. Empty list if nothing matched;
        unparseable lines never raise.
    """
    if not text or not text.strip():
        return []

    parsed: list[ParsedLine] = []
    for line in text.splitlines():
        entry = parse_decklist_line(line)
        if entry is not None:
            parsed.append(entry)
    return parsed
