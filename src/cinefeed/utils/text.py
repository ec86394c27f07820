"""Text normalisation utilities for film titles."""

import re

# Step order matters: each pattern runs on the output of the previous one.
_CLEANUP_STEPS: list[tuple[str, str]] = [
    # Format markers: "Avatar 3D", "Dune IMAX", "Jaws 4K"
    (r"\b(3D|IMAX|4K|2K|2D|HFR|HDR|Dolby|Atmos)\b", ""),
    # Language/subtitle markers: "(Hindi)", "(Telugu, Eng Sub)", "(English Subtitles)"
    (
        r"\([\w\s,'-]*(sub(titled|titles|s)?|dub(bed)?|eng|hindi|telugu|tamil|malayalam"
        r"|kannada|korean|japanese|mandarin|cantonese|spanish|french|german|italian)"
        r"[\w\s,'-]*\)",
        "",
    ),
    # Anniversary: "- 25th Anniversary", "– 50th Anniversary 4K Restoration"
    (r"[-–—]\s*\d+\s*(st|nd|rd|th)?\s*anniversary.*$", ""),
    # Restoration/remaster at the end
    (r"[-–—]?\s*(\d+K\s*)?(digital\s*)?(restoration|remaster(ed)?|re-?release).*$", ""),
    # Special screenings: "- Preview", "– Special Event", "- Encore"
    (r"[-–—]\s*(preview|special|encore|screening|event|limited).*$", ""),
    # Live broadcasts: "Hamlet - NT Live", "Tosca: Met Opera"
    (r"\s*[-:]\s*(NT Live|Met Opera|National Theatre Live).*$", ""),
    # Retro/classic markers
    (r"\s*[-–—]\s*(RETRO CLASSIX|CLASSIC|RETRO)$", ""),
    # Year in parentheses at the end: "(1984)", "(2024 film)"
    (r"\s*\(\d{4}(\s+film)?\)\s*$", ""),
    # Brackets at the end: "[Restored]", "[M]"
    (r"\s*\[.*?\]\s*$", ""),
    # "Housemaid, The" → "Housemaid" ("The" goes back on the front below)
    (r",\s*The$", ""),
]

_TRAILING_ARTICLE = re.compile(r",\s*The$", re.IGNORECASE)


def canonicalise_title(title: str) -> str:
    """
    Clean a cinema's film title into a TMDb search query.

    Strips format tags, language annotations, anniversary/restoration and
    special-screening qualifiers, live-broadcast brands, trailing years and
    bracketed notes, and moves a trailing ", The" to the front. The result is
    only used for lookups; the raw title is what gets displayed.

    This is a single best-effort pass, not a grammar: titles with several
    stacked qualifiers may not be fully cleaned.

    Examples:
        "Housemaid, The" → "The Housemaid"
        "Jaws 3D - 50th Anniversary Restoration" → "Jaws"
        "Akira (1988)" → "Akira"

    Args:
        title: Raw film title from a cinema website

    Returns:
        Title suitable for a TMDb search
    """
    clean = title
    for pattern, replacement in _CLEANUP_STEPS:
        clean = re.sub(pattern, replacement, clean, flags=re.IGNORECASE)

    clean = re.sub(r"\s+", " ", clean)
    clean = re.sub(r"[-–—:]\s*$", "", clean)
    clean = clean.strip()

    if _TRAILING_ARTICLE.search(title.strip()):
        clean = f"The {clean}"

    return clean


def slugify(text: str) -> str:
    """
    Convert text to a URL slug.

    Runs of anything other than lowercase letters and digits become a single
    hyphen: "Mad Max: Fury Road" → "mad-max-fury-road".
    """
    text = text.lower()
    text = re.sub(r"[^a-z0-9]+", "-", text)
    return text.strip("-")
