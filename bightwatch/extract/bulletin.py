"""Locate and slice one zone's section out of a multi-zone NOAA text bulletin.

A bulletin is line oriented. A section starts at the first line carrying the
zone identifier and runs up to (not including) the next line that carries
another identifier of the same family, or the `$$` terminator.
"""

import logging
import re

from bightwatch.models.forecast import Section

logger = logging.getLogger(__name__)

TERMINATOR = "$$"

# Next-section markers, one per identifier family.
MARINE_ZONE_MARKER = re.compile(r"(?:PKZ|AKZ)\d{3}")
LAND_ZONE_MARKER = re.compile(r"AKZ\d{3}")
MARINE_ONLY_MARKER = re.compile(r"PKZ\d{3}")

# UGC header continuation: "PKZ011-012-013-191215-" or "AKZ317>319-".
_UGC_CODE = re.compile(r"^([A-Z]{2}Z)(\d{3})$")
_UGC_SUFFIX = re.compile(r"^(\d{3})$")
_UGC_RANGE = re.compile(r"^(?:([A-Z]{2}Z))?(\d{3})>(\d{3})$")
_TIME_LINE = re.compile(r"\b\d{3,4}\s*(?:AM|PM)\b", re.IGNORECASE)


class SectionNotFound(LookupError):
    def __init__(self, identifier: str):
        super().__init__(f"Forecast for zone {identifier} not found")
        self.identifier = identifier


def marker_for(identifier: str) -> re.Pattern:
    """Next-section marker for the bulletin an identifier lives in."""
    if identifier.upper().startswith("AKZ"):
        return LAND_ZONE_MARKER
    return MARINE_ONLY_MARKER


def find_section(
    text: str,
    identifier: str,
    next_marker: re.Pattern = MARINE_ZONE_MARKER,
) -> str | None:
    """Slice the identifier's section, or None when it is absent."""
    if not text or not identifier:
        return None
    lines = text.split("\n")

    start = -1
    for i, line in enumerate(lines):
        if identifier in line:
            start = i
            break
    if start == -1:
        logger.info("Zone %s not found in bulletin", identifier)
        return None

    end = len(lines)
    for i in range(start + 1, len(lines)):
        if next_marker.search(lines[i]) or TERMINATOR in lines[i]:
            end = i
            break

    section = "\n".join(lines[start:end]).strip()
    logger.info("Extracted %s (%d chars)", identifier, len(section))
    return section


def slice_section(
    text: str,
    identifier: str,
    next_marker: re.Pattern = MARINE_ZONE_MARKER,
) -> str:
    section = find_section(text, identifier, next_marker)
    if section is None:
        raise SectionNotFound(identifier)
    return section


def expand_ugc(line: str, marker: re.Pattern = MARINE_ZONE_MARKER) -> list[str]:
    """Zone codes listed on a UGC header line, with shorthand expanded."""
    codes: list[str] = []
    prefix: str | None = None
    for token in line.strip().rstrip("-").split("-"):
        token = token.strip().upper()
        if m := _UGC_CODE.match(token):
            prefix = m.group(1)
            codes.append(token)
        elif (m := _UGC_RANGE.match(token)) and (m.group(1) or prefix):
            prefix = m.group(1) or prefix
            lo, hi = int(m.group(2)), int(m.group(3))
            codes.extend(f"{prefix}{n:03d}" for n in range(lo, hi + 1))
        elif _UGC_SUFFIX.match(token) and prefix:
            codes.append(f"{prefix}{token}")
    return [c for c in codes if marker.fullmatch(c)]


def _is_section_start(line: str, marker: re.Pattern) -> bool:
    stripped = line.strip()
    return (
        stripped.endswith("-")
        and TERMINATOR not in stripped
        and marker.search(stripped) is not None
    )


def split_sections(text: str, marker: re.Pattern = MARINE_ZONE_MARKER) -> list[Section]:
    """Split a bulletin at its UGC header lines (lines ending in '-').

    Each section's name is the line after the header unless that line is a
    time stamp or another header.
    """
    lines = text.split("\n")
    starts = [i for i, line in enumerate(lines) if _is_section_start(line, marker)]

    sections: list[Section] = []
    for n, start in enumerate(starts):
        limit = starts[n + 1] if n + 1 < len(starts) else len(lines)
        end = limit
        for i in range(start + 1, limit):
            if TERMINATOR in lines[i]:
                end = i
                break

        name = ""
        if start + 1 < end:
            candidate = lines[start + 1].strip()
            if (
                candidate
                and not _TIME_LINE.search(candidate)
                and not marker.search(candidate)
            ):
                name = candidate.rstrip("-").strip()

        sections.append(
            Section(
                identifiers=expand_ugc(lines[start], marker),
                name=name,
                text="\n".join(lines[start:end]).strip(),
            )
        )
    return sections


def section_for(
    text: str,
    identifier: str,
    next_marker: re.Pattern = MARINE_ZONE_MARKER,
) -> str:
    """Exact-line slice first, then a UGC header that lists the zone."""
    section = find_section(text, identifier, next_marker)
    if section is not None:
        return section
    for candidate in split_sections(text, next_marker):
        if identifier in candidate.identifiers:
            return candidate.text
    raise SectionNotFound(identifier)
