"""Area Forecast Discussion (AFD) parsing."""

import re

from bightwatch.models.forecast import Discussion, DiscussionSection

NO_DISCUSSION = "No forecast discussion available"

_AUTHOR_RE = re.compile(r"^[A-Z]{2,5}$")


def _is_issued_line(line: str) -> bool:
    return "ISSUED" in line or (("AM" in line or "PM" in line) and "AK" in line)


def _is_author_line(line: str) -> bool:
    return "FORECASTER" in line or (len(line) < 20 and _AUTHOR_RE.match(line) is not None)


def parse_discussion(text: str) -> Discussion:
    """Split an AFD into its `.TITLE...` sections, issue line and forecaster.

    The last issued/author line seen wins. Text before the first section
    becomes a single "Forecast Discussion" section when no headed sections
    exist.
    """
    if not text or not text.strip():
        return Discussion(text=NO_DISCUSSION, issued_time=None, author=None)

    issued: str | None = None
    author: str | None = None
    sections: list[DiscussionSection] = []
    title: str | None = None
    content: list[str] = []
    loose: list[str] = []

    for raw in text.split("\n"):
        line = raw.strip()
        if not line or "$$" in line or "===" in line:
            continue
        if _is_issued_line(line):
            issued = line
            continue
        if _is_author_line(line):
            author = line
            continue
        if line.startswith(".") and "..." in line:
            if title is not None:
                sections.append(DiscussionSection(title, " ".join(content)))
            head, _, rest = line[1:].partition("...")
            title = head.strip()
            content = [rest.strip()] if rest.strip() else []
            continue
        if title is not None:
            content.append(line)
        else:
            loose.append(line)

    if title is not None:
        sections.append(DiscussionSection(title, " ".join(content)))
    if not sections and loose:
        sections.append(DiscussionSection("Forecast Discussion", " ".join(loose)))

    return Discussion(
        text=format_discussion(issued, sections, author) or NO_DISCUSSION,
        issued_time=issued,
        author=author,
        sections=sections,
    )


def format_discussion(
    issued: str | None,
    sections: list[DiscussionSection],
    author: str | None,
) -> str:
    out = ""
    if issued:
        out += f"{issued}\n\n"
    for section in sections:
        out += f"{section.title.upper()}\n{section.content}\n\n"
    if author:
        out += f"Forecaster: {author}"
    return out.strip()
