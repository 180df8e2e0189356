"""Plain-text reflowing of forecast and discussion prose."""

import re

_TAG_RE = re.compile(r"<[^>]*>")


def collapse_whitespace(text: str) -> str:
    return re.sub(r"\s+", " ", text or "").strip()


def sentence_paragraphs(text: str) -> str:
    """One sentence per paragraph, each ending in a full stop."""
    if not text:
        return "No forecast available"
    cleaned = collapse_whitespace(_TAG_RE.sub("", text))
    sentences = [s.strip() for s in re.split(r"\.\s+", cleaned)]
    return "\n\n".join(
        s if s.endswith(".") else s + "."
        for s in sentences
        if s
    )


def paragraphs(text: str) -> list[str]:
    """Blank-line separated paragraphs with inner line breaks joined."""
    return [
        collapse_whitespace(block)
        for block in re.split(r"\n\s*\n", text or "")
        if block.strip()
    ]


def wrap(text: str, width: int = 72, indent: str = "") -> str:
    words = collapse_whitespace(text).split(" ")
    lines: list[str] = []
    current = ""
    for word in words:
        if current and len(current) + 1 + len(word) > width:
            lines.append(indent + current)
            current = word
        else:
            current = f"{current} {word}" if current else word
    if current:
        lines.append(indent + current)
    return "\n".join(lines)
