"""Area Forecast Discussion widget."""

from typing import Any

from bightwatch.extract.discussion import NO_DISCUSSION
from bightwatch.extract.formatting import paragraphs, wrap
from bightwatch.widgets.base import Widget, header


class Discussion(Widget):
    function = "forecast-discussion"
    title = "Forecast Discussion"

    def fetch(self, office: str = "AJK") -> Any:  # type: ignore[override]
        return self.get(self.url(office=office))

    def render(self, data: Any) -> str:
        props = data.get("properties", {})
        lines = [header(f"{self.title}: {props.get('officeName', props.get('office', ''))}")]
        if props.get("issuedTime"):
            lines.append(props["issuedTime"])
        sections = props.get("sections") or []
        if not sections:
            lines.append(NO_DISCUSSION)
        for s in sections:
            lines.append("")
            lines.append(s["title"].upper())
            for para in paragraphs(s["content"]):
                lines.append(wrap(para))
        if props.get("author"):
            lines.append("")
            lines.append(f"Forecaster: {props['author']}")
        return "\n".join(lines)
