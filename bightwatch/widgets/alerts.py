"""Marine alerts widget, most severe first."""

from typing import Any

from bightwatch.extract.alerts import sort_by_severity
from bightwatch.extract.formatting import wrap
from bightwatch.widgets.base import Widget, header

MAX_ALERT_CHARS = 400


class Alerts(Widget):
    function = "marine-alerts"
    title = "Marine Alerts"
    cache_ttl_minutes = 5

    def render(self, data: Any) -> str:
        lines = [header(self.title)]
        alerts = sort_by_severity(data.get("alerts") or [])
        if not alerts:
            lines.append("No active marine alerts.")
        for a in alerts:
            lines.append("")
            lines.append(f"[{a.get('severity', 'low').upper()}] {a.get('type')} ({a.get('source')})")
            if a.get("effectiveTime"):
                span = a["effectiveTime"]
                if a.get("expirationTime"):
                    span += f" - {a['expirationTime']}"
                lines.append(f"  {span}")
            lines.append(wrap(a.get("text", "")[:MAX_ALERT_CHARS], indent="  "))
        failed = [s["source"] for s in data.get("sources") or [] if s.get("status") == "error"]
        if failed:
            lines.append("")
            lines.append(f"Unavailable sources: {', '.join(failed)}")
        return "\n".join(lines)
