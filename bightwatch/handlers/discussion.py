"""Area Forecast Discussion proxy for the three Alaska forecast offices."""

from bightwatch.data.stations import OFFICES
from bightwatch.extract.discussion import parse_discussion
from bightwatch.extract.zone_text import product_text
from bightwatch.handlers.alerts import PRODUCT_URL, product_params
from bightwatch.handlers.base import ProxyHandler
from bightwatch.models.common import Family, utc_now_iso
from bightwatch.models.proxy import ProxyRequest


class ForecastDiscussionHandler(ProxyHandler):
    name = "forecast-discussion"
    family = Family.OFFICE
    identifier_source = "query"
    query_param = "office"
    default_identifier = "AJK"
    invalid_error = "Invalid office parameter"
    invalid_message = "Office must be one of: " + ", ".join(OFFICES)
    failure_message = "Unable to fetch forecast discussion data"

    async def fetch(self, identifier: str | None, request: ProxyRequest) -> dict:
        assert identifier is not None
        office = OFFICES[identifier]
        page = await self.fetcher.fetch_text(
            PRODUCT_URL,
            params=product_params("AFD", office=identifier),
            headers={"Accept": "text/plain"},
        )
        discussion = parse_discussion(product_text(page))
        return {
            "properties": {
                "updated": utc_now_iso(),
                "office": identifier,
                "officeName": office["full_name"],
                "product": "AFD",
                "productName": "Area Forecast Discussion",
                "text": discussion.text,
                "issuedTime": discussion.issued_time,
                "author": discussion.author,
                "sections": [
                    {"title": s.title, "content": s.content} for s in discussion.sections
                ],
                "region": office["region"],
            }
        }
