"""Region picker backed by the bundled zone table and saved preferences."""

import logging

from bightwatch.client.storage import REGION_KEY, Preferences
from bightwatch.data.zones import MARINE_REGIONS, REGIONS_BY_CODE, MarineRegion
from bightwatch.guard.whitelist import validate
from bightwatch.models.common import Family
from bightwatch.widgets.base import header

logger = logging.getLogger(__name__)


class LocationSelector:
    title = "Location"

    def __init__(self, preferences: Preferences, regions: list[MarineRegion] | None = None):
        self.preferences = preferences
        self.regions = regions or MARINE_REGIONS
        self.selected: MarineRegion | None = None

    def restore(self) -> MarineRegion | None:
        saved = self.preferences.get(REGION_KEY)
        if saved and validate(saved, Family.REGION):
            self.selected = REGIONS_BY_CODE[saved.upper()]
            logger.info("Restored region %s", self.selected.code)
        return self.selected

    def select(self, code: str) -> MarineRegion:
        if not validate(code, Family.REGION):
            raise ValueError(f"Unknown region: {code}")
        self.selected = REGIONS_BY_CODE[code.upper()]
        self.preferences.set(REGION_KEY, self.selected.code)
        return self.selected

    def clear(self) -> None:
        self.selected = None
        self.preferences.set(REGION_KEY, None)

    def render(self) -> str:
        lines = [header(self.title)]
        for region in self.regions:
            mark = "*" if self.selected and region.code == self.selected.code else " "
            lines.append(f" {mark} {region.code:<7} {region.name} ({len(region.zones)} zones)")
        if self.selected is None:
            lines.append("Select a region...")
        return "\n".join(lines)
