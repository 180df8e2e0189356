"""Tests for closed-set identifier validation."""

import pytest

from bightwatch.data.stations import reset_tide_stations
from bightwatch.guard.whitelist import allowed_set, validate
from bightwatch.models.common import Family


@pytest.fixture(autouse=True)
def _fresh_tide_stations():
    reset_tide_stations()
    yield
    reset_tide_stations()


class TestValidate:
    @pytest.mark.parametrize(
        "identifier,family",
        [
            ("PKZ012", Family.MARINE_ZONE),
            ("pkz012", Family.MARINE_ZONE),
            ("AKZ317", Family.MARINE_ZONE),
            ("akz332", Family.LAND_ZONE),
            ("9452210", Family.TIDE_STATION),
            ("act6151", Family.CURRENT_STATION),
            ("46083", Family.BUOY_STATION),
            ("ajk", Family.OFFICE),
            ("sps", Family.WARNING_TYPE),
            ("cwfajk", Family.REGION),
        ],
    )
    def test_whitelisted_any_case(self, identifier: str, family: Family):
        assert validate(identifier, family) is True

    @pytest.mark.parametrize(
        "identifier,family",
        [
            ("AKZ999", Family.MARINE_ZONE),
            ("akz999", Family.LAND_ZONE),
            ("PKZ012", Family.LAND_ZONE),
            ("9414290", Family.TIDE_STATION),  # San Francisco, not Alaska
            ("ACT0000", Family.CURRENT_STATION),
            ("OFFICE", Family.OFFICE),
            ("XYZ", Family.WARNING_TYPE),
        ],
    )
    def test_unknown_rejected(self, identifier: str, family: Family):
        assert validate(identifier, family) is False

    @pytest.mark.parametrize("bad", [None, "", 42, ["PKZ012"]])
    def test_non_string_rejected(self, bad):
        assert validate(bad, Family.MARINE_ZONE) is False


class TestAllowedSet:
    def test_marine_includes_coastal(self):
        marine = allowed_set(Family.MARINE_ZONE)
        assert allowed_set(Family.LAND_ZONE) <= marine

    def test_tide_stations_from_dataset(self):
        stations = allowed_set(Family.TIDE_STATION)
        assert "9452210" in stations
        assert "9447130" not in stations  # Seattle

    def test_offices(self):
        assert allowed_set(Family.OFFICE) == frozenset({"AJK", "AFC", "AFG"})
