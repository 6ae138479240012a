"""
Tests for timezone to region resolution.
"""

import pytest

from browser_broker.regions import DEFAULT_REGION, TIMEZONE_REGION_MAP, Region, resolve_region


class TestRegion:

    def test_enumeration_order(self):
        """Selection order is west, east, europe, asia-pacific."""
        assert [r.value for r in Region] == [
            "us-west-2",
            "us-east-1",
            "eu-central-1",
            "ap-southeast-1",
        ]

    def test_default_region_is_us_west(self):
        assert DEFAULT_REGION is Region.US_WEST_2

    def test_region_compares_equal_to_its_value(self):
        assert Region("eu-central-1") is Region.EU_CENTRAL_1
        assert Region.EU_CENTRAL_1 == "eu-central-1"


class TestResolveRegion:

    @pytest.mark.parametrize("abbr,expected", [
        ("PST", Region.US_WEST_2),
        ("PDT", Region.US_WEST_2),
        ("MST", Region.US_WEST_2),
        ("EST", Region.US_EAST_1),
        ("CDT", Region.US_EAST_1),
        ("GMT", Region.EU_CENTRAL_1),
        ("CEST", Region.EU_CENTRAL_1),
        ("WEST", Region.EU_CENTRAL_1),
        ("JST", Region.AP_SOUTHEAST_1),
        ("IST", Region.AP_SOUTHEAST_1),
        ("NZDT", Region.AP_SOUTHEAST_1),
    ])
    def test_known_abbreviations(self, abbr, expected):
        assert resolve_region(abbr) is expected

    def test_every_mapped_abbreviation_is_deterministic(self):
        for abbr, region in TIMEZONE_REGION_MAP.items():
            assert resolve_region(abbr) is region
            assert resolve_region(abbr) is resolve_region(abbr)

    def test_lowercase_is_normalized(self):
        assert resolve_region("jst") is Region.AP_SOUTHEAST_1
        assert resolve_region("Cet") is Region.EU_CENTRAL_1

    def test_padded_abbreviation_is_not_a_match(self):
        """Only case is normalized; surrounding whitespace is part of the key."""
        assert resolve_region(" EST ") is DEFAULT_REGION
        assert resolve_region("EST ") is DEFAULT_REGION

    @pytest.mark.parametrize("abbr", [None, "", "XYZ", "UTC", "America/New_York", "P S T"])
    def test_absent_or_unknown_falls_back_to_default(self, abbr):
        assert resolve_region(abbr) is DEFAULT_REGION

    @pytest.mark.parametrize("value", [42, 3.5, ["PST"], {"tz": "JST"}, object()])
    def test_malformed_input_never_raises(self, value):
        assert resolve_region(value) is DEFAULT_REGION
