"""Tests for landing/rendering/compat.py"""

from landing.rendering.compat import (
    build_compatibility_row,
    build_vehicle_compat,
    describe_compatibility,
    vehicle_parts,
    year_range,
)


class TestVehicleParts:
    def test_missing_levels_are_empty_dicts(self):
        assert vehicle_parts({}) == ({}, {}, {})
        assert vehicle_parts(None) == ({}, {}, {})
        assert vehicle_parts({"vehicleGeneration": "bad"}) == ({}, {}, {})


class TestYearRange:
    def test_closed_range(self):
        assert year_range({"yearStart": 2012, "yearEnd": 2014}, 2025) == (2012, 2014, False)

    def test_open_range_runs_to_current_year(self):
        assert year_range({"yearStart": 2020}, 2025) == (2020, 2025, True)

    def test_missing_start_uses_current_year(self):
        assert year_range({}, 2025) == (2025, 2025, True)

    def test_end_before_start_clamped(self):
        assert year_range({"yearStart": 2015, "yearEnd": 2010}, 2025) == (2015, 2015, False)


class TestBuildCompatibilityRow:
    def test_full_row(self, full_product):
        row = build_compatibility_row(full_product["compatibilities"][0], 2025)
        assert (row.brand, row.model, row.generation, row.location) == ("Peugeot", "208", "I", "Motor")
        assert (row.year_start, row.year_end) == (2012, 2014)
        assert row.year_end_label == "2014"

    def test_open_ended_label(self, full_product):
        row = build_compatibility_row(full_product["compatibilities"][1], 2025)
        assert row.year_end == 2025
        assert row.year_end_label == "Actual"

    def test_missing_names(self):
        row = build_compatibility_row({}, 2025)
        assert (row.brand, row.model, row.generation, row.location) == ("N/D", "N/D", "N/D", "N/D")


class TestVehicleCompat:
    def test_to_dict_short_keys(self, full_product):
        compat = build_vehicle_compat(full_product["compatibilities"][1], 2025)
        assert compat.to_dict() == {"b": "Fiat", "m": "Cronos", "ys": 2023, "ye": 2025}


class TestDescribeCompatibility:
    def test_closed(self, full_product):
        assert describe_compatibility(full_product["compatibilities"][0], 2025) == "Peugeot 208 I 2012-2014"

    def test_open(self, full_product):
        assert describe_compatibility(full_product["compatibilities"][1], 2025) == "Fiat Cronos II 2023-Actual"

    def test_missing_names_skipped(self):
        assert describe_compatibility({"vehicleGeneration": {"yearStart": 2001, "yearEnd": 2003}}, 2025) == "2001-2003"
