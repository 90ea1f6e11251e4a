"""Tests for doctor search, filters and pagination."""
import pytest

from core.pagination import page_window, paginate
from doctors.listing import build_listing, filter_doctors

DOCTORS = [
    {"id": "1", "name": "Dr. Alice Smith", "specialty": "Cardiology", "location": "East Wing"},
    {"id": "2", "name": "Dr. Bob Jones", "specialty": "Neurology", "location": "Main Clinic"},
    {"id": "3", "name": "Dr. Carol White", "specialty": "Cardiology", "location": "Main Clinic"},
    {"id": "4", "name": "Dr. Dan Brown", "specialty": "Pediatrics", "location": "West Wing"},
]


class TestFilterDoctors:
    def test_no_filters_keeps_everything(self):
        assert filter_doctors(DOCTORS) == DOCTORS

    def test_query_is_case_insensitive_over_name_specialty_location(self):
        assert [d["id"] for d in filter_doctors(DOCTORS, query="SMITH")] == ["1"]
        assert [d["id"] for d in filter_doctors(DOCTORS, query="neuro")] == ["2"]
        assert [d["id"] for d in filter_doctors(DOCTORS, query="west")] == ["4"]

    def test_blank_query_matches_all(self):
        assert len(filter_doctors(DOCTORS, query="   ")) == 4

    def test_specialty_and_location_combine(self):
        result = filter_doctors(DOCTORS, specialty="Cardiology", location="Main Clinic")

        assert [d["id"] for d in result] == ["3"]

    def test_missing_fields_do_not_break_search(self):
        assert filter_doctors([{"id": "9", "name": None}], query="x") == []


class TestPagination:
    @pytest.mark.parametrize("current,total,expected", [
        (1, 1, [1]),
        (2, 4, [1, 2, 3, 4]),
        (1, 10, [1, 2, None, 10]),
        (5, 10, [1, None, 4, 5, 6, None, 10]),
        (10, 10, [1, None, 9, 10]),
    ])
    def test_page_window(self, current, total, expected):
        assert page_window(current, total) == expected

    def test_empty_result_still_has_one_page(self):
        page, numbers = paginate([], 1, 6)

        assert page.number == 1
        assert list(page.object_list) == []
        assert numbers == [1]

    @pytest.mark.parametrize("requested,expected", [("abc", 1), (0, 2), (99, 2), ("2", 2)])
    def test_bad_page_numbers_clamp(self, requested, expected):
        page, _ = paginate(list(range(10)), requested, 6)

        assert page.number == expected


class TestBuildListing:
    def test_filters_then_paginates(self):
        listing = build_listing(DOCTORS, query="dr", specialty="", location="", page=2, per_page=3)

        assert listing["total"] == 4
        assert [d["id"] for d in listing["doctors"]] == ["4"]
        assert listing["page"].number == 2
        assert listing["page_numbers"] == [1, 2]

    def test_filter_shrinks_page_count(self):
        listing = build_listing(DOCTORS, query="", specialty="Cardiology", location="", page=5, per_page=3)

        assert listing["page"].number == 1
        assert [d["id"] for d in listing["doctors"]] == ["1", "3"]
