"""Tests for paging parameters and the page envelope."""

import math

import pytest
from pydantic import ValidationError

from src.catalogo.core.pagination import Pager, Params
from src.catalogo.runtime.config.config_data import ConfigData, PaginationConfig
from src.catalogo.runtime.context import with_context


class TestParams:
    def test_defaults_come_from_config(self):
        override = ConfigData(pagination=PaginationConfig(default_page_size=7, max_page_size=20))
        with with_context(override):
            params = Params()

        assert params.page_index == 1
        assert params.page_size == 7
        assert params.search == ""

    def test_page_size_is_clamped_to_maximum(self):
        override = ConfigData(pagination=PaginationConfig(default_page_size=5, max_page_size=20))
        with with_context(override):
            params = Params(page_size=500)
        assert params.page_size == 20

    def test_search_is_normalized(self):
        params = Params(search="  LeChE ")
        assert params.search == "leche"

    def test_none_search_becomes_empty(self):
        assert Params(search=None).search == ""

    def test_camel_case_aliases(self):
        params = Params.model_validate({"pageIndex": 3, "pageSize": 4, "search": "x"})
        assert (params.page_index, params.page_size) == (3, 4)

    @pytest.mark.parametrize("field", ["page_index", "page_size"])
    def test_rejects_values_below_one(self, field):
        with pytest.raises(ValidationError):
            Params(**{field: 0})


class TestPager:
    @pytest.mark.parametrize(
        "total_count,page_size",
        [(0, 5), (1, 5), (5, 5), (6, 5), (49, 10), (50, 10), (51, 10)],
    )
    def test_total_pages_is_ceiling_division(self, total_count, page_size):
        pager = Pager[int].create(
            page_index=1, page_size=page_size, total_count=total_count, items=[]
        )
        assert pager.total_pages == math.ceil(total_count / page_size)

    def test_page_beyond_last_is_not_clamped(self):
        pager = Pager[str].create(
            page_index=9, page_size=5, total_count=12, items=[], search="le"
        )

        assert pager.page_index == 9
        assert pager.items == []
        assert pager.total_count == 12
        assert pager.total_pages == 3
        assert pager.has_previous_page
        assert not pager.has_next_page

    def test_navigation_flags(self):
        first = Pager[int].create(page_index=1, page_size=2, total_count=5, items=[1, 2])
        middle = Pager[int].create(page_index=2, page_size=2, total_count=5, items=[3, 4])

        assert not first.has_previous_page and first.has_next_page
        assert middle.has_previous_page and middle.has_next_page

    def test_envelope_is_immutable(self):
        pager = Pager[int].create(page_index=1, page_size=2, total_count=1, items=[1])
        with pytest.raises(ValidationError):
            pager.page_index = 2

    def test_serializes_with_camel_case_keys(self):
        pager = Pager[int].create(
            page_index=1, page_size=2, total_count=3, items=[1, 2], search="pan"
        )
        data = pager.model_dump(by_alias=True)

        assert data["pageIndex"] == 1
        assert data["pageSize"] == 2
        assert data["totalCount"] == 3
        assert data["totalPages"] == 2
        assert data["items"] == [1, 2]
        assert data["search"] == "pan"
