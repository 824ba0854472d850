"""Unit tests for PageRequest and PagedResult."""

import pytest

from snapdi.domain.shared.pagination import PagedResult, PageRequest


class TestPageRequest:
    def test_defaults(self):
        page = PageRequest.create()

        assert page.page_number == 1
        assert page.page_size == 10

    @pytest.mark.parametrize("page_number", [0, -1, None])
    def test_invalid_page_number_falls_back_to_first_page(self, page_number):
        assert PageRequest.create(page_number, 20).page_number == 1

    @pytest.mark.parametrize("page_size", [0, -5, 101, None])
    def test_invalid_page_size_falls_back_to_default(self, page_size):
        assert PageRequest.create(2, page_size).page_size == 10

    def test_max_page_size_accepted(self):
        assert PageRequest.create(1, 100).page_size == 100

    def test_offset_and_limit(self):
        page = PageRequest.create(3, 10)

        assert page.offset == 20
        assert page.limit == 10


class TestPagedResult:
    """25 records in pages of 10."""

    def _page(self, page_number: int) -> PagedResult[int]:
        return PagedResult.create(
            list(range(10)),
            total_records=25,
            page=PageRequest.create(page_number, 10),
        )

    def test_total_pages(self):
        assert self._page(1).total_pages == 3

    def test_first_page(self):
        page = self._page(1)

        assert not page.has_previous_page
        assert page.has_next_page

    def test_middle_page(self):
        page = self._page(2)

        assert page.has_previous_page
        assert page.has_next_page

    def test_last_page(self):
        page = self._page(3)

        assert page.has_previous_page
        assert not page.has_next_page

    def test_empty_result(self):
        page = PagedResult.create([], 0, PageRequest.create())

        assert page.total_pages == 0
        assert not page.has_next_page
        assert not page.has_previous_page

    def test_exact_multiple(self):
        page = PagedResult.create([], 30, PageRequest.create(3, 10))

        assert page.total_pages == 3
        assert not page.has_next_page

    def test_map_keeps_metadata(self):
        page = self._page(2).map(str)

        assert page.data[0] == "0"
        assert page.total_records == 25
        assert page.page_number == 2
