"""Paging primitives shared by repositories and services.

Page numbers are 1-based. Repositories trust the values they receive;
services normalize caller input through PageRequest.create first.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Generic, Sequence, TypeVar

T = TypeVar("T")
U = TypeVar("U")

DEFAULT_PAGE_NUMBER = 1
DEFAULT_PAGE_SIZE = 10
MAX_PAGE_SIZE = 100


@dataclass(frozen=True)
class PageRequest:
    """A normalized (page_number, page_size) pair."""

    page_number: int = DEFAULT_PAGE_NUMBER
    page_size: int = DEFAULT_PAGE_SIZE

    @classmethod
    def create(
        cls,
        page_number: int | None = None,
        page_size: int | None = None,
    ) -> PageRequest:
        """Build a page request, replacing out-of-range values with defaults.

        Parameters
        ----------
        page_number
            Requested 1-based page. Values below 1 fall back to page 1.
        page_size
            Requested page size. Values outside 1..100 fall back to 10.

        Returns
        -------
        A PageRequest that is always safe to hand to a repository
        """
        if page_number is None or page_number < 1:
            page_number = DEFAULT_PAGE_NUMBER
        if page_size is None or page_size < 1 or page_size > MAX_PAGE_SIZE:
            page_size = DEFAULT_PAGE_SIZE
        return cls(page_number=page_number, page_size=page_size)

    @property
    def offset(self) -> int:
        return (self.page_number - 1) * self.page_size

    @property
    def limit(self) -> int:
        return self.page_size


@dataclass(frozen=True)
class PagedResult(Generic[T]):
    """One page of items plus the totals needed to navigate the rest.

    Attributes
    ----------
    data
        Items on the current page
    total_records
        Number of matching records before paging
    page_number
        1-based number of this page
    page_size
        Maximum number of items per page
    """

    data: Sequence[T]
    total_records: int
    page_number: int
    page_size: int

    @property
    def total_pages(self) -> int:
        if self.page_size <= 0:
            return 0
        return (self.total_records + self.page_size - 1) // self.page_size

    @property
    def has_next_page(self) -> bool:
        return self.page_number < self.total_pages

    @property
    def has_previous_page(self) -> bool:
        return self.page_number > 1

    @classmethod
    def create(
        cls,
        data: Sequence[T],
        total_records: int,
        page: PageRequest,
    ) -> PagedResult[T]:
        return cls(
            data=list(data),
            total_records=total_records,
            page_number=page.page_number,
            page_size=page.page_size,
        )

    def map(self, func: Callable[[T], U]) -> PagedResult[U]:
        """Return the same page with every item transformed by ``func``."""
        return PagedResult(
            data=[func(item) for item in self.data],
            total_records=self.total_records,
            page_number=self.page_number,
            page_size=self.page_size,
        )
