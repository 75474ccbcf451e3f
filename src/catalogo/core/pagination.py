"""Paging parameters and the generic page envelope."""

from __future__ import annotations

import math
from typing import Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field, computed_field, field_validator
from pydantic.alias_generators import to_camel

from src.catalogo.runtime.context import get_config

T = TypeVar("T")


class Params(BaseModel):
    """Query parameters of a paged listing.

    ``page_size`` is clamped to the configured maximum rather than rejected,
    and ``search`` is normalized to lower case.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    page_index: int = Field(default=1, ge=1)
    page_size: int = Field(
        default_factory=lambda: get_config().pagination.default_page_size, ge=1
    )
    search: str = ""

    @field_validator("page_size")
    @classmethod
    def _clamp_page_size(cls, value: int) -> int:
        return min(value, get_config().pagination.max_page_size)

    @field_validator("search", mode="before")
    @classmethod
    def _normalize_search(cls, value: str | None) -> str:
        return value.strip().lower() if value else ""


class Pager(BaseModel, Generic[T]):
    """One page of results plus the metadata needed to navigate the rest."""

    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, frozen=True
    )

    page_index: int
    page_size: int
    total_count: int
    total_pages: int
    items: list[T]
    search: str = ""

    @computed_field
    @property
    def has_previous_page(self) -> bool:
        return self.page_index > 1

    @computed_field
    @property
    def has_next_page(self) -> bool:
        return self.page_index < self.total_pages

    @classmethod
    def create(
        cls,
        page_index: int,
        page_size: int,
        total_count: int,
        items: list[T],
        search: str = "",
    ) -> Pager[T]:
        """Build the envelope, deriving ``total_pages`` from the total count.

        ``page_index`` is not clamped: a page past the end simply carries no
        items.
        """
        return cls(
            page_index=page_index,
            page_size=page_size,
            total_count=total_count,
            total_pages=math.ceil(total_count / page_size),
            items=items,
            search=search,
        )
