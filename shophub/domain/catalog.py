# shophub/domain/catalog.py
"""
Typowane parametry zapytan katalogu. Sortowanie i filtry sa enumami /
polami, wiec do SQL nie trafia zaden tekst od klienta.
"""
import math
from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum
from typing import Optional

from shophub.domain.errors import ValidationFailed
from shophub.utils.settings import DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE


class SortField(str, Enum):
    NAME = "name"
    PRICE = "price"
    RATING = "rating"


class SortOrder(str, Enum):
    ASC = "asc"
    DESC = "desc"


@dataclass(frozen=True)
class Page:
    page: int = 1
    page_size: int = DEFAULT_PAGE_SIZE

    def __post_init__(self):
        if self.page < 1:
            raise ValidationFailed("Page must be at least 1", [{"field": "page", "msg": "must be >= 1"}])
        if not 1 <= self.page_size <= MAX_PAGE_SIZE:
            raise ValidationFailed(
                f"Page size must be between 1 and {MAX_PAGE_SIZE}",
                [{"field": "page_size", "msg": f"must be between 1 and {MAX_PAGE_SIZE}"}],
            )

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.page_size

    @property
    def limit(self) -> int:
        return self.page_size

    def describe(self, total: int, noun: str) -> dict:
        total_pages = math.ceil(total / self.page_size) if total else 0
        return {
            "current_page": self.page,
            "total_pages": total_pages,
            f"total_{noun}": total,
            f"{noun}_per_page": self.page_size,
            "has_next": self.page < total_pages,
            "has_prev": self.page > 1,
        }


@dataclass(frozen=True)
class ProductQuery:
    category_slug: Optional[str] = None
    min_price: Optional[Decimal] = None
    max_price: Optional[Decimal] = None
    search: Optional[str] = None
    sort_by: SortField = SortField.NAME
    sort_order: SortOrder = SortOrder.ASC
    page: Page = field(default_factory=Page)

    def __post_init__(self):
        if (
            self.min_price is not None
            and self.max_price is not None
            and self.min_price > self.max_price
        ):
            raise ValidationFailed(
                "min_price cannot be greater than max_price",
                [{"field": "min_price", "msg": "must be <= max_price"}],
            )

    def filters(self) -> dict:
        return {
            "category": self.category_slug,
            "min_price": self.min_price,
            "max_price": self.max_price,
            "sort_by": self.sort_by.value,
            "sort_order": self.sort_order.value,
            "search": self.search,
        }
