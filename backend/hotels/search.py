from __future__ import annotations

import math
from dataclasses import dataclass
from decimal import Decimal
from functools import reduce
from operator import and_
from typing import Dict, List, Optional, Sequence, Tuple

from django.db.models import Q, QuerySet

from .models import Hotel

PAGE_SIZE = 3

SORT_STAR_RATING = "starRating"
SORT_PRICE_ASC = "pricePerNightAsc"
SORT_PRICE_DESC = "pricePerNightDesc"

SORT_ORDERINGS: Dict[str, Tuple[str, ...]] = {
    SORT_STAR_RATING: ("-star_rating",),
    SORT_PRICE_ASC: ("price_per_night",),
    SORT_PRICE_DESC: ("-price_per_night",),
}


@dataclass(frozen=True)
class SearchCriteria:
    """Validated search parameters; ``None``/empty means "do not filter"."""

    destination: Optional[str] = None
    adult_count: Optional[int] = None
    child_count: Optional[int] = None
    facilities: Tuple[str, ...] = ()
    types: Tuple[str, ...] = ()
    stars: Tuple[int, ...] = ()
    max_price: Optional[Decimal] = None
    sort_option: Optional[str] = None
    page: int = 1


@dataclass(frozen=True)
class Pagination:
    total: int
    page: int
    pages: int

    def as_dict(self) -> Dict[str, int]:
        return {"total": self.total, "page": self.page, "pages": self.pages}


def build_search_filters(criteria: SearchCriteria) -> Dict[str, Q]:
    """
    Map each supplied search parameter onto one constraint.

    Parameters that were not supplied contribute no entry at all, so the
    resulting query never filters on that dimension.
    """

    filters: Dict[str, Q] = {}

    if criteria.destination:
        filters["destination"] = Q(city__icontains=criteria.destination) | Q(
            country__icontains=criteria.destination
        )

    if criteria.adult_count is not None:
        filters["adult_count"] = Q(adult_count__gte=criteria.adult_count)

    if criteria.child_count is not None:
        filters["child_count"] = Q(child_count__gte=criteria.child_count)

    if criteria.facilities:
        # every facility must be present, so each one gets its own subquery
        filters["facilities"] = reduce(
            and_,
            (
                Q(pk__in=Hotel.objects.filter(facilities__name=name).values("pk"))
                for name in dict.fromkeys(criteria.facilities)
            ),
        )

    if criteria.types:
        filters["type"] = Q(type__in=list(criteria.types))

    if criteria.stars:
        filters["star_rating"] = Q(star_rating__in=list(criteria.stars))

    if criteria.max_price is not None:
        filters["price_per_night"] = Q(price_per_night__lte=criteria.max_price)

    return filters


def build_search_query(criteria: SearchCriteria) -> Q:
    return reduce(and_, build_search_filters(criteria).values(), Q())


def resolve_ordering(sort_option: Optional[str]) -> Tuple[str, ...]:
    # pk breaks ties so consecutive pages never overlap
    return SORT_ORDERINGS.get(sort_option or "", ()) + ("pk",)


def page_count(total: int, page_size: int = PAGE_SIZE) -> int:
    return math.ceil(total / page_size)


def paginate(
    queryset: QuerySet,
    page: int,
    page_size: int = PAGE_SIZE,
) -> Tuple[List, Pagination]:
    """
    Slice one 1-based page out of ``queryset``.

    A page past the end yields an empty list; the totals stay accurate.
    """

    total = queryset.count()
    offset = (page - 1) * page_size
    # offsets past the end never reach the database; huge ones overflow OFFSET
    items = list(queryset[offset:offset + page_size]) if offset < total else []
    return items, Pagination(total=total, page=page, pages=page_count(total, page_size))


def search_hotels(
    criteria: SearchCriteria,
    queryset: Optional[QuerySet] = None,
    page_size: int = PAGE_SIZE,
) -> Tuple[Sequence[Hotel], Pagination]:
    if queryset is None:
        queryset = Hotel.objects.all()
    queryset = (
        queryset.filter(build_search_query(criteria))
        .order_by(*resolve_ordering(criteria.sort_option))
        .prefetch_related("facilities")
    )
    return paginate(queryset, criteria.page, page_size)
