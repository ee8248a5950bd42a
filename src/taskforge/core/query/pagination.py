"""Executes a QuerySpec against a store and shapes the paginated envelope."""

import asyncio
import math
from dataclasses import dataclass
from typing import Any, Generic, List, Protocol, Sequence, TypeVar

from fastapi.concurrency import run_in_threadpool

from ..models.tasks import PageLinks, PageMeta
from .builder import QuerySpec

T = TypeVar("T")
T_co = TypeVar("T_co", covariant=True)


class PageableStore(Protocol[T_co]):
    """What `paginate` needs from a store client."""

    def find(self, spec: QuerySpec, skip: int, limit: int) -> Sequence[T_co]: ...

    def count(self, spec: QuerySpec) -> int: ...


@dataclass(frozen=True)
class Page(Generic[T]):
    data: List[T]
    meta: PageMeta
    links: PageLinks


def compute_last_page(total: int, per_page: int) -> int:
    """Number of pages; an empty result still has one (empty) page."""
    return max(1, math.ceil(total / per_page))


def build_meta(spec: QuerySpec, returned: int, total: int) -> PageMeta:
    skip = spec.skip
    return PageMeta(
        current_page=spec.page,
        from_=skip + 1 if returned else None,
        last_page=compute_last_page(total, spec.per_page),
        per_page=spec.per_page,
        to=skip + returned if returned else None,
        total=total,
    )


def build_links(page: int, last_page: int) -> PageLinks:
    return PageLinks(
        first=1 if page > 1 else None,
        last=last_page,
        prev=page - 1 if page > 1 else None,
        next=page + 1 if page < last_page else None,
    )


async def paginate(store: PageableStore[Any], spec: QuerySpec) -> Page[Any]:
    """
    Fetch one page and the total match count concurrently.

    Both calls run on worker threads and are joined before the envelope is
    built; if either raises, the error propagates and no page is returned.
    """
    data, total = await asyncio.gather(
        run_in_threadpool(store.find, spec, spec.skip, spec.per_page),
        run_in_threadpool(store.count, spec),
    )
    data = list(data)
    meta = build_meta(spec, len(data), total)
    return Page(data=data, meta=meta, links=build_links(spec.page, meta.last_page))
