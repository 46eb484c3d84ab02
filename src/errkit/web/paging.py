"""Paged endpoints: query filter parsing and page envelopes."""

import re
from dataclasses import dataclass
from typing import Any, Generic, List, Mapping, Optional, TypeVar

from fastapi import Request
from pydantic import BaseModel, ConfigDict, Field

from errkit.errors import invalid_number_param

T = TypeVar("T")

# Optional sign followed by ASCII digits
_INTEGER = re.compile(r"[+-]?[0-9]+")


def _parse_int(params: Mapping[str, str], name: str) -> Optional[int]:
    raw = params.get(name)
    if raw is None or raw == "":
        return None
    if not _INTEGER.fullmatch(raw):
        raise invalid_number_param(name)
    return int(raw)


@dataclass
class PageFilter:
    """Filters of a paged request.

    Attributes:
        limit: Maximum number of results (0 means no limit)
        offset: Number of results to skip
        from_id: Return results after this id
        to_id: Return results up to this id
        from_date: Lower bound (unix timestamp)
        to_date: Upper bound (unix timestamp)
    """

    limit: int = 0
    offset: int = 0
    from_id: str = ""
    to_id: str = ""
    from_date: int = 0
    to_date: int = 0

    @classmethod
    def from_query(cls, params: Mapping[str, str]) -> "PageFilter":
        """Parse the filter from query parameters.

        Recognized parameters: limit, offset, fromId, toId, fromDate, toDate.
        Absent or empty parameters keep their defaults.

        Raises:
            ChainError: invalid_param_type when a numeric parameter is not an integer
        """
        page_filter = cls()

        limit = _parse_int(params, "limit")
        if limit is not None:
            page_filter.limit = limit

        offset = _parse_int(params, "offset")
        if offset is not None:
            page_filter.offset = offset

        if params.get("fromId"):
            page_filter.from_id = params["fromId"]
        if params.get("toId"):
            page_filter.to_id = params["toId"]

        from_date = _parse_int(params, "fromDate")
        if from_date is not None:
            page_filter.from_date = from_date

        to_date = _parse_int(params, "toDate")
        if to_date is not None:
            page_filter.to_date = to_date

        return page_filter


def page_filter(request: Request) -> PageFilter:
    """FastAPI dependency parsing a PageFilter from the request query.

    Example:
        @app.get("/documents")
        async def list_documents(filters: PageFilter = Depends(page_filter)):
            ...
    """
    return PageFilter.from_query(request.query_params)


class Paging(BaseModel):
    """Paging metadata returned with a page."""

    model_config = ConfigDict(populate_by_name=True)

    limit: int = 0
    offset: int = 0
    total: int = 0
    first_id: str = Field(default="", alias="firstId")
    last_id: str = Field(default="", alias="lastId")


class Page(BaseModel, Generic[T]):
    """A page of results."""

    paging: Paging
    result: List[T]

    def to_dict(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True)
