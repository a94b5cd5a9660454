"""
Result envelopes.

A Result reports the outcome of an operation with HTTP 200 regardless of
success; business rule failures ("soft errors") carry succeeded=false and
the reason in `info`.
"""

from pydantic import BaseModel, Field

from fileservice.schemas.asset import AssetSummary

NO_DATA_AVAILABLE = "No Data Available"
DUPLICATE_FILE_NAME = "FileName cannot duplicate an existing file"
DELETE_SUCCESSFUL = "Delete Successful"


class Result(BaseModel):
    """Outcome of an operation."""

    succeeded: bool
    info: list[str] = Field(default_factory=list)

    @classmethod
    def ok(cls, message: str | None = None) -> "Result":
        return cls(succeeded=True, info=[message] if message else [])

    @classmethod
    def error(cls, message: str) -> "Result":
        return cls(succeeded=False, info=[message])


class ListResult(Result):
    """One page of assets plus the total number of assets."""

    items: list[AssetSummary]
    total: int
    page: int
    count: int

    @classmethod
    def page_of(
        cls,
        items: list[AssetSummary],
        total: int,
        page: int,
        count: int,
    ) -> "ListResult":
        return cls(succeeded=True, items=items, total=total, page=page, count=count)
