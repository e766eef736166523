"""
Data contracts for the domain age checker.
Defines the JSON shape returned by /check-domain and stored in the cache.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class DomainResult(BaseModel):
    """Outcome of one domain lookup. Immutable once built."""
    model_config = ConfigDict(frozen=True)

    domain: str = Field(..., description="Domain as requested (or normalized, if enabled)")
    created_date: str = Field("", description="Creation date as YYYY-MM-DD, empty if unresolved")
    is_less_than_6_months: bool = Field(False, description="Registered within the last six calendar months")
    error: Optional[str] = Field(None, description="Failure description, omitted on success")

    @property
    def failed(self) -> bool:
        return self.error is not None

    def to_json(self) -> dict:
        """Wire form: error only appears when set."""
        return self.model_dump(exclude_none=True)
