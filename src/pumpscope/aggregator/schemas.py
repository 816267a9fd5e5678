"""Pydantic schemas for upstream aggregator records."""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class RankedToken(BaseModel):
    """One entry of the upstream ``rank`` list.

    Only the fields pumpscope reads are declared.  Anything else the
    aggregator sends (bonding curve data, reply counts, ...) is kept as extra
    fields and serialized back out unchanged.

    Instances live for one list request.  The enrichment service sets
    ``description`` in place when the upstream value is empty.
    """

    model_config = ConfigDict(extra="allow")

    address: str = Field(min_length=1)
    name: str = ""
    symbol: str = ""
    created_timestamp: Optional[float] = None
    """Creation time as unix seconds."""
    usd_market_cap: Optional[float] = None
    description: Optional[str] = None
    twitter: Optional[str] = None
    telegram: Optional[str] = None
    website: Optional[str] = None
    image_uri: Optional[str] = None

    @field_validator("name", "symbol", mode="before")
    @classmethod
    def null_to_empty(cls, value: object) -> object:
        # The aggregator sends null for unnamed tokens.
        return "" if value is None else value

    @property
    def needs_description(self) -> bool:
        return not self.description or not self.description.strip()
