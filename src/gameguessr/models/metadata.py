from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class GameMetadata(BaseModel):
    """Best-effort descriptive fields for a title, used as hint material.

    Every field is optional; an empty instance means "nothing known".
    """

    model_config = ConfigDict(populate_by_name=True)

    developer: Optional[str] = None
    publisher: Optional[str] = None
    release_year: Optional[int] = Field(default=None, alias="releaseYear")
    special: Optional[str] = None

    # Franchise flags, derived from RAWG's game-series listing.
    has_direct_sequel: Optional[bool] = Field(default=None, alias="hasDirectSequel")
    has_direct_prequel: Optional[bool] = Field(default=None, alias="hasDirectPrequel")
    is_branded_in_series: Optional[bool] = Field(default=None, alias="isBrandedInSeries")

    def is_empty(self) -> bool:
        return not self.model_dump(exclude_none=True)

    def to_document(self) -> dict:
        return self.model_dump(by_alias=True, exclude_none=True)
