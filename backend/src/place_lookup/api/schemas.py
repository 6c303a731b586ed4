"""Pydantic schemas for location lookup requests and responses."""

from __future__ import annotations

from typing import Any
from typing import Optional

from pydantic import BaseModel
from pydantic import ConfigDict
from pydantic import StrictStr
from pydantic import ValidationError

SOURCE_LABEL = "OS Data Hub – Ordnance Survey"


class LookupBodySchema(BaseModel):
    """JSON body accepted on POST; only ``location`` is read."""

    model_config = ConfigDict(extra="ignore")

    location: Optional[StrictStr] = None

    @classmethod
    def location_from(cls, payload: Optional[dict[str, Any]]) -> Optional[str]:
        """Return ``location`` from a decoded body, or None if unusable."""
        if payload is None:
            return None
        try:
            return cls.model_validate(payload).location
        except ValidationError:
            return None


class LookupResponseSchema(BaseModel):
    """Successful lookup envelope."""

    location: str
    source: str = SOURCE_LABEL
    data: Any
