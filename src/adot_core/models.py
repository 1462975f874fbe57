from __future__ import annotations
import datetime
import uuid
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from .errors import MissingFieldError

LOCATION_COLLECTION = "location"
LATEST_KEY = "latest"
MICROBLOG_COLLECTION = "microblog"


def utcnow() -> datetime.datetime:
    return datetime.datetime.now(datetime.timezone.utc)


def rfc3339(ts: datetime.datetime) -> str:
    """Render an aware timestamp as RFC3339 in UTC."""
    if ts.tzinfo is None:
        ts = ts.replace(tzinfo=datetime.timezone.utc)
    return ts.astimezone(datetime.timezone.utc).isoformat()


class GeoPayload(BaseModel):
    """Typed view of the geolocation response.

    Only the four place fields are kept; anything else the service returns
    (ip, loc, org, postal, ...) is ignored. Each field must be a non-empty
    string, with no coercion from numbers or null.
    """

    model_config = ConfigDict(strict=True, extra="ignore")

    city: str = Field(min_length=1)
    region: str = Field(min_length=1)
    country: str = Field(min_length=1)
    timezone: str = Field(min_length=1)

    @classmethod
    def decode(cls, data: Any) -> "GeoPayload":
        """Validate all fields in one pass; report the first failing one."""
        try:
            return cls.model_validate(data)
        except ValidationError as e:
            failing = {err["loc"][0] for err in e.errors() if err["loc"]}
            for name in cls.model_fields:
                if name in failing:
                    raise MissingFieldError(name) from None
            raise


class LocationRecord(BaseModel):
    model_config = ConfigDict(frozen=True)

    city: str
    region: str
    country: str
    timezone: str
    observed_at_utc: datetime.datetime

    @classmethod
    def from_payload(
        cls, payload: GeoPayload, observed_at: datetime.datetime
    ) -> "LocationRecord":
        return cls(**payload.model_dump(), observed_at_utc=observed_at)

    def to_document(self) -> Dict[str, Any]:
        return {
            "city": self.city,
            "region": self.region,
            "country": self.country,
            "timezone": self.timezone,
            "time": {"utc": rfc3339(self.observed_at_utc)},
        }


class MicroblogPost(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    content: str
    posted_at_utc: datetime.datetime

    @classmethod
    def new(
        cls, content: str, posted_at: Optional[datetime.datetime] = None
    ) -> "MicroblogPost":
        return cls(
            id=str(uuid.uuid4()),
            content=content,
            posted_at_utc=posted_at or utcnow(),
        )

    def to_document(self) -> Dict[str, Any]:
        return {"id": self.id, "content": self.content, "time": rfc3339(self.posted_at_utc)}
