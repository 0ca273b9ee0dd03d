from __future__ import annotations

import re
import datetime as dt
from typing import Any, Final, Optional

from pydantic import BaseModel, ConfigDict, Field, StrictBool, StrictStr, field_validator

# Canonical frontmatter keys
FM_TITLE: Final[str] = "title"
FM_DATE: Final[str] = "date"
FM_DESCRIPTION: Final[str] = "description"
FM_TAGS: Final[str] = "tags"
FM_SPACE: Final[str] = "space"
FM_SLUG: Final[str] = "slug"
FM_DRAFT: Final[str] = "draft"

DEFAULT_SPACE: Final[str] = "blog"
DEFAULT_GROUPS: Final[tuple[str, ...]] = ("blog", "ml", "transformers", "web", "notes")
MAX_TAGS: Final[int] = 10
DEFAULT_LATEST_LIMIT: Final[int] = 5

# lowercase alphanumerics, single hyphens, no leading/trailing hyphen
SLUG_RE: Final[re.Pattern[str]] = re.compile(r"^[a-z0-9]+(-[a-z0-9]+)*$")


def is_url_safe(value: str) -> bool:
    return SLUG_RE.fullmatch(value) is not None


class PostFrontmatter(BaseModel):
    """
    Shape of a post's frontmatter block.

    Only checks types and presence; tag format, space membership and
    id uniqueness are checked by confero.validation so each gets its own error.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    title: StrictStr
    description: StrictStr
    date: dt.date
    tags: list[StrictStr] = Field(default_factory=list)
    space: StrictStr = DEFAULT_SPACE
    slug: Optional[StrictStr] = None
    draft: StrictBool = False

    @field_validator("title", "description")
    @classmethod
    def _not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("must not be empty")
        return v.strip()

    @field_validator("date", mode="before")
    @classmethod
    def _parse_date(cls, v: Any) -> dt.date:
        # frontmatter arrives as str; date objects come from programmatic sources
        if isinstance(v, dt.datetime):
            return v.date()
        if isinstance(v, dt.date):
            return v
        if isinstance(v, str):
            try:
                return dt.datetime.fromisoformat(v.strip().replace("Z", "+00:00")).date()
            except ValueError as e:
                raise ValueError(f"not an ISO-8601 date: {v!r}") from e
        raise ValueError(f"expected an ISO-8601 date string, got {type(v).__name__}")


class SpaceRecord(BaseModel):
    """
    One entry of spaces.json.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    id: StrictStr
    title: StrictStr
    description: StrictStr
    banner: StrictStr
    icon: StrictStr

    @field_validator("id")
    @classmethod
    def _url_safe(cls, v: str) -> str:
        if not is_url_safe(v):
            raise ValueError(f"space id {v!r} is not URL-safe")
        return v

    @field_validator("title", "description")
    @classmethod
    def _not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("must not be empty")
        return v
