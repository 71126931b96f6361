from datetime import datetime, timezone
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field, field_validator

from . import CamelModel
from .shortcut_model import ShortcutRecord


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class MatchType(str, Enum):
    """Strategy that produced a result."""
    EXACT = "exact"
    FUZZY = "fuzzy"
    ABBREVIATION = "abbreviation"
    PARTIAL = "partial"
    KEYWORD = "keyword"
    CATEGORY = "category"


class SearchOptions(CamelModel):
    enable_fuzzy_search: bool = True
    enable_abbreviation_search: bool = True
    use_cache: bool = True
    max_results: int = Field(default=50, ge=1)
    fuzzy_threshold: float = Field(default=60.0, ge=0.0, le=100.0)  # minimum fuzzy score (0-100)
    boost_recently_used: bool = True
    boost_popular_apps: bool = True


class SearchQuery(BaseModel):
    term: str
    app_filter: Optional[str] = None
    options: SearchOptions = Field(default_factory=SearchOptions)
    timestamp: datetime = Field(default_factory=_utcnow)


class MatchResult(CamelModel):
    record: ShortcutRecord
    score: float = Field(ge=0.0, le=100.0)
    match_type: MatchType
    matched_field: str = ""
    matched_terms: List[str] = Field(min_length=1)
    from_cache: bool = False
    searched_at: datetime = Field(default_factory=_utcnow)

    @field_validator("matched_terms")
    @classmethod
    def _no_blank_terms(cls, value: List[str]) -> List[str]:
        if not any(term for term in value):
            raise ValueError("matched_terms must contain at least one non-empty term")
        return value
