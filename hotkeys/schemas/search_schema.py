from typing import List, Optional

from pydantic import BaseModel, Field

from hotkeys.models import SearchOptions, ShortcutRecord


class SearchRequest(BaseModel):
    term: str = Field(..., max_length=200, description="Text typed by the user")
    app_filter: Optional[str] = Field(
        default=None,
        description="Restrict results to sources whose name contains this text",
        examples=["chrome", "vscode"],
    )
    options: Optional[SearchOptions] = Field(
        default=None,
        description="Search options. Server defaults are used when omitted.",
    )


class UsageRequest(BaseModel):
    """Identifies one record by its dedup key."""
    source: str
    shortcut: str
    description: str = ""


class SourceSummary(BaseModel):
    source: str
    count: int


class ReplaceShortcutsRequest(BaseModel):
    records: List[ShortcutRecord] = Field(default_factory=list)


class AbbreviationResponse(BaseModel):
    text: str
    abbreviation: str
