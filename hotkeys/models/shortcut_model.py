from typing import List, Optional, Tuple

from pydantic import Field

from . import CamelModel


class ShortcutRecord(CamelModel):
    """One shortcut/hotkey entry with its metadata.

    Records are created at ingestion and replaced wholesale on reload.
    ``usage_count`` is the only field mutated afterwards.
    """
    shortcut: str
    description: str = ""
    category: Optional[str] = None
    keywords: List[str] = Field(default_factory=list)
    aliases: List[str] = Field(default_factory=list)
    source: str = ""
    platform: Optional[str] = None
    difficulty: Optional[str] = None
    is_global: bool = False
    usage_count: int = Field(default=0, ge=0)
    language: Optional[str] = None

    @property
    def dedup_key(self) -> Tuple[str, str, str]:
        return (self.source, self.shortcut, self.description)

    @property
    def usage_key(self) -> str:
        return f"{self.source}_{self.shortcut}_{self.description}"
