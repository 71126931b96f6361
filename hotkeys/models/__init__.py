from pydantic import BaseModel, ConfigDict


def to_camel(string: str) -> str:
    parts = string.split("_")
    return parts[0] + "".join(word.capitalize() for word in parts[1:])


class CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        validate_by_name=True
    )


from .shortcut_model import ShortcutRecord  # noqa: E402
from .search_model import MatchResult, MatchType, SearchOptions, SearchQuery  # noqa: E402

__all__ = [
    "CamelModel",
    "MatchResult",
    "MatchType",
    "SearchOptions",
    "SearchQuery",
    "ShortcutRecord",
    "to_camel",
]
