"""
Change info types.

Each type is one category of tracked change. Types are registered here by
category name so that records can be rebuilt from their dict form.
"""

from __future__ import annotations

from typing import Any

from ..errors import ChangeInfoError
from .base import ACTION_TAG, ChangeInfo, EntityChangeInfo, read_action
from .entities import (
    CommentChangeInfo,
    OptionChangeInfo,
    PostChangeInfo,
    PostMetaChangeInfo,
    TermChangeInfo,
    UserChangeInfo,
    UserMetaChangeInfo,
)
from .tracked import (
    PluginChangeInfo,
    RevertChangeInfo,
    ThemeChangeInfo,
    VersionPressChangeInfo,
    WordPressUpdateChangeInfo,
)

CHANGE_INFO_TYPES: dict[str, type[ChangeInfo]] = {
    cls.category: cls
    for cls in (
        WordPressUpdateChangeInfo,
        VersionPressChangeInfo,
        PostChangeInfo,
        CommentChangeInfo,
        UserChangeInfo,
        RevertChangeInfo,
        PluginChangeInfo,
        ThemeChangeInfo,
        TermChangeInfo,
        OptionChangeInfo,
        PostMetaChangeInfo,
        UserMetaChangeInfo,
    )
}


def get_change_info_type(category: str) -> type[ChangeInfo] | None:
    """Get change info type by category (case-insensitive, None-safe)."""
    return CHANGE_INFO_TYPES.get((category or "").strip().lower())


def list_categories() -> list[str]:
    return sorted(CHANGE_INFO_TYPES.keys())


def change_info_from_dict(data: dict[str, Any]) -> ChangeInfo:
    """Rebuild a change info from its `to_dict` form."""
    category = data.get("category")
    cls = get_change_info_type(category) if isinstance(category, str) else None
    if cls is None:
        raise ChangeInfoError(f"Unknown change info category: {category!r}")
    return cls.from_dict(data)


__all__ = [
    "ACTION_TAG",
    "CHANGE_INFO_TYPES",
    "ChangeInfo",
    "CommentChangeInfo",
    "EntityChangeInfo",
    "OptionChangeInfo",
    "PluginChangeInfo",
    "PostChangeInfo",
    "PostMetaChangeInfo",
    "RevertChangeInfo",
    "TermChangeInfo",
    "ThemeChangeInfo",
    "UserChangeInfo",
    "UserMetaChangeInfo",
    "VersionPressChangeInfo",
    "WordPressUpdateChangeInfo",
    "change_info_from_dict",
    "get_change_info_type",
    "list_categories",
    "read_action",
]
