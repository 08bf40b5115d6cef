"""
Entity change infos: posts, comments, users, terms, options and meta.

Entity ids are VersionPress ids (VPIDs) except for options, which are
identified by their option name.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from .base import EntityChangeInfo, entity_action_pattern, past_tense


def _quoted(value: str | None, fallback: str) -> str:
    return f"'{value}'" if value else fallback


@dataclass(frozen=True)
class PostChangeInfo(EntityChangeInfo):
    category = "post"
    object_type = "post"
    ACTION_PATTERN = entity_action_pattern("post")

    post_title: str | None = None
    post_type: str | None = None

    def description(self) -> str:
        kind = (self.post_type or "post").replace("_", " ").capitalize()
        return f"{kind} {_quoted(self.post_title, self.entity_id)} {past_tense(self.action)}"

    def custom_tags(self) -> dict[str, str | None]:
        return {"VP-Post-Title": self.post_title, "VP-Post-Type": self.post_type}

    @classmethod
    def _from_tags(cls, match: re.Match[str], tags: dict[str, str]) -> PostChangeInfo:
        return cls(
            action=match["action"],
            entity_id=match["entity_id"],
            post_title=tags.get("VP-Post-Title"),
            post_type=tags.get("VP-Post-Type"),
        )


@dataclass(frozen=True)
class CommentChangeInfo(EntityChangeInfo):
    category = "comment"
    object_type = "comment"
    ACTION_PATTERN = entity_action_pattern("comment")

    comment_author: str | None = None
    post_title: str | None = None

    def description(self) -> str:
        subject = "Comment"
        if self.comment_author:
            subject += f" by '{self.comment_author}'"
        if self.post_title:
            subject += f" on '{self.post_title}'"
        if subject == "Comment":
            subject += f" {self.entity_id}"
        return f"{subject} {past_tense(self.action)}"

    def custom_tags(self) -> dict[str, str | None]:
        return {"VP-Comment-Author": self.comment_author, "VP-Comment-PostTitle": self.post_title}

    @classmethod
    def _from_tags(cls, match: re.Match[str], tags: dict[str, str]) -> CommentChangeInfo:
        return cls(
            action=match["action"],
            entity_id=match["entity_id"],
            comment_author=tags.get("VP-Comment-Author"),
            post_title=tags.get("VP-Comment-PostTitle"),
        )


@dataclass(frozen=True)
class UserChangeInfo(EntityChangeInfo):
    category = "user"
    object_type = "user"
    ACTION_PATTERN = entity_action_pattern("user")

    user_login: str | None = None

    def description(self) -> str:
        return f"User {_quoted(self.user_login, self.entity_id)} {past_tense(self.action)}"

    def custom_tags(self) -> dict[str, str | None]:
        return {"VP-User-Login": self.user_login}

    @classmethod
    def _from_tags(cls, match: re.Match[str], tags: dict[str, str]) -> UserChangeInfo:
        return cls(action=match["action"], entity_id=match["entity_id"], user_login=tags.get("VP-User-Login"))


# Display names for the built-in taxonomies
_TAXONOMY_LABELS = {
    "category": "Category",
    "post_tag": "Tag",
    "nav_menu": "Menu",
}


@dataclass(frozen=True)
class TermChangeInfo(EntityChangeInfo):
    category = "term"
    object_type = "term"
    ACTION_PATTERN = entity_action_pattern("term")

    term_name: str | None = None
    taxonomy: str | None = None

    def description(self) -> str:
        label = _TAXONOMY_LABELS.get(self.taxonomy or "", "Term")
        return f"{label} {_quoted(self.term_name, self.entity_id)} {past_tense(self.action)}"

    def custom_tags(self) -> dict[str, str | None]:
        return {"VP-Term-Name": self.term_name, "VP-Term-Taxonomy": self.taxonomy}

    @classmethod
    def _from_tags(cls, match: re.Match[str], tags: dict[str, str]) -> TermChangeInfo:
        return cls(
            action=match["action"],
            entity_id=match["entity_id"],
            term_name=tags.get("VP-Term-Name"),
            taxonomy=tags.get("VP-Term-Taxonomy"),
        )


@dataclass(frozen=True)
class OptionChangeInfo(EntityChangeInfo):
    """Option change; `entity_id` is the option name (e.g. "blogname")."""

    category = "option"
    object_type = "option"
    ACTION_PATTERN = entity_action_pattern("option")

    def description(self) -> str:
        return f"Option '{self.entity_id}' {past_tense(self.action)}"

    @classmethod
    def _from_tags(cls, match: re.Match[str], tags: dict[str, str]) -> OptionChangeInfo:
        return cls(action=match["action"], entity_id=match["entity_id"])


@dataclass(frozen=True)
class PostMetaChangeInfo(EntityChangeInfo):
    category = "postmeta"
    object_type = "postmeta"
    ACTION_PATTERN = entity_action_pattern("postmeta")

    meta_key: str | None = None
    post_title: str | None = None
    post_type: str | None = None
    post_vpid: str | None = None

    def description(self) -> str:
        kind = (self.post_type or "post").replace("_", " ")
        owner = _quoted(self.post_title, self.post_vpid or "(unknown)")
        return f"Post-meta {_quoted(self.meta_key, self.entity_id)} for {kind} {owner} {past_tense(self.action)}"

    def custom_tags(self) -> dict[str, str | None]:
        return {
            "VP-PostMeta-Key": self.meta_key,
            "VP-Post-Title": self.post_title,
            "VP-Post-Type": self.post_type,
            "VP-Post-VPID": self.post_vpid,
        }

    @classmethod
    def _from_tags(cls, match: re.Match[str], tags: dict[str, str]) -> PostMetaChangeInfo:
        return cls(
            action=match["action"],
            entity_id=match["entity_id"],
            meta_key=tags.get("VP-PostMeta-Key"),
            post_title=tags.get("VP-Post-Title"),
            post_type=tags.get("VP-Post-Type"),
            post_vpid=tags.get("VP-Post-VPID"),
        )


@dataclass(frozen=True)
class UserMetaChangeInfo(EntityChangeInfo):
    category = "usermeta"
    object_type = "usermeta"
    ACTION_PATTERN = entity_action_pattern("usermeta")

    meta_key: str | None = None
    user_login: str | None = None
    user_vpid: str | None = None

    def description(self) -> str:
        owner = _quoted(self.user_login, self.user_vpid or "(unknown)")
        return f"User-meta {_quoted(self.meta_key, self.entity_id)} for user {owner} {past_tense(self.action)}"

    def custom_tags(self) -> dict[str, str | None]:
        return {
            "VP-UserMeta-Key": self.meta_key,
            "VP-User-Login": self.user_login,
            "VP-User-VPID": self.user_vpid,
        }

    @classmethod
    def _from_tags(cls, match: re.Match[str], tags: dict[str, str]) -> UserMetaChangeInfo:
        return cls(
            action=match["action"],
            entity_id=match["entity_id"],
            meta_key=tags.get("VP-UserMeta-Key"),
            user_login=tags.get("VP-User-Login"),
            user_vpid=tags.get("VP-User-VPID"),
        )
