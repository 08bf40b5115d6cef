"""
Base types for change infos.

A change info describes one tracked change (a post was created, a plugin was
activated, ...). It renders itself as a one-line description and as a body
fragment made of ``Key: value`` tags, and parses itself back from such a
fragment. The first tag is always ``VP-Action: <object>/<action>[/<id>]``;
it is what the matcher routes on.
"""

from __future__ import annotations

import re
from abc import ABC, abstractmethod
from dataclasses import asdict, dataclass, fields
from typing import Any, ClassVar

from ..commit_message import TAG_SEPARATOR, CommitMessage, format_tags, parse_tags
from ..errors import ChangeInfoError, ChangeInfoParseError

ACTION_TAG = "VP-Action"

# Past-tense forms used in descriptions; anything else gets a regular suffix.
_PAST_TENSE = {
    "create": "created",
    "edit": "edited",
    "update": "updated",
    "delete": "deleted",
    "trash": "moved to trash",
    "untrash": "moved from trash",
    "draft": "saved as draft",
    "publish": "published",
    "spam": "marked as spam",
    "unspam": "marked as not spam",
    "approve": "approved",
    "unapprove": "unapproved",
    "install": "installed",
    "activate": "activated",
    "deactivate": "deactivated",
    "switch": "switched",
    "rename": "renamed",
    "customize": "customized",
}


def past_tense(action: str | None) -> str:
    if not action:
        return "changed"
    if action in _PAST_TENSE:
        return _PAST_TENSE[action]
    return action + ("d" if action.endswith("e") else "ed")


def read_action(fragment: str) -> str | None:
    """Return the ``VP-Action`` value from the fragment's first line, if any."""
    first_line = fragment.split("\n", 1)[0]
    prefix = ACTION_TAG + TAG_SEPARATOR
    if not first_line.startswith(prefix):
        return None
    return first_line[len(prefix):].removesuffix("\r")


class ChangeInfo(ABC):
    """One tracked change.

    Concrete change infos are frozen dataclasses: once built (directly or by
    `parse`) they never change, and every rendering is a pure function of
    their fields.
    """

    # Variant kind, used by the envelope's priority table.
    category: ClassVar[str] = ""
    # Full-match pattern for the VP-Action value, with `action` and
    # `entity_id` groups where applicable.
    ACTION_PATTERN: ClassVar[re.Pattern[str]]

    action: str | None
    entity_id: str | None

    def __post_init__(self) -> None:
        # Each value is written on a single tag line.
        for f in fields(self):  # type: ignore[arg-type]
            value = getattr(self, f.name)
            if isinstance(value, str) and ("\n" in value or "\r" in value):
                raise ChangeInfoError(f"{type(self).__name__}.{f.name} must be a single line, got {value!r}")

    @abstractmethod
    def description(self) -> str:
        """One-line human readable summary."""

    @abstractmethod
    def action_value(self) -> str:
        """Value of the VP-Action tag."""

    def custom_tags(self) -> dict[str, str | None]:
        """Variant-specific tags written after VP-Action."""
        return {}

    def to_fragment(self) -> str:
        return format_tags({ACTION_TAG: self.action_value(), **self.custom_tags()})

    def commit_message(self) -> CommitMessage:
        return CommitMessage(subject=self.description(), body=self.to_fragment())

    @classmethod
    def can_parse(cls, fragment: str) -> bool:
        action = read_action(fragment)
        return action is not None and cls.ACTION_PATTERN.fullmatch(action) is not None

    @classmethod
    def parse(cls, fragment: str) -> ChangeInfo:
        action = read_action(fragment)
        if action is None:
            raise ChangeInfoParseError(cls.__name__, fragment, f"first line is not a {ACTION_TAG} tag")
        match = cls.ACTION_PATTERN.fullmatch(action)
        if match is None:
            raise ChangeInfoParseError(cls.__name__, fragment, f"unexpected {ACTION_TAG} value {action!r}")
        return cls._from_tags(match, parse_tags(fragment))

    @classmethod
    @abstractmethod
    def _from_tags(cls, match: re.Match[str], tags: dict[str, str]) -> ChangeInfo:
        """Build an instance from a matched VP-Action value and all fragment tags."""

    def to_dict(self) -> dict[str, Any]:
        """Convert to JSON-serializable dict."""
        return {"category": self.category, **asdict(self)}  # type: ignore[call-overload]

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ChangeInfo:
        """Reconstruct from a dict produced by `to_dict` (the category key is ignored)."""
        known = {f.name for f in fields(cls)}  # type: ignore[arg-type]
        kwargs = {k: v for k, v in data.items() if k in known}
        try:
            return cls(**kwargs)
        except TypeError as e:
            raise ChangeInfoError(f"Invalid {cls.__name__} data: {e}") from e


def entity_action_pattern(object_type: str) -> re.Pattern[str]:
    """Pattern for ``<object_type>/<action>/<entity id>`` actions."""
    return re.compile(rf"{re.escape(object_type)}/(?P<action>[^/]+)/(?P<entity_id>.+)")


@dataclass(frozen=True)
class EntityChangeInfo(ChangeInfo):
    """Change of a single database entity (post, comment, option, ...).

    Among entity changes of the same category, a "create" is considered
    more important than any other action.
    """

    object_type: ClassVar[str] = ""

    action: str
    entity_id: str

    def action_value(self) -> str:
        return f"{self.object_type}/{self.action}/{self.entity_id}"
