"""
Change infos that are not tied to a database entity: core updates,
VersionPress itself, reverts, plugins and themes.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from .base import ChangeInfo, past_tense


@dataclass(frozen=True)
class WordPressUpdateChangeInfo(ChangeInfo):
    """WordPress core upgraded to `version`."""

    category = "wordpress_update"
    ACTION_PATTERN = re.compile(r"wordpress/update/(?P<entity_id>.+)")

    version: str

    @property
    def action(self) -> str:  # type: ignore[override]
        return "update"

    @property
    def entity_id(self) -> str:  # type: ignore[override]
        return self.version

    def description(self) -> str:
        return f"WordPress updated to version {self.version}"

    def action_value(self) -> str:
        return f"wordpress/update/{self.version}"

    @classmethod
    def _from_tags(cls, match: re.Match[str], tags: dict[str, str]) -> WordPressUpdateChangeInfo:
        return cls(version=match["entity_id"])


@dataclass(frozen=True)
class VersionPressChangeInfo(ChangeInfo):
    """VersionPress installed, activated or deactivated.

    Undo and rollback also live under the ``versionpress/`` prefix but are
    RevertChangeInfo's business.
    """

    category = "versionpress"
    ACTION_PATTERN = re.compile(r"versionpress/(?P<action>(?!(?:undo|rollback)(?:/|$))[^/]+)(?:/(?P<entity_id>.+))?")

    action: str
    version: str | None = None

    @property
    def entity_id(self) -> str | None:  # type: ignore[override]
        return self.version

    def description(self) -> str:
        text = f"VersionPress {past_tense(self.action)}"
        if self.version:
            text += f" (version {self.version})"
        return text

    def action_value(self) -> str:
        if self.version:
            return f"versionpress/{self.action}/{self.version}"
        return f"versionpress/{self.action}"

    @classmethod
    def _from_tags(cls, match: re.Match[str], tags: dict[str, str]) -> VersionPressChangeInfo:
        return cls(action=match["action"], version=match["entity_id"])


@dataclass(frozen=True)
class RevertChangeInfo(ChangeInfo):
    """Undo of a single commit, or rollback to an earlier one."""

    category = "revert"
    ACTION_PATTERN = re.compile(r"versionpress/(?P<action>undo|rollback)/(?P<entity_id>.+)")

    action: str
    commit_hash: str

    @property
    def entity_id(self) -> str:  # type: ignore[override]
        return self.commit_hash

    def description(self) -> str:
        short = self.commit_hash[:7]
        if self.action == "rollback":
            return f"Rolled back to {short}"
        return f"Reverted change {short}"

    def action_value(self) -> str:
        return f"versionpress/{self.action}/{self.commit_hash}"

    @classmethod
    def _from_tags(cls, match: re.Match[str], tags: dict[str, str]) -> RevertChangeInfo:
        return cls(action=match["action"], commit_hash=match["entity_id"])


@dataclass(frozen=True)
class PluginChangeInfo(ChangeInfo):
    """Plugin install/activate/deactivate/update/delete.

    `plugin_file` is the plugin's main file relative to the plugins
    directory (e.g. ``akismet/akismet.php``) and may contain slashes.
    """

    category = "plugin"
    ACTION_PATTERN = re.compile(r"plugin/(?P<action>[^/]+)/(?P<entity_id>.+)")

    action: str
    plugin_file: str
    plugin_name: str | None = None

    @property
    def entity_id(self) -> str:  # type: ignore[override]
        return self.plugin_file

    def description(self) -> str:
        return f"Plugin '{self.plugin_name or self.plugin_file}' {past_tense(self.action)}"

    def action_value(self) -> str:
        return f"plugin/{self.action}/{self.plugin_file}"

    def custom_tags(self) -> dict[str, str | None]:
        return {"VP-Plugin-Name": self.plugin_name}

    @classmethod
    def _from_tags(cls, match: re.Match[str], tags: dict[str, str]) -> PluginChangeInfo:
        return cls(action=match["action"], plugin_file=match["entity_id"], plugin_name=tags.get("VP-Plugin-Name"))


@dataclass(frozen=True)
class ThemeChangeInfo(ChangeInfo):
    """Theme install/switch/update/delete/customize; `stylesheet` identifies the theme."""

    category = "theme"
    ACTION_PATTERN = re.compile(r"theme/(?P<action>[^/]+)/(?P<entity_id>.+)")

    action: str
    stylesheet: str
    theme_name: str | None = None

    @property
    def entity_id(self) -> str:  # type: ignore[override]
        return self.stylesheet

    def description(self) -> str:
        name = self.theme_name or self.stylesheet
        if self.action == "switch":
            return f"Theme switched to '{name}'"
        return f"Theme '{name}' {past_tense(self.action)}"

    def action_value(self) -> str:
        return f"theme/{self.action}/{self.stylesheet}"

    def custom_tags(self) -> dict[str, str | None]:
        return {"VP-Theme-Name": self.theme_name}

    @classmethod
    def _from_tags(cls, match: re.Match[str], tags: dict[str, str]) -> ThemeChangeInfo:
        return cls(action=match["action"], stylesheet=match["entity_id"], theme_name=tags.get("VP-Theme-Name"))
