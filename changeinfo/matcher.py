"""
Change info matcher: body fragment -> change info type.

Routing looks only at the fragment's first line, the ``VP-Action`` tag, and
tests it against an ordered list of patterns. The first matching route wins.
"""

from __future__ import annotations

import logging
import re

from .changes import (
    ChangeInfo,
    CommentChangeInfo,
    OptionChangeInfo,
    PluginChangeInfo,
    PostChangeInfo,
    PostMetaChangeInfo,
    RevertChangeInfo,
    TermChangeInfo,
    ThemeChangeInfo,
    UserChangeInfo,
    UserMetaChangeInfo,
    VersionPressChangeInfo,
    WordPressUpdateChangeInfo,
    read_action,
)
from .errors import UnroutableFragmentError

logger = logging.getLogger(__name__)

# Reverts share the versionpress/ prefix, so they are listed first.
DEFAULT_ROUTES: tuple[type[ChangeInfo], ...] = (
    RevertChangeInfo,
    VersionPressChangeInfo,
    WordPressUpdateChangeInfo,
    PostChangeInfo,
    PostMetaChangeInfo,
    CommentChangeInfo,
    UserChangeInfo,
    UserMetaChangeInfo,
    TermChangeInfo,
    OptionChangeInfo,
    PluginChangeInfo,
    ThemeChangeInfo,
)


class ChangeInfoMatcher:
    """Ordered (pattern, type) routes.

    A route's pattern must fully match the VP-Action value. Types routed by
    their own ACTION_PATTERN are added with `register_type`; `register`
    accepts an explicit pattern.
    """

    def __init__(self, types: tuple[type[ChangeInfo], ...] = DEFAULT_ROUTES):
        self._routes: list[tuple[re.Pattern[str], type[ChangeInfo]]] = []
        for cls in types:
            self.register_type(cls)

    def register(self, pattern: str | re.Pattern[str], cls: type[ChangeInfo]) -> None:
        compiled = re.compile(pattern) if isinstance(pattern, str) else pattern
        self._routes.append((compiled, cls))

    def register_type(self, cls: type[ChangeInfo]) -> None:
        self.register(cls.ACTION_PATTERN, cls)

    def routes(self) -> list[tuple[str, type[ChangeInfo]]]:
        return [(pattern.pattern, cls) for pattern, cls in self._routes]

    def find(self, fragment: str) -> type[ChangeInfo] | None:
        """Return the type that handles `fragment`, or None."""
        action = read_action(fragment)
        if action is None:
            return None
        for pattern, cls in self._routes:
            if pattern.fullmatch(action):
                return cls
        return None

    def resolve(self, fragment: str, index: int | None = None) -> type[ChangeInfo]:
        """Like `find`, but raise UnroutableFragmentError when nothing matches."""
        cls = self.find(fragment)
        if cls is None:
            raise UnroutableFragmentError(fragment, index)
        logger.debug("Fragment %s routed to %s", index, cls.__name__)
        return cls


default_matcher = ChangeInfoMatcher()


def find_matching_change_info(fragment: str) -> type[ChangeInfo] | None:
    """Look up the change info type for a fragment using the default routes."""
    return default_matcher.find(fragment)
