"""
Change info envelope: several change infos in one commit.

The envelope decides which change is the most important one (its description
becomes the commit subject) and the order in which the changes are written to,
and later listed from, the commit body.

Body format::

    <fragment 1>

    <fragment 2>

    X-VP-Version: <version>
"""

from __future__ import annotations

import logging
from functools import cmp_to_key
from typing import Iterable

from . import version_tag
from ._version import __version__
from .changes import ChangeInfo, EntityChangeInfo, OptionChangeInfo, ThemeChangeInfo
from .commit_message import CommitMessage
from .errors import ChangeInfoParseError, EmptyEnvelopeError, MalformedEnvelopeError
from .matcher import ChangeInfoMatcher, default_matcher

logger = logging.getLogger(__name__)

FRAGMENT_SEPARATOR = "\n\n"

# Categories ordered by importance; commits list their changes in this order.
DEFAULT_PRIORITY_ORDER: tuple[str, ...] = (
    "wordpress_update",
    "versionpress",
    "post",
    "comment",
    "user",
    "revert",
    "plugin",
    "theme",
    "term",
    "option",
    "postmeta",
    "usermeta",
)

# The site language option is always listed after other options.
LANGUAGE_OPTION = "WPLANG"


def rank(change_info: ChangeInfo, priority_order: tuple[str, ...] = DEFAULT_PRIORITY_ORDER) -> int:
    """Position of the change info's category; unlisted categories rank last."""
    try:
        return priority_order.index(change_info.category)
    except ValueError:
        return len(priority_order)


def compare_by_priority(
    change_info1: ChangeInfo,
    change_info2: ChangeInfo,
    priority_order: tuple[str, ...] = DEFAULT_PRIORITY_ORDER,
) -> int:
    """Comparator for sorting change infos by importance.

    Returns -1 if `change_info1` is more important, 1 if `change_info2` is,
    0 if they are equally important. The tie-break rules below only apply to
    change infos of the same rank.
    """
    rank1 = rank(change_info1, priority_order)
    rank2 = rank(change_info2, priority_order)
    if rank1 != rank2:
        return -1 if rank1 < rank2 else 1

    if change_info1.category != change_info2.category:
        return 0

    # Between two themes, "switch" wins
    if isinstance(change_info1, ThemeChangeInfo) and isinstance(change_info2, ThemeChangeInfo):
        switch1 = change_info1.action == "switch"
        switch2 = change_info2.action == "switch"
        if switch1 == switch2:
            return 0
        return -1 if switch1 else 1

    # WPLANG goes after every other option, no matter the action
    if isinstance(change_info1, OptionChangeInfo) and isinstance(change_info2, OptionChangeInfo):
        lang1 = change_info1.entity_id == LANGUAGE_OPTION
        lang2 = change_info2.entity_id == LANGUAGE_OPTION
        if lang1 != lang2:
            return 1 if lang1 else -1

    # Generally, "create" takes precedence
    if isinstance(change_info1, EntityChangeInfo) and isinstance(change_info2, EntityChangeInfo):
        create1 = change_info1.action == "create"
        create2 = change_info2.action == "create"
        if create1 == create2:
            return 0
        return -1 if create1 else 1

    return 0


def sort_by_priority(
    change_infos: Iterable[ChangeInfo],
    priority_order: tuple[str, ...] = DEFAULT_PRIORITY_ORDER,
) -> list[ChangeInfo]:
    """Stable sort, most important change first."""
    key = cmp_to_key(lambda a, b: compare_by_priority(a, b, priority_order))
    return sorted(change_infos, key=key)


_DEFAULT_VERSION = object()


class ChangeInfoEnvelope:
    """Ordered bundle of change infos written as a single commit.

    `version` defaults to this package's version. Pass None explicitly for
    an envelope without a version (e.g. one decoded from a commit that has no
    version trailer).
    """

    def __init__(
        self,
        change_infos: Iterable[ChangeInfo],
        version: str | None | object = _DEFAULT_VERSION,
        *,
        priority_order: Iterable[str] = DEFAULT_PRIORITY_ORDER,
    ):
        self._change_infos = tuple(change_infos)
        if not self._change_infos:
            raise EmptyEnvelopeError()
        self.version: str | None = __version__ if version is _DEFAULT_VERSION else version  # type: ignore[assignment]
        self.priority_order = tuple(priority_order)

    def __repr__(self) -> str:
        return f"ChangeInfoEnvelope({list(self._change_infos)!r}, version={self.version!r})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ChangeInfoEnvelope):
            return NotImplemented
        return self._change_infos == other._change_infos and self.version == other.version

    def __hash__(self) -> int:
        return hash((self._change_infos, self.version))

    @property
    def change_infos(self) -> tuple[ChangeInfo, ...]:
        """Change infos in the order they were given (or found in the body)."""
        return self._change_infos

    def sorted_change_infos(self) -> list[ChangeInfo]:
        """Change infos ordered by priority. Computed on every call."""
        return sort_by_priority(self._change_infos, self.priority_order)

    def description(self) -> str:
        """Description of the most important change; used as the commit subject."""
        return self.sorted_change_infos()[0].description()

    def encode(self) -> tuple[str, str]:
        """Return (subject, body) of the commit message."""
        fragments = [change_info.to_fragment() for change_info in self.sorted_change_infos()]
        if self.version is not None:
            fragments.append(version_tag.format_version(self.version))
        return self.description(), FRAGMENT_SEPARATOR.join(fragments)

    def commit_message(self) -> CommitMessage:
        subject, body = self.encode()
        return CommitMessage(subject=subject, body=body)

    @classmethod
    def decode(
        cls,
        subject: str,
        body: str,
        *,
        matcher: ChangeInfoMatcher | None = None,
        priority_order: Iterable[str] = DEFAULT_PRIORITY_ORDER,
    ) -> ChangeInfoEnvelope:
        """Rebuild an envelope from a commit subject and body.

        The subject is informational only. Change infos keep the order in
        which they appear in the body; use `sorted_change_infos` for the
        priority order.

        Raises:
            MalformedEnvelopeError: the body is empty or holds only a version trailer
            UnroutableFragmentError: a fragment matches no change info type
            ChangeInfoParseError: a routed fragment is rejected by its type
        """
        matcher = matcher or default_matcher
        body = body.replace("\r\n", "\n")
        fragments = body.rstrip("\n").split(FRAGMENT_SEPARATOR) if body.strip() else []
        if not fragments:
            raise MalformedEnvelopeError("Commit body is empty")

        version: str | None = None
        if version_tag.looks_like_marker(fragments[-1]):
            marker = fragments.pop()
            version = version_tag.extract(marker)
            if version is None:
                logger.warning("Ignoring malformed version trailer: %r", marker)

        if not fragments:
            raise MalformedEnvelopeError("Commit body contains no change info", fragment=body, index=0)

        change_infos: list[ChangeInfo] = []
        for index, fragment in enumerate(fragments):
            change_info_type = matcher.resolve(fragment, index)
            try:
                change_infos.append(change_info_type.parse(fragment))
            except ChangeInfoParseError as e:
                raise ChangeInfoParseError(e.change_info_type, fragment, e.reason, index=index) from e

        logger.debug("Decoded %d change infos from commit %r (version %s)", len(change_infos), subject, version)
        return cls(change_infos, version, priority_order=priority_order)

    @classmethod
    def from_commit_message(
        cls,
        commit_message: CommitMessage,
        *,
        matcher: ChangeInfoMatcher | None = None,
        priority_order: Iterable[str] = DEFAULT_PRIORITY_ORDER,
    ) -> ChangeInfoEnvelope:
        return cls.decode(
            commit_message.subject,
            commit_message.body,
            matcher=matcher,
            priority_order=priority_order,
        )
