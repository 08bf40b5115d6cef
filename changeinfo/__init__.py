"""
Change infos for a versioned WordPress site.

Every tracked change (a post edited, a plugin activated, WordPress upgraded,
...) is described by a change info. One commit carries one or more of them,
bundled in a ChangeInfoEnvelope that is encoded into, and decoded from, the
commit message.

Components:
- changes: change info types, one per category of tracked change
- matcher: routes a commit body fragment to the type that parses it
- envelope: priority ordering plus commit message encode/decode
- version_tag: the ``X-VP-Version`` trailer
- config: TOML configuration (priority order, default version)
"""

from ._version import __version__
from .changes import ChangeInfo, EntityChangeInfo, change_info_from_dict
from .commit_message import CommitMessage
from .envelope import DEFAULT_PRIORITY_ORDER, ChangeInfoEnvelope, compare_by_priority, sort_by_priority
from .errors import (
    ChangeInfoError,
    ChangeInfoParseError,
    ConfigError,
    EmptyEnvelopeError,
    MalformedEnvelopeError,
    UnroutableFragmentError,
)
from .matcher import ChangeInfoMatcher

__all__ = [
    "__version__",
    "ChangeInfo",
    "ChangeInfoEnvelope",
    "ChangeInfoError",
    "ChangeInfoMatcher",
    "ChangeInfoParseError",
    "CommitMessage",
    "ConfigError",
    "DEFAULT_PRIORITY_ORDER",
    "EmptyEnvelopeError",
    "EntityChangeInfo",
    "MalformedEnvelopeError",
    "UnroutableFragmentError",
    "change_info_from_dict",
    "compare_by_priority",
    "sort_by_priority",
]
