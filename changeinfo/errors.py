"""
Exception types raised by the change info codec.

All errors derive from ValueError: they describe malformed or contradictory
data, never transient conditions, so none of them are worth retrying.
"""

from __future__ import annotations


class ChangeInfoError(ValueError):
    """Base class for change info errors."""


class EmptyEnvelopeError(ChangeInfoError):
    """An envelope was constructed without any change info."""

    def __init__(self, message: str = "ChangeInfoEnvelope requires at least one change info") -> None:
        super().__init__(message)


class MalformedEnvelopeError(ChangeInfoError):
    """A commit body could not be decoded into an envelope.

    `fragment` and `index` point at the offending body fragment when the
    failure is tied to one (index is 0-based, in body order).
    """

    def __init__(self, message: str, *, fragment: str | None = None, index: int | None = None) -> None:
        super().__init__(message)
        self.fragment = fragment
        self.index = index


class UnroutableFragmentError(MalformedEnvelopeError):
    """No change info type recognizes a body fragment."""

    def __init__(self, fragment: str, index: int | None = None) -> None:
        first_line = fragment.split("\n", 1)[0]
        where = f" at index {index}" if index is not None else ""
        super().__init__(
            f"No change info type matches fragment{where}: {first_line!r}",
            fragment=fragment,
            index=index,
        )


class ChangeInfoParseError(ChangeInfoError):
    """A fragment routed to a change info type could not be parsed by it.

    Routing already accepted the fragment, so this is a broken contract
    between the matcher and the type rather than bad input.
    """

    def __init__(self, change_info_type: str, fragment: str, reason: str, *, index: int | None = None) -> None:
        where = f" at index {index}" if index is not None else ""
        super().__init__(f"{change_info_type} cannot parse fragment{where} ({reason}): {fragment!r}")
        self.change_info_type = change_info_type
        self.fragment = fragment
        self.reason = reason
        self.index = index


class ConfigError(ChangeInfoError):
    """The configuration file is invalid."""
