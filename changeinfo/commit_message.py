"""
Commit message value type.

A commit message is a subject line plus a free-form body. Change infos store
their data in the body as ``Key: value`` lines ("tags"), one per line.
"""

from __future__ import annotations

from dataclasses import dataclass

TAG_SEPARATOR = ": "


def parse_tags(text: str) -> dict[str, str]:
    """Parse ``Key: value`` lines into an ordered dict.

    Lines without the separator are ignored. When a key repeats, the first
    occurrence wins. Values are kept verbatim apart from a trailing CR.
    """
    tags: dict[str, str] = {}
    for line in text.split("\n"):
        key, sep, value = line.partition(TAG_SEPARATOR)
        key = key.strip()
        if not sep or not key or " " in key:
            continue
        tags.setdefault(key, value.removesuffix("\r"))
    return tags


def format_tags(tags: dict[str, str | None]) -> str:
    """Render tags as ``Key: value`` lines, skipping None values."""
    return "\n".join(f"{key}{TAG_SEPARATOR}{value}" for key, value in tags.items() if value is not None)


@dataclass(frozen=True)
class CommitMessage:
    """Subject and body of a git commit message."""

    subject: str
    body: str = ""

    def get_tag(self, name: str) -> str | None:
        """Value of the first `name` tag in the body, or None."""
        return parse_tags(self.body).get(name)

    def to_text(self) -> str:
        """Full message as git stores it: subject, blank line, body."""
        if not self.body:
            return self.subject
        return f"{self.subject}\n\n{self.body}"

    @classmethod
    def from_text(cls, raw: str) -> CommitMessage:
        """Split a raw message on its first blank line.

        Windows line endings are normalized and trailing newlines dropped.
        """
        text = raw.replace("\r\n", "\n").strip("\n")
        subject, _, body = text.partition("\n\n")
        return cls(subject=subject.strip(), body=body)
