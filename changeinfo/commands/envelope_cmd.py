"""Envelope CLI commands: decode, encode and show the priority table."""

from __future__ import annotations

import json
from typing import Any

from rich.console import Console
from rich.table import Table

from ..changes import CHANGE_INFO_TYPES, change_info_from_dict
from ..commit_message import CommitMessage
from ..config import ChangeInfoConfig
from ..envelope import ChangeInfoEnvelope
from ..errors import ChangeInfoError, MalformedEnvelopeError


def run_decode(raw_message: str, config: ChangeInfoConfig, *, output_json: bool = False) -> int:
    console = Console()
    err = Console(stderr=True)

    message = CommitMessage.from_text(raw_message)
    try:
        envelope = ChangeInfoEnvelope.from_commit_message(message, priority_order=config.priority_order)
    except MalformedEnvelopeError as e:
        err.print(f"Cannot decode commit message: {e}", style="bold red")
        if e.fragment is not None:
            err.print(e.fragment, style="dim", markup=False, highlight=False)
        return 1
    except ChangeInfoError as e:
        err.print(f"Cannot decode commit message: {e}", style="bold red")
        return 1

    ranked = envelope.sorted_change_infos()
    if output_json:
        data: dict[str, Any] = {
            "subject": message.subject,
            "description": envelope.description(),
            "version": envelope.version,
            "changes": [c.to_dict() for c in ranked],
        }
        print(json.dumps(data, indent=2))
        return 0

    table = Table(title=message.subject or envelope.description())
    table.add_column("#", justify="right", style="dim")
    table.add_column("category", style="magenta")
    table.add_column("action")
    table.add_column("entity_id", style="cyan")
    table.add_column("description")
    for i, change_info in enumerate(ranked, start=1):
        table.add_row(
            str(i),
            change_info.category,
            change_info.action or "",
            change_info.entity_id or "",
            change_info.description(),
        )
    console.print(table)
    console.print(f"Version: {envelope.version or '(none)'}", style="dim")
    return 0


def run_encode(raw_json: str, config: ChangeInfoConfig, *, version: str | None = None) -> int:
    err = Console(stderr=True)

    try:
        data = json.loads(raw_json)
    except json.JSONDecodeError as e:
        err.print(f"Invalid JSON: {e}", style="bold red")
        return 1
    if isinstance(data, dict):
        data = [data]
    if not isinstance(data, list) or not all(isinstance(item, dict) for item in data):
        err.print("Expected a JSON object or a list of objects", style="bold red")
        return 1

    try:
        change_infos = [change_info_from_dict(item) for item in data]
        envelope = ChangeInfoEnvelope(
            change_infos,
            version or config.version,
            priority_order=config.priority_order,
        )
    except ChangeInfoError as e:
        err.print(str(e), style="bold red")
        return 1

    print(envelope.commit_message().to_text())
    return 0


def run_priorities(config: ChangeInfoConfig) -> int:
    console = Console()

    table = Table(title="Change info priority order")
    table.add_column("rank", justify="right", style="dim")
    table.add_column("category", style="magenta")
    table.add_column("type")
    for i, category in enumerate(config.priority_order):
        cls = CHANGE_INFO_TYPES.get(category)
        table.add_row(str(i), category, cls.__name__ if cls else "(unknown)")

    unlisted = [c for c in sorted(CHANGE_INFO_TYPES) if c not in config.priority_order]
    for category in unlisted:
        table.add_row(str(len(config.priority_order)), category, CHANGE_INFO_TYPES[category].__name__)

    console.print(table)
    if config.source is not None:
        console.print(f"Loaded from {config.source}", style="dim")
    return 0
