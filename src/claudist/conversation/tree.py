"""Reply-tree reconstruction over transcript events.

Events point at their predecessor through ``parent_id``. Edits and retries
in a session create siblings, so the events of one transcript form a forest
rather than a single chain. These helpers rebuild that forest and pick
paths through it; the filter engine itself works on the flat list.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from datetime import datetime, timezone

from claudist.logging_config import get_logger
from claudist.models.event import TranscriptEvent

__all__ = [
    "ConversationNode",
    "build_conversation_tree",
    "flatten_conversation_tree",
    "get_most_recent_branch",
    "sort_by_timestamp",
]

logger = get_logger(__name__)


@dataclass
class ConversationNode:
    """An event together with the events that reply to it."""

    event: TranscriptEvent
    children: list[ConversationNode] = field(default_factory=list)


def build_conversation_tree(
    events: Sequence[TranscriptEvent],
) -> list[ConversationNode]:
    """Group events into reply trees.

    An event whose ``parent_id`` is empty, unknown, or its own id becomes a
    root. Roots and children keep their input order.

    Parent links that loop (A -> B -> A) would leave their events out of
    every tree. One event of each such loop is detached from its parent and
    appended to the roots, so every event stays reachable.

    Args:
        events: Events in transcript order.

    Returns:
        The root nodes.

    """
    nodes = {event.id: ConversationNode(event) for event in events}
    roots: list[ConversationNode] = []

    for event in events:
        node = nodes[event.id]
        parent = nodes.get(event.parent_id) if event.parent_id else None
        if parent is None or parent is node:
            roots.append(node)
        else:
            parent.children.append(node)

    reached = _reachable_ids(roots)
    for event in events:
        if event.id in reached:
            continue
        # Unreached events always have a parent; walking up ends inside the loop.
        node = nodes[event.id]
        walked: set[str] = set()
        while node.event.id not in walked:
            walked.add(node.event.id)
            node = nodes[node.event.parent_id]
        parent = nodes[node.event.parent_id]
        parent.children = [child for child in parent.children if child is not node]
        roots.append(node)
        reached |= _reachable_ids([node])
        logger.warning("conversation_cycle_broken", event_id=node.event.id)

    return roots


def _reachable_ids(roots: Sequence[ConversationNode]) -> set[str]:
    seen: set[str] = set()
    stack = list(roots)
    while stack:
        node = stack.pop()
        if node.event.id in seen:
            continue
        seen.add(node.event.id)
        stack.extend(node.children)
    return seen


def flatten_conversation_tree(
    roots: Sequence[ConversationNode],
) -> list[TranscriptEvent]:
    """Return the events of a forest in depth-first pre-order."""
    result: list[TranscriptEvent] = []
    # Explicit stack; reply chains routinely exceed the recursion limit.
    stack = list(reversed(roots))
    while stack:
        node = stack.pop()
        result.append(node.event)
        stack.extend(reversed(node.children))
    return result


def get_most_recent_branch(
    roots: Sequence[ConversationNode],
) -> list[TranscriptEvent]:
    """Follow the latest path through a forest.

    Starts at the last root and repeatedly descends into the last child.

    Args:
        roots: Forest built by build_conversation_tree.

    Returns:
        Events along the branch, root first. Empty for an empty forest.

    """
    if not roots:
        return []

    branch: list[TranscriptEvent] = []
    node: ConversationNode | None = roots[-1]
    while node is not None:
        branch.append(node.event)
        node = node.children[-1] if node.children else None
    return branch


_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def _timestamp_key(event: TranscriptEvent) -> datetime:
    text = event.timestamp
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"
    try:
        parsed = datetime.fromisoformat(text)
    except ValueError:
        return _EPOCH
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def sort_by_timestamp(events: Sequence[TranscriptEvent]) -> list[TranscriptEvent]:
    """Return a new list ordered by timestamp.

    The sort is stable. Unparseable timestamps sort as the Unix epoch.
    """
    return sorted(events, key=_timestamp_key)
