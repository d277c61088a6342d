"""Immutable derivation chain of with_group / with_attrs calls.

Each derived handler holds one node of a persistent, parent-linked list.
Deriving allocates a single new node pointing at the current one; nodes are
never mutated, so handlers derived from a common parent share history
safely across threads. The chain is replayed oldest first at format time.
"""

from collections.abc import Callable, Iterable
from dataclasses import dataclass

from humanelog.core.models import Attr, as_attrs


@dataclass(frozen=True, slots=True)
class GroupPush:
    """Opens a group for every attribute recorded after it."""

    name: str


@dataclass(frozen=True, slots=True)
class AttrBatch:
    """Attributes recorded by one with_attrs call."""

    attrs: tuple[Attr, ...]


Frame = GroupPush | AttrBatch


@dataclass(frozen=True, slots=True)
class Chain:
    """A node in the derivation history. None is the empty chain."""

    frame: Frame
    parent: "Chain | None" = None


def with_attrs(chain: Chain | None, attrs: Iterable[Attr]) -> Chain | None:
    """Record a batch of attributes. Returns chain itself for an empty batch."""
    batch = as_attrs(attrs)
    if not batch:
        return chain
    return Chain(AttrBatch(batch), chain)


def with_group(chain: Chain | None, name: str) -> Chain | None:
    """Open a group. Returns chain itself for an empty name."""
    if not name:
        return chain
    return Chain(GroupPush(name), chain)


def frames(chain: Chain | None) -> list[Frame]:
    """List the frames of a chain in call order, oldest first."""
    collected: list[Frame] = []
    node = chain
    while node is not None:
        collected.append(node.frame)
        node = node.parent
    collected.reverse()
    return collected


def replay(
    chain: Chain | None,
    visit: Callable[[tuple[str, ...], Attr], None],
) -> tuple[str, ...]:
    """Replay recorded attributes in call order.

    Args:
        chain: The chain to replay.
        visit: Called with (group path, attribute) for every recorded
            attribute, under the groups opened before it was recorded.

    Returns:
        The group path opened by the whole chain, which applies to the
        event's own attributes.
    """
    groups: tuple[str, ...] = ()
    for frame in frames(chain):
        if isinstance(frame, GroupPush):
            groups = groups + (frame.name,)
            continue
        for attr in frame.attrs:
            visit(groups, attr)
    return groups
