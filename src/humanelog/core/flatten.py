"""Flattening of nested attribute groups into dotted key/value pairs."""

from collections.abc import Callable, Iterable, Iterator

from humanelog.core.encoding.logfmt import DEFAULT_TIME_FORMAT, encode_value
from humanelog.core.models import Attr, Kind
from humanelog.core.ports import ReplaceAttr

Emit = Callable[[str, str], None]


def dotted_key(groups: tuple[str, ...], key: str) -> str:
    """Join the enclosing group names and the leaf key with dots."""
    if not groups:
        return key
    return ".".join(groups) + "." + key


def flatten(
    groups: tuple[str, ...],
    attrs: Iterable[Attr],
    emit: Emit,
    *,
    replace_attr: ReplaceAttr | None = None,
    time_format: str = DEFAULT_TIME_FORMAT,
) -> None:
    """Walk an attribute tree and emit one encoded pair per leaf.

    Groups are expanded depth first, in order. A group with no children is
    skipped entirely; a group with an empty key inlines its children. The
    rewrite hook sees every leaf together with the names of its enclosing
    groups; leaves whose key ends up empty are dropped, as are values that
    fail to encode.

    Args:
        groups: Group path the attributes live under, outermost first.
        attrs: Attributes to flatten, in order.
        emit: Called with (dotted_key, encoded_value) for each leaf.
        replace_attr: Optional rewrite hook.
        time_format: strftime layout for TIME values.
    """
    # Explicit stack of (group path, remaining siblings) so deeply nested
    # input cannot exhaust the interpreter's recursion limit.
    stack: list[tuple[tuple[str, ...], Iterator[Attr]]] = [(groups, iter(attrs))]
    while stack:
        path, remaining = stack[-1]
        attr = next(remaining, None)
        if attr is None:
            stack.pop()
            continue

        value = attr.value.resolve()
        if value.kind is Kind.GROUP:
            children = value.group()
            if not children:
                continue
            child_path = path + (attr.key,) if attr.key else path
            stack.append((child_path, iter(children)))
            continue

        leaf: Attr | None = attr if value is attr.value else Attr(attr.key, value)
        if replace_attr is not None:
            rewritten = replace_attr(path, leaf)
            # Only a value the hook swapped in still needs resolving.
            if rewritten is not None and rewritten.value is not value:
                value = rewritten.value.resolve()
            leaf = rewritten
        if leaf is None or not leaf.key:
            continue

        encoded = encode_value(value, time_format)
        if encoded is None:
            continue
        emit(dotted_key(path, leaf.key), encoded)
