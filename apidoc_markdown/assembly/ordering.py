"""Sort groups and entries, then apply the project's declared group order.

Both the group ordering here and the table-of-contents ordering in
:mod:`apidoc_markdown.assembly.naming` look names up through
:func:`build_position_resolver`, so a name is "declared" for one exactly when
it is declared for the other.

Example
-------
>>> from apidoc_markdown.models import GroupNode
>>> nodes = [GroupNode("a"), GroupNode("c"), GroupNode("b")]
>>> [node.name for node in order_groups(nodes, ["B", "a"])]
['b', 'a', 'c']
"""

from __future__ import annotations

import typing as typ
import unicodedata

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from apidoc_markdown.models import GroupNode

T = typ.TypeVar("T")
PositionResolver = typ.Callable[[str], "int | None"]


# Primary weight classes, in the root collation order: whitespace and
# punctuation, then symbols, then digits, then letters.
_SPACE_OR_PUNCTUATION, _SYMBOL, _DIGIT, _LETTER = range(4)

CollationKey = tuple[tuple[tuple[int, str], ...], str, str]


def _character_class(ch: str) -> int:
    category = unicodedata.category(ch)
    if category.startswith("L"):
        return _LETTER
    if category.startswith("N"):
        return _DIGIT
    if category.startswith("S"):
        return _SYMBOL
    return _SPACE_OR_PUNCTUATION


def collation_key(text: str) -> CollationKey:
    """Return a locale-style sort key for ``text``.

    The primary comparison follows the root collation order of character
    classes: whitespace and punctuation sort before symbols, symbols before
    digits, and digits before letters (``"~x" < "a_b" < "a1" < "ab"``).
    Within a class, letters compare without regard to accents or case;
    accents and then case only break ties, with lower case sorting before
    upper case (``"a" < "A" < "b"``). The key does not depend on the process
    locale, which keeps generated output reproducible across machines.
    """
    folded = text.casefold()
    decomposed = unicodedata.normalize("NFKD", folded)
    primary = tuple(
        (_character_class(ch), ch)
        for ch in decomposed
        if not unicodedata.combining(ch)
    )
    return (primary, folded, text.swapcase())


def build_position_resolver(
    project_order: cabc.Iterable[str] | None,
) -> PositionResolver:
    """Return a case-insensitive lookup of names in ``project_order``.

    The returned callable maps a name to the 0-based index of its first
    case-insensitive match in ``project_order``, or ``None`` when the name is
    not declared.
    """
    table: dict[str, int] = {}
    for index, name in enumerate(project_order or ()):
        table.setdefault(name.lower(), index)

    def resolve(name: str) -> int | None:
        return table.get(name.lower())

    return resolve


def order_by_position(
    items: cabc.Iterable[T],
    key: cabc.Callable[[T], str],
    resolver: PositionResolver,
) -> list[T]:
    """Move declared items to the front, ordered by their declared position.

    Items whose name is not declared follow in their current relative order.
    The sort is stable, so items resolving to the same position keep their
    incoming order.
    """
    declared: list[tuple[int, T]] = []
    undeclared: list[T] = []
    for item in items:
        position = resolver(key(item))
        if position is None:
            undeclared.append(item)
        else:
            declared.append((position, item))
    declared.sort(key=lambda pair: pair[0])
    return [item for _, item in declared] + undeclared


def order_groups(
    nodes: cabc.Iterable[GroupNode], project_order: cabc.Sequence[str] | None = None
) -> list[GroupNode]:
    """Sort ``nodes`` for output and apply the optional project order.

    Parameters
    ----------
    nodes : Iterable[GroupNode]
        Deduplicated groups from
        :func:`~apidoc_markdown.assembly.grouping.group_records`.
    project_order : Sequence[str], optional
        Group names in the desired reading order, matched case-insensitively.

    Returns
    -------
    list[GroupNode]
        The same nodes, sorted by name, with every node's ``entries`` sorted by
        title in place. When ``project_order`` is given, declared groups come
        first in declared order, followed by the remaining groups in
        alphabetical order.
    """
    ordered = sorted(nodes, key=lambda node: collation_key(node.name))
    for node in ordered:
        node.entries.sort(key=lambda entry: collation_key(entry.title or ""))
    if not project_order:
        return ordered
    resolver = build_position_resolver(project_order)
    return order_by_position(ordered, lambda node: node.name, resolver)


__all__ = [
    "PositionResolver",
    "build_position_resolver",
    "collation_key",
    "order_by_position",
    "order_groups",
]
