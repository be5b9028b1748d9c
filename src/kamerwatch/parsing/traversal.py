"""Sibling traversal for lookups the DOM hierarchy does not express."""
from __future__ import annotations

from typing import Callable, Iterator, List, Optional

from bs4 import Tag

TagPredicate = Callable[[Tag], bool]


def following_tags(start: Tag) -> Iterator[Tag]:
    """Yield the element siblings after ``start`` (text nodes are skipped)."""

    for sibling in start.next_siblings:
        if isinstance(sibling, Tag):
            yield sibling


def walk_forward(
    start: Tag,
    predicate: TagPredicate,
    *,
    limit: Optional[int] = None,
    stop: Optional[TagPredicate] = None,
) -> List[Tag]:
    """Collect up to ``limit`` tags matching ``predicate`` after ``start``.

    The walk follows siblings only and ends at the first tag satisfying
    ``stop`` (that tag is not collected).
    """

    matches: List[Tag] = []
    for tag in following_tags(start):
        if stop is not None and stop(tag):
            break
        if predicate(tag):
            matches.append(tag)
            if limit is not None and len(matches) >= limit:
                break
    return matches


def walk_forward_from_ancestors(
    start: Tag,
    predicate: TagPredicate,
    *,
    limit: Optional[int] = None,
    stop: Optional[TagPredicate] = None,
) -> List[Tag]:
    """Like :func:`walk_forward`, climbing ancestors until a level yields matches.

    The anchor text can sit at any nesting depth while the tags we are after
    are siblings of one of its ancestors.
    """

    node: Optional[Tag] = start
    while node is not None and node.name not in ("body", "html", "[document]"):
        matches = walk_forward(node, predicate, limit=limit, stop=stop)
        if matches:
            return matches
        node = node.parent
    return []


__all__ = ["TagPredicate", "following_tags", "walk_forward", "walk_forward_from_ancestors"]
