"""Group, order, plan, and name apiDoc documentation artifacts."""

from .grouping import MissingTitleError, find_untitled, group_records
from .naming import build_toc, format_title, name_artifacts, toc_entry, toc_order
from .ordering import (
    build_position_resolver,
    collation_key,
    order_by_position,
    order_groups,
)
from .planning import MAIN_ARTIFACT, plan_artifacts

__all__ = [
    "MAIN_ARTIFACT",
    "MissingTitleError",
    "build_position_resolver",
    "build_toc",
    "collation_key",
    "find_untitled",
    "format_title",
    "group_records",
    "name_artifacts",
    "order_by_position",
    "order_groups",
    "plan_artifacts",
    "toc_entry",
    "toc_order",
]
