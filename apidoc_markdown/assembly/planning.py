"""Decide how many documents to render and which groups each one receives."""

from __future__ import annotations

import typing as typ

from apidoc_markdown.models import ArtifactPlan

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from apidoc_markdown.models import GroupNode

MAIN_ARTIFACT = "main"


def plan_artifacts(
    nodes: cabc.Sequence[GroupNode], *, multi: bool
) -> list[ArtifactPlan]:
    """Return the render plans for ``nodes``.

    In single-file mode one plan named ``"main"`` receives every group. In
    multi-file mode each group gets its own plan, named after the group and
    receiving a one-element sequence. Plans keep the order of ``nodes``, which
    later drives file naming and the table of contents.
    """
    if not multi:
        return [ArtifactPlan(logical_name=MAIN_ARTIFACT, data=tuple(nodes))]
    return [ArtifactPlan(logical_name=node.name, data=(node,)) for node in nodes]


__all__ = ["MAIN_ARTIFACT", "plan_artifacts"]
