"""Container resolution: which list, project, or area a request refers to.

Two lookups exist. Listing by an arbitrary name produces an ordered chain of
candidate sources that the script tries one after another. Attaching a new or
moved to-do picks exactly one target from whatever hints were supplied.
"""

from __future__ import annotations

from typing import Sequence

from things_cli.constants import (
    ATTACH_PRECEDENCE,
    CONTAINER_AREA,
    CONTAINER_AREA_ID,
    CONTAINER_LIST,
    CONTAINER_PROJECT,
    CONTAINER_PROJECT_ID,
    NAMED_LISTS,
    SCRIPT_INDENT,
)
from things_cli.escaping import quote
from things_cli.models import ContainerRef

_SPECIFIER_PREFIXES = {
    CONTAINER_LIST: "list",
    CONTAINER_PROJECT_ID: "project id",
    CONTAINER_PROJECT: "project",
    CONTAINER_AREA_ID: "area id",
    CONTAINER_AREA: "area",
}


def resolve_list_sources(container: str, fallback_order: Sequence[str]) -> tuple[ContainerRef, ...]:
    """Return the sources to try for ``container``, most specific first.

    A named list never falls back to projects or areas.
    """
    if container in NAMED_LISTS:
        return (ContainerRef(CONTAINER_LIST, container),)
    return tuple(ContainerRef(kind, container) for kind in fallback_order)


def resolve_attachment(
    *,
    list_name: str | None = None,
    project_id: str | None = None,
    project: str | None = None,
    area_id: str | None = None,
    area: str | None = None,
) -> ContainerRef | None:
    """Pick the first supplied hint in precedence order; the others are ignored."""
    hints = {
        CONTAINER_LIST: list_name,
        CONTAINER_PROJECT_ID: project_id,
        CONTAINER_PROJECT: project,
        CONTAINER_AREA_ID: area_id,
        CONTAINER_AREA: area,
    }
    for kind in ATTACH_PRECEDENCE:
        value = hints[kind]
        if value:
            return ContainerRef(kind, value)
    return None


def container_specifier(ref: ContainerRef) -> str:
    try:
        prefix = _SPECIFIER_PREFIXES[ref.kind]
    except KeyError:
        raise ValueError(f"unknown container kind: {ref.kind!r}") from None
    return f"{prefix} {quote(ref.value)}"


def render_source_fallback(
    sources: Sequence[ContainerRef],
    target_var: str,
    collection: str = "to dos",
    depth: int = 1,
) -> list[str]:
    """Render nested ``try`` blocks assigning the first source that resolves.

    The last source is left unguarded so its error reaches the caller.
    """
    if not sources:
        raise ValueError("at least one container source is required")
    pad = SCRIPT_INDENT * depth
    first, rest = sources[0], sources[1:]
    assignment = f"{pad}set {target_var} to {collection} of {container_specifier(first)}"
    if not rest:
        return [assignment]
    return [
        f"{pad}try",
        SCRIPT_INDENT + assignment,
        f"{pad}on error",
        *render_source_fallback(rest, target_var, collection, depth + 1),
        f"{pad}end try",
    ]
