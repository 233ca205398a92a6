from ..datasources.base import RegistryHit
from ..schemas import SearchResult

OK_MARKER = "[OK]"
DOCKER_HUB_INDEX = "docker.io"


def shorten_index(registry: str) -> str:
    """Keep the last two labels of a registry host, e.g. ``a.b.c.d`` -> ``c.d``."""
    labels = registry.split(".")
    if len(labels) > 2:
        return ".".join(labels[-2:])
    return registry


def truncate_description(
    description: str | None,
    trunc_length: int = 44,
    no_trunc: bool = False,
) -> str:
    text = (description or "").replace("\n", " ")
    if len(text) > trunc_length and not no_trunc:
        return text[:trunc_length] + "..."
    return text


def qualified_name(registry: str, index: str, hit_name: str) -> str:
    # unqualified Docker Hub names live in the implicit library/ namespace
    if index == DOCKER_HUB_INDEX and "/" not in hit_name:
        return f"{index}/library/{hit_name}"
    return f"{registry}/{hit_name}"


def format_hit(
    hit: RegistryHit,
    registry: str,
    index: str,
    no_trunc: bool = False,
    trunc_length: int = 44,
) -> SearchResult:
    name = hit.get("name", "")
    return SearchResult(
        index=index,
        name=qualified_name(registry, index, name),
        description=truncate_description(hit.get("description"), trunc_length, no_trunc),
        stars=hit.get("star_count", 0),
        official=OK_MARKER if hit.get("is_official") else "",
        automated=OK_MARKER if hit.get("is_automated") else "",
    )
