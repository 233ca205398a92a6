from typing import List, Optional, Tuple


def split_term(term: str) -> Tuple[Optional[str], str]:
    """Split ``registry/rest`` into the registry and the remaining term.

    Everything before the first slash counts as a registry. The search term may
    hold arbitrary input such as wildcards, so no reference parsing happens here,
    which also means ``library/ubuntu`` is treated as registry ``library``.
    """
    registry, sep, rest = term.partition("/")
    if not sep:
        return None, term
    return registry, rest


def resolve_registries(term: str, configured: List[str]) -> Tuple[List[str], str]:
    registry, effective_term = split_term(term)
    registries = list(configured)
    if registry is not None:
        registries.append(registry)
    return registries, effective_term
