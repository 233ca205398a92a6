from ..datasources.base import RegistryHit
from ..schemas import SearchFilter


def matches_star_filter(search_filter: SearchFilter, hit: RegistryHit) -> bool:
    return hit.get("star_count", 0) >= search_filter.stars


def matches_automated_filter(search_filter: SearchFilter, hit: RegistryHit) -> bool:
    if search_filter.is_automated is None:
        return True
    return bool(hit.get("is_automated")) == search_filter.is_automated


def matches_official_filter(search_filter: SearchFilter, hit: RegistryHit) -> bool:
    if search_filter.is_official is None:
        return True
    return bool(hit.get("is_official")) == search_filter.is_official


def matches(search_filter: SearchFilter, hit: RegistryHit) -> bool:
    return (
        matches_automated_filter(search_filter, hit)
        and matches_official_filter(search_filter, hit)
        and matches_star_filter(search_filter, hit)
    )
