from typing import List, Optional

from loguru import logger

from ..config import Settings, get_settings
from ..datasources.base import ConnectionConfig, ImageReference, RegistryClient
from ..datasources.references import DOCKER_TRANSPORT
from ..errors import InvalidReferenceError, RepositoryTagsError
from ..schemas import SearchOptions, SearchResult
from .filters import matches
from .formatter import format_hit, shorten_index

DOCKER_PREFIX = "docker://"


def retained_count(total: int, limit: int, max_queries: int = 25) -> int:
    """Number of raw items to keep out of ``total`` returned ones.

    Without an explicit limit the output is capped at ``max_queries``; a
    positive ``limit`` replaces that cap but never exceeds what was returned.
    """
    count = min(max_queries, total)
    if limit > 0:
        count = min(limit, total)
    return count


class RegistrySearcher:
    """Queries a single registry, either for repositories or for the tags of one image."""

    def __init__(self, client: RegistryClient, settings: Optional[Settings] = None):
        self.client = client
        self.settings = settings or get_settings()

    def request_limit(self, options: SearchOptions) -> int:
        if options.limit > 0:
            return options.limit
        return self.settings.search_max_queries

    async def search_one(self, registry: str, term: str, options: SearchOptions) -> List[SearchResult]:
        config = ConnectionConfig.from_options(self.settings, options)
        if options.list_tags:
            return await self.search_tags(config, registry, term, options)

        hits = await self.client.search_registry(
            config, registry, term, self.request_limit(options)
        )
        index = shorten_index(registry)
        count = retained_count(len(hits), options.limit, self.settings.search_max_queries)

        results: List[SearchResult] = []
        for hit in hits[:count]:
            if not matches(options.filter, hit):
                logger.debug(f"[search] {registry}: {hit.get('name')} does not match the filter")
                continue
            results.append(
                format_hit(
                    hit,
                    registry,
                    index,
                    no_trunc=options.no_trunc,
                    trunc_length=self.settings.search_trunc_length,
                )
            )
        logger.debug(f"[search] {registry}: {len(results)} of {len(hits)} hits kept")
        return results

    def resolve_tag_reference(self, registry: str, term: str) -> ImageReference:
        name = f"{registry}/{term}"
        try:
            reference = self.client.parse_reference(name)
        except (InvalidReferenceError, ValueError):
            try:
                reference = self.client.parse_reference(f"{DOCKER_PREFIX}{name}")
            except (InvalidReferenceError, ValueError) as exc:
                raise InvalidReferenceError(f'reference "{term}" must be a docker reference') from exc
        else:
            if reference.transport_name != DOCKER_TRANSPORT:
                raise InvalidReferenceError(f'reference "{term}" must be a docker reference')
        return reference

    async def search_tags(
        self, config: ConnectionConfig, registry: str, term: str, options: SearchOptions
    ) -> List[SearchResult]:
        reference = self.resolve_tag_reference(registry, term)
        try:
            tags = await self.client.list_repository_tags(config, reference)
        except Exception as exc:
            raise RepositoryTagsError(exc) from exc

        count = retained_count(len(tags), options.limit, self.settings.search_max_queries)
        name = reference.canonical_name
        logger.debug(f"[tags] {name}: {count} of {len(tags)} tags kept")
        return [SearchResult(name=name, tag=tag) for tag in tags[:count]]
