import asyncio
from typing import Callable, List, NamedTuple, Optional

from loguru import logger

from ..config import Settings, get_settings
from ..datasources.base import RegistryClient
from ..errors import MultiRegistryError, RegistryQueryError, SearchTimeoutError
from ..schemas import SearchOptions, SearchResult
from .registries import unqualified_search_registries
from .searcher import RegistrySearcher
from .term_parser import resolve_registries


class RegistryOutcome(NamedTuple):
    results: List[SearchResult]
    error: Optional[RegistryQueryError] = None


class SearchService:
    """Fans a search out to every registry and merges the outcomes.

    At most ``search_max_parallel`` registries are queried at the same time.
    Results keep the order of the registry list. Per-registry failures are only
    raised, as a :class:`MultiRegistryError`, when no registry found anything.
    """

    def __init__(
        self,
        client: RegistryClient,
        settings: Optional[Settings] = None,
        registries_provider: Callable[[Settings], List[str]] = unqualified_search_registries,
    ):
        self.settings = settings or get_settings()
        self.searcher = RegistrySearcher(client, self.settings)
        self.registries_provider = registries_provider

    def _deadline(self, options: SearchOptions) -> Optional[float]:
        timeout = options.timeout if options.timeout is not None else self.settings.search_timeout
        if timeout is None:
            return None
        return asyncio.get_running_loop().time() + timeout

    @staticmethod
    def _remaining(deadline: float) -> float:
        return max(deadline - asyncio.get_running_loop().time(), 0)

    async def _acquire(self, permits: asyncio.Semaphore, deadline: Optional[float]) -> None:
        if deadline is None:
            await permits.acquire()
            return
        try:
            await asyncio.wait_for(permits.acquire(), self._remaining(deadline))
        except asyncio.TimeoutError as exc:
            raise SearchTimeoutError("search timed out waiting for a free registry slot") from exc

    async def _search_within(
        self, registry: str, term: str, options: SearchOptions, deadline: float
    ) -> List[SearchResult]:
        search = asyncio.ensure_future(self.searcher.search_one(registry, term, options))
        try:
            done, _ = await asyncio.wait({search}, timeout=self._remaining(deadline))
        finally:
            if not search.done():
                search.cancel()
                await asyncio.gather(search, return_exceptions=True)
        if not done:
            raise SearchTimeoutError("search timed out")
        return search.result()

    async def _query(
        self, registry: str, term: str, options: SearchOptions, deadline: Optional[float]
    ) -> RegistryOutcome:
        try:
            if deadline is None:
                results = await self.searcher.search_one(registry, term, options)
            else:
                results = await self._search_within(registry, term, options, deadline)
        except Exception as exc:
            error = RegistryQueryError(registry, exc)
        else:
            return RegistryOutcome(results)
        logger.warning(f"[search] {error}")
        return RegistryOutcome([], error)

    async def _run(
        self,
        permits: asyncio.Semaphore,
        outcomes: List[Optional[RegistryOutcome]],
        index: int,
        registry: str,
        term: str,
        options: SearchOptions,
        deadline: Optional[float],
    ) -> None:
        try:
            outcomes[index] = await self._query(registry, term, options, deadline)
        finally:
            permits.release()

    async def search(self, term: str, options: Optional[SearchOptions] = None) -> List[SearchResult]:
        options = options or SearchOptions()
        registries, term = resolve_registries(term, self.registries_provider(self.settings))
        logger.debug(f"Searching images matching term {term} at the following registries {registries}")

        deadline = self._deadline(options)
        permits = asyncio.Semaphore(self.settings.search_max_parallel)
        outcomes: List[Optional[RegistryOutcome]] = [None] * len(registries)
        tasks: List[asyncio.Task] = []
        try:
            for index, registry in enumerate(registries):
                await self._acquire(permits, deadline)
                tasks.append(
                    asyncio.create_task(
                        self._run(permits, outcomes, index, registry, term, options, deadline)
                    )
                )
            await asyncio.gather(*tasks)
        except BaseException:
            for task in tasks:
                task.cancel()
            await asyncio.gather(*tasks, return_exceptions=True)
            raise

        results: List[SearchResult] = []
        errors: List[RegistryQueryError] = []
        for outcome in outcomes:
            if outcome.error is not None:
                errors.append(outcome.error)
                continue
            results.extend(outcome.results)

        # Optimistically assume that one successfully searched registry
        # includes what the user is looking for.
        if results:
            if errors:
                logger.debug(f"[search] ignoring {len(errors)} registry errors, {len(results)} results found")
            return results
        if errors:
            raise MultiRegistryError(errors)
        return results
