import asyncio

import pytest

from image_search.config import Settings
from image_search.datasources.base import RegistryHit
from image_search.datasources.references import ReferenceParserMixin


def make_hit(name, description="", stars=0, official=False, automated=False):
    return RegistryHit(
        {
            "name": name,
            "description": description,
            "star_count": stars,
            "is_official": official,
            "is_automated": automated,
        }
    )


class FakeRegistryClient(ReferenceParserMixin):
    """In-memory registry client that records calls and in-flight queries."""

    def __init__(self, hits=None, tags=None, errors=None, delays=None):
        self.hits = hits or {}
        self.tags = tags or {}
        self.errors = errors or {}
        self.delays = delays or {}
        self.calls = []
        self.configs = []
        self.requested_limits = {}
        self.in_flight = 0
        self.max_in_flight = 0

    async def _enter(self, key, config):
        self.calls.append(key)
        self.configs.append(config)
        self.in_flight += 1
        self.max_in_flight = max(self.max_in_flight, self.in_flight)
        await asyncio.sleep(self.delays.get(key, 0))

    async def search_registry(self, config, registry, term, limit):
        self.requested_limits[registry] = limit
        try:
            await self._enter(registry, config)
            if registry in self.errors:
                raise self.errors[registry]
            return list(self.hits.get(registry, []))
        finally:
            self.in_flight -= 1

    async def list_repository_tags(self, config, reference):
        name = reference.canonical_name
        try:
            await self._enter(name, config)
            if name in self.errors:
                raise self.errors[name]
            return list(self.tags.get(name, []))
        finally:
            self.in_flight -= 1


@pytest.fixture
def settings(tmp_path):
    return Settings(
        search_registries=[],
        registries_conf=str(tmp_path / "registries.conf"),
        registries_conf_dir=str(tmp_path / "registries.conf.d"),
    )


@pytest.fixture
def registry_settings():
    def _build(registries, **kwargs):
        return Settings(search_registries=list(registries), **kwargs)

    return _build
