from dataclasses import dataclass
from typing import List, Optional, Protocol

from ..config import Settings


class RegistryHit(dict):
    """Lightweight mapping to hold one raw registry search hit."""

    name: str
    description: Optional[str]
    star_count: int
    is_official: bool
    is_automated: bool


class ImageReference(Protocol):
    @property
    def transport_name(self) -> str:
        ...

    @property
    def canonical_name(self) -> str:
        ...


@dataclass(frozen=True)
class ConnectionConfig:
    """Connection details handed to the registry client as-is."""

    auth_file: Optional[str] = None
    credentials: Optional[str] = None
    insecure_skip_tls_verify: Optional[bool] = None

    @classmethod
    def from_options(cls, settings: Settings, options) -> "ConnectionConfig":
        insecure = settings.insecure_skip_tls_verify
        if options.insecure_skip_tls_verify is not None:
            insecure = options.insecure_skip_tls_verify
        return cls(
            auth_file=options.auth_file or settings.auth_file,
            credentials=options.credentials,
            insecure_skip_tls_verify=insecure,
        )


class RegistryClient(Protocol):
    async def search_registry(
        self, config: ConnectionConfig, registry: str, term: str, limit: int
    ) -> List[RegistryHit]:
        ...

    async def list_repository_tags(
        self, config: ConnectionConfig, reference: ImageReference
    ) -> List[str]:
        ...

    def parse_reference(self, name: str) -> ImageReference:
        ...
