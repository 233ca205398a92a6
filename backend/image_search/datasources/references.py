"""Parsing of transport-qualified image names such as ``docker://quay.io/foo``.

Only the ``docker`` transport gets a normalized canonical name; the other
transports are recognized so callers can reject them with a clear message.
"""
import re
from dataclasses import dataclass

from ..errors import InvalidReferenceError

DOCKER_TRANSPORT = "docker"
DEFAULT_DOMAIN = "docker.io"
LEGACY_DEFAULT_DOMAIN = "index.docker.io"
OFFICIAL_NAMESPACE = "library"

KNOWN_TRANSPORTS = {
    DOCKER_TRANSPORT,
    "oci",
    "oci-archive",
    "dir",
    "docker-archive",
    "docker-daemon",
    "containers-storage",
}

_PATH_COMPONENT = re.compile(r"^[a-z0-9]+(?:(?:[._]|__|-+)[a-z0-9]+)*$")
_DOMAIN = re.compile(
    r"^(?:[a-zA-Z0-9](?:[a-zA-Z0-9-]*[a-zA-Z0-9])?)"
    r"(?:\.(?:[a-zA-Z0-9](?:[a-zA-Z0-9-]*[a-zA-Z0-9])?))*(?::[0-9]+)?$"
)
_TAG = re.compile(r"^[\w][\w.-]{0,127}$")


@dataclass(frozen=True)
class DockerReference:
    domain: str
    path: str
    tag: str = ""
    digest: str = ""

    @property
    def transport_name(self) -> str:
        return DOCKER_TRANSPORT

    @property
    def canonical_name(self) -> str:
        return f"{self.domain}/{self.path}"


@dataclass(frozen=True)
class TransportReference:
    """A reference of a non-docker transport, kept verbatim."""

    transport: str
    reference: str

    @property
    def transport_name(self) -> str:
        return self.transport

    @property
    def canonical_name(self) -> str:
        return self.reference


def _split_domain(name: str) -> tuple[str, str]:
    first, sep, rest = name.partition("/")
    if not sep or ("." not in first and ":" not in first and first != "localhost"):
        return DEFAULT_DOMAIN, name
    if first == LEGACY_DEFAULT_DOMAIN:
        first = DEFAULT_DOMAIN
    return first, rest


def parse_docker_name(name: str) -> DockerReference:
    """Normalize a docker image name into domain, path, tag and digest."""
    if not name:
        raise InvalidReferenceError("repository name must have at least one component")
    remainder, _, digest = name.partition("@")
    tag = ""
    last_slash = remainder.rfind("/")
    colon = remainder.rfind(":")
    if colon > last_slash:
        remainder, tag = remainder[:colon], remainder[colon + 1:]
        if not _TAG.match(tag):
            raise InvalidReferenceError(f"invalid tag {tag!r} in {name!r}")

    domain, path = _split_domain(remainder)
    if not _DOMAIN.match(domain):
        raise InvalidReferenceError(f"invalid domain {domain!r} in {name!r}")
    if domain == DEFAULT_DOMAIN and "/" not in path:
        path = f"{OFFICIAL_NAMESPACE}/{path}"
    for component in path.split("/"):
        if not _PATH_COMPONENT.match(component):
            if component.lower() != component:
                raise InvalidReferenceError(
                    f"repository name must be lowercase: {name!r}"
                )
            raise InvalidReferenceError(f"invalid reference format: {name!r}")
    return DockerReference(domain=domain, path=path, tag=tag, digest=digest)


def parse_image_name(name: str):
    """Parse ``transport:reference`` into an image reference."""
    transport, sep, reference = name.partition(":")
    if not sep:
        raise InvalidReferenceError(
            f'invalid image name "{name}", expected colon-separated transport:reference'
        )
    if transport not in KNOWN_TRANSPORTS:
        raise InvalidReferenceError(
            f'invalid image name "{name}", unknown transport "{transport}"'
        )
    if transport != DOCKER_TRANSPORT:
        if not reference:
            raise InvalidReferenceError(f'invalid image name "{name}", empty reference')
        return TransportReference(transport=transport, reference=reference)
    if not reference.startswith("//"):
        raise InvalidReferenceError(
            f'invalid image name "{name}", docker reference must start with "//"'
        )
    return parse_docker_name(reference[2:])


class ReferenceParserMixin:
    """Default ``parse_reference`` for registry clients."""

    def parse_reference(self, name: str):
        return parse_image_name(name)
