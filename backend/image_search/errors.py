"""Errors raised while searching registries.

Per-registry failures are collected into a :class:`MultiRegistryError`, which
only reaches the caller when no registry produced any result.
"""
from typing import List


class SearchError(Exception):
    """Base class for every search failure."""


class RegistryConfigError(SearchError):
    """The list of unqualified-search registries could not be resolved."""


class SearchTimeoutError(SearchError):
    """The search deadline passed."""


class InvalidReferenceError(SearchError):
    """A name does not resolve to a docker reference."""


class RepositoryTagsError(SearchError):
    """The tags of a repository could not be listed."""

    def __init__(self, cause: Exception):
        super().__init__(f"error getting repository tags: {cause}")
        self.cause = cause


class RegistryQueryError(SearchError):
    """A single registry failed; siblings are not affected."""

    def __init__(self, registry: str, error: Exception):
        super().__init__(f"{registry}: {error}")
        self.registry = registry
        self.error = error


class MultiRegistryError(SearchError):
    def __init__(self, errors: List[RegistryQueryError]):
        self.errors = list(errors)
        super().__init__(self._format())

    def _format(self) -> str:
        if len(self.errors) == 1:
            return f"1 error occurred:\n\t* {self.errors[0]}\n"
        lines = "\n".join(f"\t* {err}" for err in self.errors)
        return f"{len(self.errors)} errors occurred:\n{lines}\n"

    @property
    def registries(self) -> List[str]:
        return [err.registry for err in self.errors]
