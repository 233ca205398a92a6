import tomllib
from pathlib import Path
from typing import List, Optional

from loguru import logger

from ..config import Settings
from ..errors import RegistryConfigError

UNQUALIFIED_SEARCH_KEY = "unqualified-search-registries"


def _load_conf(path: Path) -> Optional[List[str]]:
    try:
        with path.open("rb") as fh:
            data = tomllib.load(fh)
    except OSError as exc:
        raise RegistryConfigError(f"loading registries configuration {path}: {exc}") from exc
    except tomllib.TOMLDecodeError as exc:
        raise RegistryConfigError(f"parsing registries configuration {path}: {exc}") from exc

    if UNQUALIFIED_SEARCH_KEY not in data:
        return None
    registries = data[UNQUALIFIED_SEARCH_KEY]
    if not isinstance(registries, list) or not all(isinstance(r, str) for r in registries):
        raise RegistryConfigError(
            f"{path}: {UNQUALIFIED_SEARCH_KEY} must be a list of registry names"
        )
    return [r.strip() for r in registries]


def _conf_files(settings: Settings) -> List[Path]:
    files: List[Path] = []
    conf = Path(settings.registries_conf)
    if conf.is_file():
        files.append(conf)
    conf_dir = Path(settings.registries_conf_dir)
    if conf_dir.is_dir():
        files.extend(sorted(p for p in conf_dir.glob("*.conf") if p.is_file()))
    return files


def unqualified_search_registries(settings: Settings) -> List[str]:
    """Return the registries to query for names without an explicit registry.

    ``SEARCH_REGISTRIES`` wins over the configuration files. Otherwise the main
    registries.conf is read first and each drop-in file that sets the key
    replaces the list, in lexical order.
    """
    if settings.search_registries is not None:
        return list(settings.search_registries)

    registries: List[str] = []
    for path in _conf_files(settings):
        loaded = _load_conf(path)
        if loaded is not None:
            logger.debug(f"[registries] {path} sets {UNQUALIFIED_SEARCH_KEY}={loaded}")
            registries = loaded
    return registries
