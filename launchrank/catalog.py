import json
from collections.abc import Iterable
from importlib import resources
from pathlib import Path

import yaml
from pydantic import ValidationError

from launchrank.logging import get_logger
from launchrank.models import Entry

_logger = get_logger(__name__)

CATALOG_SUFFIXES = frozenset({".yaml", ".yml", ".json"})


class CatalogError(Exception):
    pass


def default_catalog_path() -> Path:
    return Path(str(resources.files("launchrank") / "data" / "catalog.yaml"))


def _read_raw(path: Path) -> object:
    if path.suffix.lower() not in CATALOG_SUFFIXES:
        raise CatalogError(f"Unsupported catalog format: {path.suffix or path.name}")
    try:
        content = path.read_text(encoding="utf-8")
    except OSError as e:
        raise CatalogError(f"Failed to read catalog {path}: {e}") from e
    try:
        if path.suffix.lower() == ".json":
            return json.loads(content)
        return yaml.safe_load(content)
    except (json.JSONDecodeError, yaml.YAMLError) as e:
        raise CatalogError(f"Malformed catalog {path}: {e}") from e


def parse_entries(raw: object, origin: str = "<catalog>") -> list[Entry]:
    if raw is None:
        return []
    if not isinstance(raw, list):
        raise CatalogError(f"Catalog {origin} must be a list of entries")

    entries: list[Entry] = []
    for index, item in enumerate(raw):
        if not isinstance(item, dict):
            _logger.warning("Skipping non-mapping entry #%d in %s", index, origin)
            continue
        try:
            entries.append(Entry.model_validate(item))
        except ValidationError as e:
            _logger.warning("Skipping invalid entry #%d in %s", index, origin, errors=e.error_count())
    return entries


def load_catalog(path: Path) -> list[Entry]:
    entries = parse_entries(_read_raw(path), origin=str(path))
    _logger.info("Loaded %d catalog entries from %s", len(entries), path)
    return entries


def is_supported(entry: Entry, build: int) -> bool:
    if entry.introduced_in_build is not None and entry.introduced_in_build > build:
        return False
    if entry.deprecated_in_build is not None and entry.deprecated_in_build <= build:
        return False
    return True


def filter_unsupported(entries: Iterable[Entry], build: int | None) -> list[Entry]:
    """Drop entries not available on the given OS build. `None` keeps everything."""
    entries = list(entries)
    if build is None:
        return entries
    kept = [entry for entry in entries if is_supported(entry, build)]
    if dropped := len(entries) - len(kept):
        _logger.debug("Filtered %d entries unsupported on build %d", dropped, build)
    return kept
