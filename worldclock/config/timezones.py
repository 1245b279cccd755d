"""Catalog of every known timezone, enriched for search and selection."""
from __future__ import annotations

import locale
import logging
import unicodedata
from dataclasses import dataclass
from functools import lru_cache
from typing import Callable, Iterable, Optional, Sequence
from zoneinfo import available_timezones

import pytz

logger = logging.getLogger("worldclock.catalog")

CollationKey = Callable[[str], object]
ZoneIdSource = Callable[[], Iterable[str]]


class EnumerationUnavailable(RuntimeError):
    """The runtime cannot enumerate its timezones."""


@dataclass(frozen=True)
class ZoneCatalogEntry:
    id: str
    city: str
    country: Optional[str] = None


def city_from_zone_id(zone_id: str) -> str:
    """``America/Argentina/Buenos_Aires`` -> ``Buenos Aires``."""
    return zone_id.rsplit("/", 1)[-1].replace("_", " ")


def runtime_zone_ids() -> list[str]:
    """Zones the interpreter's tz database exposes."""
    try:
        zone_ids = available_timezones()
    except Exception as exc:
        raise EnumerationUnavailable("zoneinfo could not enumerate timezones") from exc
    if not zone_ids:
        raise EnumerationUnavailable("zoneinfo returned no timezones")
    return sorted(zone_ids)


def bundled_zone_ids() -> list[str]:
    """IANA ids shipped with pytz; always available."""
    return list(pytz.all_timezones)


DEFAULT_SOURCES: tuple[ZoneIdSource, ...] = (runtime_zone_ids, bundled_zone_ids)


def load_zone_ids(sources: Sequence[ZoneIdSource] | None = None) -> list[str]:
    """Return ids from the first source that can enumerate them.

    Sources are tried in order; the last one is expected to always succeed.
    """
    sources = DEFAULT_SOURCES if sources is None else tuple(sources)
    for source in sources:
        try:
            zone_ids = list(source())
        except EnumerationUnavailable:
            logger.debug("Zone source %s unavailable, falling back", getattr(source, "__name__", source), exc_info=True)
            continue
        if zone_ids:
            return zone_ids
    raise EnumerationUnavailable("No zone source produced any timezones")


@lru_cache(maxsize=1)
def zone_countries() -> dict[str, str]:
    """Map zone id -> country name from the bundled zone.tab metadata."""
    countries: dict[str, str] = {}
    for code, zone_ids in pytz.country_timezones.items():
        name = pytz.country_names.get(code)
        if not name:
            continue
        for zone_id in zone_ids:
            countries.setdefault(zone_id, name)
    return countries


def default_collation(value: str) -> tuple[str, str]:
    """Accent and case insensitive ordering with the raw value as tie-breaker.

    Locale-independent, so the catalog order is the same on every host; pass
    ``locale_collation`` where the process locale should decide.
    """
    decomposed = unicodedata.normalize("NFKD", value)
    folded = "".join(ch for ch in decomposed if not unicodedata.combining(ch)).casefold()
    return folded, value


def locale_collation(value: str) -> str:
    """Ordering according to the process ``LC_COLLATE`` locale."""
    return locale.strxfrm(value)


def build_zone_catalog(
    zone_ids: Iterable[str],
    *,
    countries: dict[str, str] | None = None,
    collation: CollationKey | None = None,
) -> list[ZoneCatalogEntry]:
    """Enrich ``zone_ids`` with city and country and sort them by city."""
    countries = zone_countries() if countries is None else countries
    collation = collation or default_collation
    entries = [
        ZoneCatalogEntry(id=zone_id, city=city_from_zone_id(zone_id), country=countries.get(zone_id))
        for zone_id in zone_ids
    ]
    entries.sort(key=lambda entry: (collation(entry.city), entry.id))
    return entries


@lru_cache(maxsize=8)
def get_all_zones(collation: CollationKey | None = None) -> tuple[ZoneCatalogEntry, ...]:
    """Full catalog, built once per process for each collation.

    The cache is keyed on the collation function, not on the locale it reads.
    Call ``get_all_zones.cache_clear()`` after ``locale.setlocale`` when sorting
    with ``locale_collation``.
    """
    zone_ids = load_zone_ids()
    catalog = tuple(build_zone_catalog(zone_ids, collation=collation))
    logger.info("Built timezone catalog with %d zones", len(catalog))
    return catalog


def search_zones(
    query: str,
    entries: Sequence[ZoneCatalogEntry] | None = None,
    *,
    limit: int | None = None,
) -> list[ZoneCatalogEntry]:
    """Case-insensitive match on zone id, city or country; blank returns everything."""
    entries = get_all_zones() if entries is None else entries
    term = query.strip().lower()
    if term:
        matches = [
            entry
            for entry in entries
            if term in entry.id.lower()
            or term in entry.city.lower()
            or term in (entry.country or "").lower()
        ]
    else:
        matches = list(entries)
    if limit is not None:
        return matches[:limit]
    return matches
