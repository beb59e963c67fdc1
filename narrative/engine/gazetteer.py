"""Static reference data: countries with textual variants and the geo
datasets (hotspots, conflict zones, strategic infrastructure).

Datasets are YAML lists under ``narrative/data``.  Entries that fail
validation are skipped and logged; a missing file yields an empty dataset.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Sequence, Tuple, Type, TypeVar

import yaml
from pydantic import BaseModel, ValidationError

from narrative.engine.textmatch import whole_word_pattern
from narrative.models import ConflictZone, GazetteerEntry, Hotspot, InfrastructureSite


logger = logging.getLogger("gazetteer")

M = TypeVar("M", bound=BaseModel)

COUNTRIES_FILE = "countries.yaml"
HOTSPOTS_FILE = "hotspots.yaml"
CONFLICT_ZONES_FILE = "conflict_zones.yaml"
CABLE_LANDINGS_FILE = "cable_landings.yaml"
NUCLEAR_SITES_FILE = "nuclear_sites.yaml"
MILITARY_BASES_FILE = "military_bases.yaml"


def normalize_name(name: str) -> str:
    return name.lower().strip()


class Gazetteer:
    """Countries plus a variant -> entry index built once per instance.

    The first entry registering a variant owns it; later claims are logged
    and ignored, so precedence follows dataset order.
    """

    def __init__(self, entries: Sequence[GazetteerEntry]):
        self.entries: Tuple[GazetteerEntry, ...] = tuple(entries)
        self.variant_index: Dict[str, GazetteerEntry] = {}
        self.patterns: List[Tuple[str, re.Pattern, GazetteerEntry]] = []
        self._build_index()

    def _build_index(self) -> None:
        for entry in self.entries:
            for variant in entry.variants:
                key = normalize_name(variant or "")
                if not key:
                    logger.warning("empty variant on gazetteer entry %r", entry.name)
                    continue
                owner = self.variant_index.get(key)
                if owner is not None:
                    if owner.name != entry.name:
                        logger.warning(
                            "variant %r claimed by %r already owned by %r; keeping %r",
                            key,
                            entry.name,
                            owner.name,
                            owner.name,
                        )
                    continue
                self.variant_index[key] = entry
                self.patterns.append((key, whole_word_pattern(key), entry))

    def __len__(self) -> int:
        return len(self.entries)

    def find_entry(self, name: str) -> GazetteerEntry | None:
        target = normalize_name(name)
        if not target:
            return None
        for entry in self.entries:
            if normalize_name(entry.name) == target:
                return entry
            if any(normalize_name(v) == target for v in entry.variants):
                return entry
        return None


@dataclass
class GeoDatasets:
    hotspots: List[Hotspot] = field(default_factory=list)
    conflict_zones: List[ConflictZone] = field(default_factory=list)
    cable_landings: List[InfrastructureSite] = field(default_factory=list)
    nuclear_sites: List[InfrastructureSite] = field(default_factory=list)
    military_bases: List[InfrastructureSite] = field(default_factory=list)


def _read_yaml_list(path: Path) -> list:
    try:
        with path.open("r", encoding="utf-8") as handle:
            payload = yaml.safe_load(handle)
    except FileNotFoundError:
        logger.warning("dataset %s not found; using empty list", path)
        return []
    except yaml.YAMLError as exc:
        logger.warning("dataset %s is not valid YAML: %s", path, exc)
        return []
    if payload is None:
        return []
    if not isinstance(payload, list):
        logger.warning("dataset %s must be a list, got %s", path, type(payload).__name__)
        return []
    return payload


def load_records(path: Path, model: Type[M]) -> List[M]:
    out: List[M] = []
    for idx, raw in enumerate(_read_yaml_list(path)):
        if not isinstance(raw, dict):
            logger.warning("%s[%d]: expected a mapping, skipping", path.name, idx)
            continue
        try:
            out.append(model.model_validate(raw))
        except ValidationError as exc:
            logger.warning("%s[%d]: invalid %s, skipping: %s", path.name, idx, model.__name__, exc.errors()[:1])
    return out


def load_gazetteer(data_dir: str | Path) -> Gazetteer:
    entries = load_records(Path(data_dir) / COUNTRIES_FILE, GazetteerEntry)
    gazetteer = Gazetteer(entries)
    logger.info("gazetteer loaded: %d countries, %d variants", len(gazetteer), len(gazetteer.variant_index))
    return gazetteer


def load_geo_datasets(data_dir: str | Path) -> GeoDatasets:
    base = Path(data_dir)
    return GeoDatasets(
        hotspots=load_records(base / HOTSPOTS_FILE, Hotspot),
        conflict_zones=load_records(base / CONFLICT_ZONES_FILE, ConflictZone),
        cable_landings=load_records(base / CABLE_LANDINGS_FILE, InfrastructureSite),
        nuclear_sites=load_records(base / NUCLEAR_SITES_FILE, InfrastructureSite),
        military_bases=load_records(base / MILITARY_BASES_FILE, InfrastructureSite),
    )
