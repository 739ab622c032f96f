"""
Lookup loader for Platypus.

Loads the read-only YAML lookup tables from a content root:
- config.yaml: site configuration (locales, textbook home, ...)
- toc.yaml: table of contents with chapters and learning paths
- translations/<locale>/glossary.yaml: glossary term definitions
- translations/<locale>/notations.yaml, universal-notations.yaml
- translations/<locale>/strings.yaml: UI translations

The tables are loaded once at process start and handed to the classroom
functions explicitly. Nothing mutates them afterwards.
"""

import logging
from pathlib import Path
from typing import Any, Optional

import yaml
from pydantic import BaseModel, ConfigDict

from platypus.schemas import GlossaryTerm, TableOfContents

logger = logging.getLogger(__name__)

TRANSLATIONS_DIR = "translations"


class Lookups(BaseModel):
    """Immutable lookup tables shared by every request."""
    model_config = ConfigDict(frozen=True)

    site_config: dict[str, Any] = {}
    toc: TableOfContents = TableOfContents()
    glossary: dict[str, dict[str, GlossaryTerm]] = {}       # locale -> term id -> term
    notations: dict[str, dict[str, Any]] = {}
    universal_notations: dict[str, dict[str, Any]] = {}
    translations: dict[str, dict[str, str]] = {}

    def glossary_for(self, locale: str) -> dict[str, GlossaryTerm]:
        return self.glossary.get(locale, {})

    def notations_for(self, locale: str) -> dict[str, Any]:
        return self.notations.get(locale, {})

    def universal_notations_for(self, locale: str) -> dict[str, Any]:
        return self.universal_notations.get(locale, {})

    def translations_for(self, locale: str) -> dict[str, str]:
        return self.translations.get(locale, {})


def load_yaml(file_path: Path, required: bool = False) -> Any:
    """
    Load a YAML file.

    Args:
        file_path: Path to the YAML file
        required: Raise if the file is missing instead of returning None

    Returns:
        Parsed YAML content, or None for a missing optional file

    Raises:
        FileNotFoundError: If a required file doesn't exist
        yaml.YAMLError: If YAML parsing fails
    """
    if not file_path.exists():
        if required:
            raise FileNotFoundError(f"Lookup file not found: {file_path}")
        return None

    with open(file_path, "r", encoding="utf-8") as f:
        return yaml.safe_load(f)


def get_available_locales(root: Path) -> list[str]:
    """List locale directories under translations/."""
    dir_path = root / TRANSLATIONS_DIR
    if not dir_path.exists():
        return []
    return sorted(p.name for p in dir_path.iterdir() if p.is_dir())


def load_lookups(root: Path, locales: Optional[list[str]] = None) -> Lookups:
    """
    Load every lookup table from a content root.

    Args:
        root: Directory holding config.yaml, toc.yaml and translations/
        locales: Restrict per-locale tables to these locales

    Returns:
        Frozen Lookups instance
    """
    root = Path(root)
    config = load_yaml(root / "config.yaml") or {}
    toc = TableOfContents(**(load_yaml(root / "toc.yaml") or {}))

    glossary: dict[str, dict[str, GlossaryTerm]] = {}
    notations: dict[str, dict[str, Any]] = {}
    universal: dict[str, dict[str, Any]] = {}
    translations: dict[str, dict[str, str]] = {}

    for locale in locales or get_available_locales(root):
        locale_dir = root / TRANSLATIONS_DIR / locale
        terms = load_yaml(locale_dir / "glossary.yaml") or {}
        glossary[locale] = {term_id: GlossaryTerm(**term) for term_id, term in terms.items()}
        notations[locale] = load_yaml(locale_dir / "notations.yaml") or {}
        universal[locale] = load_yaml(locale_dir / "universal-notations.yaml") or {}
        translations[locale] = load_yaml(locale_dir / "strings.yaml") or {}

    logger.info(
        f"Loaded lookups from {root}: {len(toc.courses)} TOC courses, "
        f"{len(glossary)} locales"
    )

    return Lookups(
        site_config=config,
        toc=toc,
        glossary=glossary,
        notations=notations,
        universal_notations=universal,
        translations=translations,
    )
