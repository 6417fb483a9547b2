"""
config.py — Extraction settings loaded from config/extract.yaml.

Looks for the config directory relative to the project root, then the
current directory. Any key missing from the file falls back to the
built-in default; a missing file means all defaults.
"""

import logging
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from langlinks.languages import LanguageCatalog, codes_from_yaml, load_catalog


logger = logging.getLogger(__name__)


OUTPUT_FORMATS = ('jsonl', 'tsv')

DEFAULT_BINDING_SUFFIX = "inLanguage>"
DEFAULT_BOUNDARY_SUFFIX = "#Item>"
DEFAULT_PROGRESS_INTERVAL = 100000


@dataclass(frozen=True)
class ExtractorConfig:
    """Settings for one dictionary extraction run."""
    catalog: LanguageCatalog = field(default_factory=LanguageCatalog.default)
    binding_suffix: str = DEFAULT_BINDING_SUFFIX
    boundary_suffix: str = DEFAULT_BOUNDARY_SUFFIX
    output_format: str = 'jsonl'
    progress_interval: int = DEFAULT_PROGRESS_INTERVAL

    def __post_init__(self):
        if self.output_format not in OUTPUT_FORMATS:
            raise ValueError(
                f"Unknown output format '{self.output_format}' (expected one of {', '.join(OUTPUT_FORMATS)})"
            )
        if not self.binding_suffix or not self.boundary_suffix:
            raise ValueError("Binding and boundary suffixes must be non-empty")
        if self.progress_interval < 1:
            raise ValueError(f"progress_interval must be positive, got {self.progress_interval}")

    def with_overrides(self, **overrides: Any) -> "ExtractorConfig":
        """Return a copy with the given non-None fields replaced."""
        changes = {k: v for k, v in overrides.items() if v is not None}
        return replace(self, **changes) if changes else self


def find_config_dir() -> Optional[Path]:
    """Find the config/ directory (project root first, then cwd)."""
    candidates = [
        Path(__file__).parent.parent.parent / "config",  # From src/langlinks/
        Path.cwd() / "config",
    ]
    for candidate in candidates:
        if (candidate / "extract.yaml").exists() or (candidate / "languages.yaml").exists():
            return candidate
    return None


def _read_yaml(path: Path) -> Dict[str, Any]:
    with open(path, 'r', encoding='utf-8') as f:
        data = yaml.safe_load(f)

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValueError(f"Expected a mapping at the top of {path}")
    return data


def load_config(path: Optional[Path] = None) -> ExtractorConfig:
    """
    Load extraction settings.

    Args:
        path: Explicit extract.yaml path. When None, config/extract.yaml is
              searched for and defaults are used if it is absent.

    Raises:
        FileNotFoundError: if an explicit path (or the catalog it names) is missing
        ValueError: if a value is invalid
    """
    if path is not None and not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")

    if path is None:
        config_dir = find_config_dir()
        if config_dir is None:
            logger.debug("No config directory found, using built-in defaults")
            return ExtractorConfig()
        path = config_dir / "extract.yaml"
        if not path.exists():
            # Only a catalog is present
            catalog_path = config_dir / "languages.yaml"
            return ExtractorConfig(catalog=load_catalog(catalog_path))

    data = _read_yaml(path)
    logger.debug(f"Loaded settings from {path}")

    catalog = LanguageCatalog.default()
    if isinstance(data.get('languages'), str):
        catalog = LanguageCatalog.from_string(data['languages'])
    elif isinstance(data.get('languages'), list):
        catalog = LanguageCatalog(codes_from_yaml(data['languages'], path))
    elif 'languages' in data:
        raise ValueError(f"Expected 'languages' in {path} to be a list or a comma-separated string")
    elif 'languages_file' in data:
        catalog_path = Path(data['languages_file'])
        if not catalog_path.is_absolute():
            catalog_path = path.parent / catalog_path
        catalog = load_catalog(catalog_path)

    return ExtractorConfig(
        catalog=catalog,
        binding_suffix=data.get('binding_suffix', DEFAULT_BINDING_SUFFIX),
        boundary_suffix=data.get('boundary_suffix', DEFAULT_BOUNDARY_SUFFIX),
        output_format=data.get('output_format', 'jsonl'),
        progress_interval=int(data.get('progress_interval', DEFAULT_PROGRESS_INTERVAL)),
    )
