"""Config loading utilities for lexseq."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import yaml

from lexseq.core.models import SequenceConfig

logger = logging.getLogger(__name__)

CONFIG_DIR = ".lexseq"
CONFIG_FILE = "config.yaml"


def default_config_path(project_dir: Path) -> Path:
    return project_dir / CONFIG_DIR / CONFIG_FILE


def load_config(path: Path) -> dict[str, Any]:
    """Load a lexseq YAML config file as a dict.

    Returns empty dict if the file doesn't exist.
    """
    if not path.exists():
        logger.debug("No config found at %s; using defaults", path)
        return {}

    logger.info("Loading config from %s", path)
    with path.open() as f:
        data = yaml.safe_load(f)

    if not isinstance(data, dict):
        logger.warning("%s did not contain a mapping; using empty dict", path)
        return {}

    return data


def make_sequence_config(data: dict[str, Any], **overrides: Any) -> SequenceConfig:
    """Build a SequenceConfig from the ``sequence`` section of *data*.

    Only fields present in the section override the defaults defined in
    :class:`SequenceConfig`.  Keyword *overrides* that are not ``None`` win
    over the file, which is how command-line options are applied.
    """
    section = data.get("sequence", {})
    if not isinstance(section, dict):
        logger.warning("'sequence' key is not a mapping; ignoring")
        section = {}

    valid_fields = SequenceConfig.model_fields
    filtered = {k: v for k, v in section.items() if k in valid_fields}

    if dropped := set(section) - set(filtered):
        logger.warning("Ignoring unknown sequence config keys: %s", sorted(dropped))

    overrides = {k: v for k, v in overrides.items() if v is not None}
    if "base" in overrides and "alphabet" not in overrides:
        # A file alphabet is sized for the file's base.
        filtered.pop("alphabet", None)
    filtered.update(overrides)
    return SequenceConfig(**filtered)
