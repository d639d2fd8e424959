"""Loading funnel and price snapshots from JSON or YAML files."""

import json
import logging
from pathlib import Path

import yaml
from pydantic import Field, ValidationError

from funnel_readiness.exceptions import SnapshotLoadError
from funnel_readiness.models import Funnel, Price, WireModel

logger = logging.getLogger(__name__)

_YAML_SUFFIXES = (".yaml", ".yml")


class ReadinessSnapshot(WireModel):
    """A funnel together with the price catalog it is evaluated against."""

    funnel: Funnel
    prices: list[Price] = Field(default_factory=list)


def load_snapshot(path: str | Path) -> ReadinessSnapshot:
    """Load a snapshot file.

    Files ending in .yaml/.yml are parsed as YAML, everything else as JSON.

    Raises:
        SnapshotLoadError: If the file cannot be read, parsed or validated
    """
    path = Path(path)
    try:
        text = path.read_text()
    except OSError as e:
        raise SnapshotLoadError(f"Cannot read snapshot {path}: {e}", str(path)) from e

    try:
        if path.suffix.lower() in _YAML_SUFFIXES:
            data = yaml.safe_load(text)
        else:
            data = json.loads(text)
    except (json.JSONDecodeError, yaml.YAMLError) as e:
        raise SnapshotLoadError(f"Cannot parse snapshot {path}: {e}", str(path)) from e

    if not isinstance(data, dict):
        raise SnapshotLoadError(f"Snapshot {path} must contain a mapping", str(path))

    try:
        snapshot = ReadinessSnapshot.model_validate(data)
    except ValidationError as e:
        raise SnapshotLoadError(f"Invalid snapshot {path}: {e}", str(path)) from e

    logger.debug(
        f"Loaded snapshot {path}: funnel {snapshot.funnel.id}, "
        f"{len(snapshot.funnel.steps)} step(s), {len(snapshot.prices)} price(s)"
    )
    return snapshot
