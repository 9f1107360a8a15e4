"""
YAML universe loader with schema validation.

Loads universe dimensions, seeding options and initial pattern placements
from YAML files and validates them against the JSON schema shipped in
lifegrid/schemas.
"""

import yaml
import json
from pathlib import Path
from typing import Optional
import jsonschema

from .data_types import PatternKind, PatternPlacement, UniverseConfig
from .patterns import PatternError, clamp_glider_anchor, clamp_pulsar_anchor

DEFAULT_SCHEMA_DIR = Path(__file__).parent / "schemas"

ANCHOR_CLAMPS = {
    PatternKind.GLIDER: clamp_glider_anchor,
    PatternKind.PULSAR: clamp_pulsar_anchor,
}


class DataLoadError(Exception):
    """Raised when data loading or validation fails"""
    pass


def load_yaml(file_path: Path) -> dict:
    """Load YAML file and return parsed dict"""
    file_path = Path(file_path)
    if not file_path.exists():
        raise DataLoadError(f"File not found: {file_path}")

    try:
        with open(file_path, 'r') as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise DataLoadError(f"YAML parse error in {file_path}: {e}")

    # An empty file is an empty config
    return data if data is not None else {}


def validate_against_schema(data: dict, schema_path: Path, data_path: Path):
    """Validate data dict against JSON schema"""
    if not schema_path.exists():
        # Schema validation optional when a custom schema dir lacks the file
        return

    try:
        with open(schema_path, 'r') as f:
            schema = json.load(f)
        jsonschema.validate(instance=data, schema=schema)
    except jsonschema.ValidationError as e:
        raise DataLoadError(f"Validation error in {data_path}: {e.message}")
    except json.JSONDecodeError as e:
        raise DataLoadError(f"Invalid JSON schema {schema_path}: {e}")


def parse_universe_config(data: dict, source: str = "<dict>") -> UniverseConfig:
    """Build a UniverseConfig from an already validated dict"""
    universe_data = data.get('universe', {})
    config = UniverseConfig(
        **universe_data,
        patterns=[PatternPlacement(**p) for p in data.get('patterns', [])]
    )

    # Placements must land inside the grid; the universe itself does not check
    for placement in config.patterns:
        if placement.row >= config.height or placement.column >= config.width:
            raise DataLoadError(
                f"Pattern {placement.kind.value} at ({placement.row}, {placement.column}) "
                f"is outside the {config.width}x{config.height} universe in {source}")

        # The stamped window needs room on a grid of this size
        clamp = ANCHOR_CLAMPS.get(placement.kind)
        if clamp is not None:
            try:
                clamp(placement.row, config.height)
                clamp(placement.column, config.width)
            except PatternError as e:
                raise DataLoadError(f"Pattern {placement.kind.value} does not fit in {source}: {e}")

    return config


def load_universe_config(file_path: Path, schema_dir: Optional[Path] = None) -> UniverseConfig:
    """Load universe configuration from YAML"""
    data = load_yaml(file_path)

    schema_dir = Path(schema_dir) if schema_dir else DEFAULT_SCHEMA_DIR
    schema_path = schema_dir / "universe.schema.json"
    validate_against_schema(data, schema_path, file_path)

    return parse_universe_config(data, str(file_path))
