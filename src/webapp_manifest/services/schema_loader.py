"""Загрузчик схемы манифеста.

Читает YAML-файл со схемой и возвращает Schema (dict имя → FieldSpec).
Результат кешируется по пути: схема неизменяемая и строится один раз.
"""

import logging
from functools import lru_cache
from pathlib import Path

import yaml

from webapp_manifest.models.schema import ArrayField, MapField, ObjectField, ScalarField, Schema, schema_adapter
from webapp_manifest.services.rules import FORMATS

logger = logging.getLogger(__name__)

DEFAULT_SCHEMA_PATH = Path(__file__).parent.parent / "schemas" / "webapp-manifest.schema.yaml"


@lru_cache(maxsize=None)
def load_schema(path: Path = DEFAULT_SCHEMA_PATH) -> Schema:
    """Прочитать и проверить схему."""
    with open(path, encoding="utf-8") as f:
        raw = yaml.safe_load(f)  # YAML → Python dict
    schema = schema_adapter.validate_python(raw)  # dict → FieldSpec-модели
    _check_formats(schema)
    logger.debug("Loaded manifest schema from %s (%d top-level fields)", path, len(schema))
    return schema


def _check_formats(schema: Schema, prefix: str = "") -> None:
    """Все имена форматов из схемы должны быть в FORMATS."""
    for name, spec in schema.items():
        where = f"{prefix}{name}"
        if isinstance(spec, ScalarField):
            names = [spec.format] if spec.format else []
        elif isinstance(spec, MapField):
            names = [spec.keys, spec.values]
        elif isinstance(spec, ObjectField):
            _check_formats(spec.properties, f"{where}.")
            names = []
        elif isinstance(spec, ArrayField):
            _check_formats(spec.items.properties, f"{where}[].")
            names = []
        else:
            names = []
        for format_name in names:
            if format_name not in FORMATS:
                raise ValueError(f"Unknown format '{format_name}' for field '{where}'")
