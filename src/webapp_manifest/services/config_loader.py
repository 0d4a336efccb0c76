from pathlib import Path

import yaml

from webapp_manifest.models.config import ValidatorConfig


def load_validator_config(path: Path) -> ValidatorConfig:
    with open(path, encoding="utf-8") as f:
        raw = yaml.safe_load(f) or {}  # пустой файл → настройки по умолчанию
    config = ValidatorConfig.model_validate(raw)
    # относительный путь к схеме — от папки конфига
    if config.schema_path is not None and not config.schema_path.is_absolute():
        config = config.model_copy(update={"schema_path": Path(path).parent / config.schema_path})
    return config
