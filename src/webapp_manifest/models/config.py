"""Модель YAML-конфига валидатора.

Этот файл описывает структуру YAML-файла, который передаётся через --config.

Пример:
    appType: mkt
    marketplaceHosts:
      - marketplace.firefox.com
      - marketplace.allizom.org
    schema: ./custom.schema.yaml
"""

from pathlib import Path

from pydantic import BaseModel, Field

from webapp_manifest.models.context import MARKETPLACE_APP_TYPE

DEFAULT_MARKETPLACE_HOSTS = (
    "marketplace.firefox.com",
    "marketplace.allizom.org",
    "marketplace-dev.allizom.org",
)


class ValidatorConfig(BaseModel):
    """Настройки экземпляра ManifestValidator.

    app_type — "" выключает режим маркетплейса (developer больше не обязателен).
    marketplace_hosts — хосты, которые считаются маркетплейсом
    в installs_allowed_from.
    schema_path — своя схема вместо встроенной.
    """

    app_type: str = Field(default=MARKETPLACE_APP_TYPE, alias="appType")
    marketplace_hosts: tuple[str, ...] = Field(
        default=DEFAULT_MARKETPLACE_HOSTS, alias="marketplaceHosts"
    )
    schema_path: Path | None = Field(default=None, alias="schema")

    model_config = {"populate_by_name": True, "frozen": True}
