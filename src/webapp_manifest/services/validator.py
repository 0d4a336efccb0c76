"""Валидация манифеста web-приложения.

Точка входа: ManifestValidator.validate(manifest, context).
  1. Декодируем JSON (если пришёл текст) — ошибка декодирования фатальна
  2. Структурный обход по схеме (engine.walk)
  3. Контекстные правила (context_rules)

Возвращает ValidationResult; errors пустой — манифест валиден.
"""

import json
import logging
from typing import Any, Mapping

from webapp_manifest.models.config import ValidatorConfig
from webapp_manifest.models.context import ValidationContext
from webapp_manifest.models.errors import InvalidManifestError, ValidationResult
from webapp_manifest.models.schema import Schema
from webapp_manifest.services.context_rules import run_context_rules
from webapp_manifest.services.engine import walk
from webapp_manifest.services.schema_loader import DEFAULT_SCHEMA_PATH, load_schema

logger = logging.getLogger(__name__)


class ManifestValidator:
    """Валидатор со своей схемой и настройками.

    Схема загружается один раз при создании и дальше только читается,
    поэтому один экземпляр можно вызывать откуда угодно.
    """

    def __init__(self, config: ValidatorConfig | None = None, schema: Schema | None = None):
        self.config = config or ValidatorConfig()
        if schema is None:
            schema = load_schema(self.config.schema_path or DEFAULT_SCHEMA_PATH)
        self.schema = schema

    def validate(
        self,
        manifest: str | bytes | dict,
        context: ValidationContext | Mapping[str, Any] | None = None,
    ) -> ValidationResult:
        document = decode_manifest(manifest)
        ctx = self._resolve_context(context)

        report = walk(document, self.schema, ctx)
        run_context_rules(document, ctx, report, self.config.marketplace_hosts)

        logger.debug(
            "Validated manifest (listed=%s, packaged=%s, appType=%r): %d error(s)",
            ctx.listed, ctx.packaged, ctx.app_type, len(report),
        )
        return ValidationResult(errors=report)

    def _resolve_context(self, context) -> ValidationContext:
        """dict → ValidationContext; appType по умолчанию берётся из конфига."""
        if not isinstance(context, ValidationContext):
            context = ValidationContext.model_validate(dict(context or {}))
        # appType не задан явно — берём из конфига экземпляра
        if "app_type" not in context.model_fields_set:
            context = context.model_copy(update={"app_type": self.config.app_type})
        return context


def decode_manifest(manifest: str | bytes | dict) -> dict:
    """Текст/bytes → dict. Любая проблема — InvalidManifestError."""
    if isinstance(manifest, (str, bytes, bytearray)):
        try:
            document = json.loads(manifest, object_pairs_hook=_reject_duplicate_keys)
        except ValueError as e:  # JSONDecodeError и UnicodeDecodeError — подклассы ValueError
            raise InvalidManifestError() from e
    else:
        document = manifest

    if not isinstance(document, dict):
        raise InvalidManifestError()
    return document


def _reject_duplicate_keys(pairs: list[tuple[str, Any]]) -> dict:
    result = {}
    for key, value in pairs:
        if key in result:
            raise ValueError(f"Duplicate key '{key}'")
        result[key] = value
    return result


def validate_manifest(
    manifest: str | bytes | dict,
    context: ValidationContext | Mapping[str, Any] | None = None,
) -> ValidationResult:
    """Проверить манифест валидатором с настройками по умолчанию."""
    return ManifestValidator().validate(manifest, context)
