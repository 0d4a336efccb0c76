"""Модели отчёта об ошибках валидации.

Отчёт — это словарь {код ошибки: описание}. Код собирается из категории
и пути к полю, где каждый сегмент пути переведён в CamelCase:

    ("developer", "name")   + MandatoryField  → "MandatoryFieldDeveloperName"
    ("screen_size", "min_width") + InvalidNumber → "InvalidNumberScreenSizeMinWidth"

Пустой отчёт — манифест валиден.
"""

from enum import Enum
from typing import Sequence

from pydantic import BaseModel, Field


class ErrorCategory(str, Enum):
    """Категории нарушений.

    Часть категорий привязана к конкретному полю манифеста
    (InvalidLaunchPath, InvalidVersion, ...) — у таких кодов путь не добавляется.
    """

    MANDATORY_FIELD = "MandatoryField"
    INVALID_PROPERTY_TYPE = "InvalidPropertyType"
    INVALID_PROPERTY_LENGTH = "InvalidPropertyLength"
    INVALID_STRING_TYPE = "InvalidStringType"
    INVALID_URL = "InvalidUrl"
    UNEXPECTED_PROPERTY = "UnexpectedProperty"
    INVALID_EMPTY = "InvalidEmpty"
    INVALID_NUMBER = "InvalidNumber"
    INVALID_ITEM_TYPE = "InvalidItemType"
    INVALID_ARRAY_OF_STRINGS = "InvalidArrayOfStrings"
    INVALID_SECURE_MARKETPLACE_URL = "InvalidSecureMarketplaceUrl"
    INVALID_LISTED_REQUIRES_MARKETPLACE_URL = "InvalidListedRequiresMarketplaceUrl"

    # привязаны к полю
    INVALID_LAUNCH_PATH = "InvalidLaunchPath"
    INVALID_VERSION = "InvalidVersion"
    INVALID_DEVELOPER_URL = "InvalidDeveloperUrl"
    INVALID_DEFAULT_LOCALE = "InvalidDefaultLocale"
    INVALID_ICON_SIZE = "InvalidIconSize"
    INVALID_ICON_PATH = "InvalidIconPath"
    INVALID_TYPE_CERTIFIED_LISTED = "InvalidTypeCertifiedListed"
    INVALID_TYPE_WEB_PRIVILEGED = "InvalidTypeWebPrivileged"


# Шаблоны сообщений. Имя поля подставляется через {name}.
MESSAGES = {
    "mandatory": "Mandatory field {name} is missing",
    "type": "`{name}` must be of type {types}",
    "empty": "`{name}` must not be empty",
    "min_length": "`{name}` must be at least length {limit}",
    "max_length": "`{name}` must not exceed length {limit}",
    "one_of": "`{name}` must be one of the following: {values}",
    "any_of": "`{name}` must be any of the following: {values}",
    "unexpected": "Unexpected property `{key}` found in `{name}`",
    "item_type": "items of array `{name}` must be of type `object`",
    "at_least_one_of": "`{name}` should have at least {keys}",
    "launch_path": "`{name}` must be a path relative to app's origin",
    "version": "`{name}` is in an invalid format.",
    "developer_url": "Developer URL must be an absolute HTTP or HTTPS URL",
    "number": "`{name}` must be a number",
    "icon_size": "Icon size must be a natural number",
    "icon_path": "Paths to icons must be absolute paths, relative URIs, or data URIs",
    "default_locale": "`default_locale` must match one of the keys in `locales`",
    "array_of_strings": "`{name}` must be an array of strings",
    "empty_when_present": "`{name}` cannot be empty when present",
    "url_or_wildcard": "`{name}` must be a list of valid absolute URLs or `*`",
    "secure_marketplace": "`{name}` must use https:// when Marketplace URLs are included",
    "listed_marketplace": "`{name}` must include a Marketplace URL when app is listed",
    "certified_listed": "`certified` apps cannot be listed",
    "web_privileged": "unpackaged web apps may not have a type of `certified` or `privileged`",
}

INVALID_MANIFEST_MESSAGE = "Manifest is not in a valid JSON format or has invalid properties"


def camel_segment(segment: str) -> str:
    """"default_locale" → "DefaultLocale", "a" → "A", "128" → "128"."""
    return "".join(part[:1].upper() + part[1:] for part in segment.split("_"))


def error_code(category: ErrorCategory, path: Sequence[str] = ()) -> str:
    """Собрать стабильный код ошибки из категории и пути."""
    return category.value + "".join(camel_segment(str(p)) for p in path)


class ErrorDescriptor(BaseModel):
    """Описание одной ошибки: категория + готовое сообщение."""

    category: ErrorCategory
    message: str

    model_config = {"frozen": True}

    def __str__(self) -> str:
        return f"Error: {self.message}"


class ErrorReport(dict):
    """Словарь {код: ErrorDescriptor}, который собирается за один вызов.

    add() никогда не перезаписывает существующий код — побеждает первая запись.
    """

    def add(self, category: ErrorCategory, path: Sequence[str], message: str) -> str:
        code = error_code(category, path)
        self.setdefault(code, ErrorDescriptor(category=category, message=message))
        return code

    def merge(self, other: "ErrorReport") -> None:
        for code, descriptor in other.items():
            self.setdefault(code, descriptor)


class ValidationResult(BaseModel):
    """Итог валидации. errors пустой — манифест валиден."""

    errors: dict[str, ErrorDescriptor] = Field(default_factory=dict)

    model_config = {"frozen": True}

    @property
    def is_valid(self) -> bool:
        return not self.errors

    def messages(self) -> dict[str, str]:
        """{код: "Error: ..."} — удобно для вывода и JSON."""
        return {code: str(descriptor) for code, descriptor in self.errors.items()}


class InvalidManifestError(ValueError):
    """Манифест нельзя даже начать проверять: это не JSON-объект."""

    def __init__(self, message: str = INVALID_MANIFEST_MESSAGE):
        super().__init__(message)
