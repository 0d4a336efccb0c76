"""Примитивы правил.

Каждая проверка получает имя поля, значение и ограничение и возвращает
None (всё хорошо) или Violation — категорию и готовое сообщение.
Состояния нет, поэтому их можно вызывать откуда угодно.
"""

import re
from typing import Any, Callable, NamedTuple
from urllib.parse import urlsplit

from webapp_manifest.models.errors import MESSAGES, ErrorCategory


class Violation(NamedTuple):
    category: ErrorCategory
    message: str
    # False — код без пути (InvalidLaunchPath, InvalidVersion, ...)
    scoped: bool = True


# ─── Типы ────────────────────────────────────────────────

def is_number(value: Any) -> bool:
    # bool в Python — подкласс int, но в JSON это разные типы
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def is_array(value: Any) -> bool:
    return isinstance(value, (list, tuple))


_TYPE_CHECKS: dict[str, Callable[[Any], bool]] = {
    "string": lambda v: isinstance(v, str),
    "number": is_number,
    "boolean": lambda v: isinstance(v, bool),
    "object": lambda v: isinstance(v, dict),
    "array": is_array,
}


def check_type(name: str, value: Any, types: tuple[str, ...]) -> Violation | None:
    if any(_TYPE_CHECKS[t](value) for t in types):
        return None
    rendered = " or ".join(f"`{t}`" for t in types)
    return Violation(
        ErrorCategory.INVALID_PROPERTY_TYPE,
        MESSAGES["type"].format(name=name, types=rendered),
    )


# ─── Длина и перечисления ─────────────────────────────────

def check_length(
    name: str,
    value: Any,
    min_length: int | None = None,
    max_length: int | None = None,
) -> Violation | None:
    """Длина строки (символы) или массива (элементы)."""
    if not isinstance(value, (str, list, tuple)):
        return None
    size = len(value)
    if min_length is not None and size < min_length:
        template = "empty" if min_length == 1 else "min_length"
        return Violation(
            ErrorCategory.INVALID_PROPERTY_LENGTH,
            MESSAGES[template].format(name=name, limit=min_length),
        )
    if max_length is not None and size > max_length:
        return Violation(
            ErrorCategory.INVALID_PROPERTY_LENGTH,
            MESSAGES["max_length"].format(name=name, limit=max_length),
        )
    return None


def check_one_of(name: str, value: Any, allowed: tuple[str, ...]) -> Violation | None:
    if not isinstance(value, str) or value in allowed:
        return None
    return Violation(
        ErrorCategory.INVALID_STRING_TYPE,
        MESSAGES["one_of"].format(name=name, values=",".join(allowed)),
    )


def check_any_of(name: str, value: Any, allowed: tuple[str, ...]) -> Violation | None:
    """Значение — строка через запятую: "portrait, landscape"."""
    if not isinstance(value, str):
        return None
    tokens = [token.strip() for token in value.split(",")]
    if all(token in allowed for token in tokens if token):
        return None
    return Violation(
        ErrorCategory.INVALID_STRING_TYPE,
        MESSAGES["any_of"].format(name=name, values=",".join(allowed)),
    )


# ─── Форматы ─────────────────────────────────────────────

_VERSION_RE = re.compile(r"^v?\d+(\.\d+)*$")
_NUMBER_RE = re.compile(r"^\s*-?(\d+(\.\d*)?|\.\d+)\s*$")
_NATURAL_RE = re.compile(r"^[1-9]\d*$")


def is_absolute_url(value: Any) -> bool:
    """Абсолютный URL со схемой http или https."""
    if not isinstance(value, str):
        return False
    try:
        parts = urlsplit(value)
    except ValueError:
        return False
    return parts.scheme in ("http", "https") and bool(parts.netloc)


def is_relative_path(value: Any) -> bool:
    """"/", "/index.html" — да; "//", "index.html", "" — нет."""
    return isinstance(value, str) and value.startswith("/") and not value.startswith("//")


def is_version(value: Any) -> bool:
    return isinstance(value, str) and bool(_VERSION_RE.match(value))


def is_number_like(value: Any) -> bool:
    """640 или "640" — число, "NOT A NUMBER" — нет."""
    if is_number(value):
        return True
    return isinstance(value, str) and bool(_NUMBER_RE.match(value))


def is_natural_number(value: Any) -> bool:
    return isinstance(value, str) and bool(_NATURAL_RE.match(value))


def is_icon_path(value: Any) -> bool:
    """Data URI, абсолютный URL или относительный URI."""
    if not isinstance(value, str) or not value:
        return False
    if value.startswith("data:"):
        return True
    if is_absolute_url(value):
        return True
    if value.startswith("//") or any(ch.isspace() for ch in value):
        return False
    return not urlsplit(value).scheme


class Format(NamedTuple):
    check: Callable[[Any], bool]
    category: ErrorCategory
    message: str
    scoped: bool = True


# Фиксированный словарь форматов. Имя формата указывается в схеме (format: ...).
FORMATS: dict[str, Format] = {
    "launch-path": Format(
        is_relative_path, ErrorCategory.INVALID_LAUNCH_PATH, MESSAGES["launch_path"], scoped=False
    ),
    "version": Format(
        is_version, ErrorCategory.INVALID_VERSION, MESSAGES["version"], scoped=False
    ),
    "developer-url": Format(
        is_absolute_url, ErrorCategory.INVALID_DEVELOPER_URL, MESSAGES["developer_url"], scoped=False
    ),
    "number": Format(is_number_like, ErrorCategory.INVALID_NUMBER, MESSAGES["number"]),
    "icon-size": Format(is_natural_number, ErrorCategory.INVALID_ICON_SIZE, MESSAGES["icon_size"]),
    "icon-path": Format(is_icon_path, ErrorCategory.INVALID_ICON_PATH, MESSAGES["icon_path"]),
}


def check_format(name: str, value: Any, format_name: str) -> Violation | None:
    fmt = FORMATS[format_name]
    if fmt.check(value):
        return None
    return Violation(fmt.category, fmt.message.format(name=name), fmt.scoped)


def unexpected_keys(value: dict, allowed: dict) -> list[str]:
    """Ключи объекта, которых нет в схеме, в порядке появления."""
    return [key for key in value if key not in allowed]
