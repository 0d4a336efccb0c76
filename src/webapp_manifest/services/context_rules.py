"""Правила, которые зависят от нескольких полей сразу или от контекста.

Запускаются после структурного обхода. Каждое правило независимо,
все правила запускаются всегда и дописывают ошибки в тот же отчёт.
"""

from typing import Callable
from urllib.parse import urlsplit

from webapp_manifest.models.context import ValidationContext
from webapp_manifest.models.errors import MESSAGES, ErrorCategory, ErrorReport
from webapp_manifest.services.rules import is_absolute_url, is_array

_INSTALLS = "installs_allowed_from"
_WILDCARD = "*"


def check_default_locale(
    document: dict, context: ValidationContext, report: ErrorReport, marketplace_hosts: tuple[str, ...]
) -> None:
    """default_locale должен быть одним из ключей locales."""
    locales = document.get("locales")
    if not isinstance(locales, dict):
        return
    default_locale = document.get("default_locale")
    if not isinstance(default_locale, str) or default_locale not in locales:
        report.add(ErrorCategory.INVALID_DEFAULT_LOCALE, (), MESSAGES["default_locale"])


def check_installs_allowed_from(
    document: dict, context: ValidationContext, report: ErrorReport, marketplace_hosts: tuple[str, ...]
) -> None:
    """Непустой список "*" или абсолютных URL; маркетплейс — только по https.

    Неверный тип самого поля уже отметил engine.
    """
    value = document.get(_INSTALLS)
    if not is_array(value):
        return
    path = (_INSTALLS,)

    if not value:
        report.add(ErrorCategory.INVALID_EMPTY, path, MESSAGES["empty_when_present"].format(name=_INSTALLS))
        return

    if not all(isinstance(item, str) for item in value):
        report.add(
            ErrorCategory.INVALID_ARRAY_OF_STRINGS,
            path,
            MESSAGES["array_of_strings"].format(name=_INSTALLS),
        )

    hosts = {host.lower() for host in marketplace_hosts}
    has_marketplace = False

    for item in value:
        if not isinstance(item, str):
            continue
        if item == _WILDCARD:
            has_marketplace = True
            continue
        if not is_absolute_url(item):
            report.add(
                ErrorCategory.INVALID_URL,
                path,
                MESSAGES["url_or_wildcard"].format(name=_INSTALLS),
            )
            continue
        parts = urlsplit(item)
        if (parts.hostname or "") in hosts:
            has_marketplace = True
            if parts.scheme != "https":
                report.add(
                    ErrorCategory.INVALID_SECURE_MARKETPLACE_URL,
                    path,
                    MESSAGES["secure_marketplace"].format(name=_INSTALLS),
                )

    if context.listed and not has_marketplace:
        report.add(
            ErrorCategory.INVALID_LISTED_REQUIRES_MARKETPLACE_URL,
            path,
            MESSAGES["listed_marketplace"].format(name=_INSTALLS),
        )


def check_type_listing(
    document: dict, context: ValidationContext, report: ErrorReport, marketplace_hosts: tuple[str, ...]
) -> None:
    """certified нельзя публиковать; не-web тип требует упакованного приложения."""
    app_type = document.get("type")
    if not isinstance(app_type, str):
        return
    if app_type == "certified" and context.listed:
        report.add(ErrorCategory.INVALID_TYPE_CERTIFIED_LISTED, (), MESSAGES["certified_listed"])
    if app_type != "web" and not context.packaged:
        report.add(ErrorCategory.INVALID_TYPE_WEB_PRIVILEGED, (), MESSAGES["web_privileged"])


ContextRule = Callable[[dict, ValidationContext, ErrorReport, tuple[str, ...]], None]

CONTEXT_RULES: tuple[ContextRule, ...] = (
    check_default_locale,
    check_installs_allowed_from,
    check_type_listing,
)


def run_context_rules(
    document: dict,
    context: ValidationContext,
    report: ErrorReport,
    marketplace_hosts: tuple[str, ...],
) -> None:
    for rule in CONTEXT_RULES:
        rule(document, context, report, marketplace_hosts)
