"""Обход документа по схеме.

walk() проходит по всем полям схемы в порядке объявления:
  1. Поля нет — MandatoryField, если оно обязательно; иначе пропускаем
  2. Неверный тип — InvalidPropertyType, остальные правила поля не применяются
  3. object — UnexpectedProperty / InvalidEmpty, потом рекурсия во вложенную схему
  4. array  — InvalidItemType / UnexpectedProperty на весь массив, рекурсия в элементы
  5. map    — формат каждого ключа и значения
  6. scalar — длина, oneOf, anyOf, формат (каждое правило независимо)

Обход никогда не останавливается на первой ошибке и ничего не бросает
для ошибок уровня поля — всё попадает в ErrorReport.
"""

from typing import Any, Sequence

from webapp_manifest.models.context import ValidationContext
from webapp_manifest.models.errors import MESSAGES, ErrorCategory, ErrorReport
from webapp_manifest.models.schema import (
    ArrayField,
    MapField,
    ObjectField,
    ScalarField,
    Schema,
)
from webapp_manifest.services.rules import (
    Violation,
    check_any_of,
    check_format,
    check_length,
    check_one_of,
    check_type,
    unexpected_keys,
)


def walk(
    document: dict,
    schema: Schema,
    context: ValidationContext,
    path: Sequence[str] = (),
) -> ErrorReport:
    """Проверить один уровень документа и всё, что под ним."""
    report = ErrorReport()

    for name, spec in schema.items():
        field_path = (*path, name)

        if name not in document:
            if spec.is_mandatory(context):
                report.add(
                    ErrorCategory.MANDATORY_FIELD,
                    field_path,
                    MESSAGES["mandatory"].format(name=name),
                )
            continue

        value = document[name]

        violation = check_type(name, value, spec.type)
        if violation:
            _emit(report, violation, field_path)
            continue

        if isinstance(spec, ObjectField):
            _check_object(report, name, value, spec, context, field_path)
        elif isinstance(spec, ArrayField):
            _check_array(report, name, value, spec, context, field_path)
        elif isinstance(spec, MapField):
            _check_map(report, value, spec)
        elif isinstance(spec, ScalarField):
            _check_scalar(report, name, value, spec, field_path)

    return report


def _emit(report: ErrorReport, violation: Violation, field_path: Sequence[str]) -> None:
    report.add(violation.category, field_path if violation.scoped else (), violation.message)


def _check_object(
    report: ErrorReport,
    name: str,
    value: dict,
    spec: ObjectField,
    context: ValidationContext,
    field_path: tuple[str, ...],
) -> None:
    if not spec.additional_properties:
        _report_unexpected(report, name, unexpected_keys(value, spec.properties), field_path)

    if spec.at_least_one_of and not any(key in value for key in spec.at_least_one_of):
        report.add(
            ErrorCategory.INVALID_EMPTY,
            field_path,
            MESSAGES["at_least_one_of"].format(name=name, keys=" or ".join(spec.at_least_one_of)),
        )

    report.merge(walk(value, spec.properties, context, field_path))


def _check_array(
    report: ErrorReport,
    name: str,
    value: list,
    spec: ArrayField,
    context: ValidationContext,
    field_path: tuple[str, ...],
) -> None:
    item_spec = spec.items
    unexpected: list[str] = []

    for item in value:
        if not isinstance(item, dict):
            report.add(
                ErrorCategory.INVALID_ITEM_TYPE,
                field_path,
                MESSAGES["item_type"].format(name=name),
            )
            continue
        if not item_spec.additional_properties:
            unexpected.extend(unexpected_keys(item, item_spec.properties))
        # путь без индекса: ошибки всех элементов сворачиваются в один код
        report.merge(walk(item, item_spec.properties, context, field_path))

    _report_unexpected(report, name, unexpected, field_path)


def _report_unexpected(
    report: ErrorReport, name: str, keys: list[str], field_path: tuple[str, ...]
) -> None:
    # один код на контейнер; в сообщении последний найденный ключ
    if keys:
        report.add(
            ErrorCategory.UNEXPECTED_PROPERTY,
            field_path,
            MESSAGES["unexpected"].format(name=name, key=keys[-1]),
        )


def _check_map(report: ErrorReport, value: dict, spec: MapField) -> None:
    # коды по ключу записи: InvalidIconSize128, InvalidIconPathA
    for key, item in value.items():
        for violation in (
            check_format(key, key, spec.keys),
            check_format(key, item, spec.values),
        ):
            if violation:
                _emit(report, violation, (key,))


def _check_scalar(
    report: ErrorReport,
    name: str,
    value: Any,
    spec: ScalarField,
    field_path: tuple[str, ...],
) -> None:
    violations = [check_length(name, value, spec.min_length, spec.max_length)]
    if spec.one_of is not None:
        violations.append(check_one_of(name, value, spec.one_of))
    if spec.any_of is not None:
        violations.append(check_any_of(name, value, spec.any_of))
    if spec.format is not None:
        violations.append(check_format(name, value, spec.format))

    for violation in violations:
        if violation:
            _emit(report, violation, field_path)
