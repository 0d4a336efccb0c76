"""Модели декларативной схемы манифеста.

Схема — упорядоченный словарь {имя поля: FieldSpec}. FieldSpec — это
размеченное объединение (discriminated union) по ключу kind:

    scalar — строка/число/boolean/массив с правилами длины, перечислений, формата
    object — вложенный объект со своей схемой (properties)
    array  — массив объектов, каждый проверяется по items
    map    — объект с произвольными ключами (icons): проверяются ключи и значения

Пример в YAML:
    name:
      kind: scalar
      type: string
      mandatory: true
      maxLength: 128
    chrome:
      kind: object
      additionalProperties: false
      properties:
        navigation: {kind: scalar, type: boolean}

Все модели frozen — схема строится один раз и дальше только читается.
"""

from typing import Annotated, Literal, Union

from pydantic import BaseModel, Field, TypeAdapter, field_validator, model_validator

from webapp_manifest.models.context import ValidationContext

JsonType = Literal["string", "number", "boolean", "object", "array"]


class _FieldBase(BaseModel):
    """Общие атрибуты всех вариантов FieldSpec."""

    type: tuple[JsonType, ...]
    mandatory: bool = False
    # обязательно только в режиме маркетплейса (appType не пустой)
    marketplace_mandatory: bool = Field(default=False, alias="marketplaceMandatory")

    model_config = {"populate_by_name": True, "frozen": True}

    @field_validator("type", mode="before")
    @classmethod
    def _single_type(cls, value):
        # type: string  →  ("string",)
        if isinstance(value, str):
            return (value,)
        return value

    def is_mandatory(self, context: ValidationContext) -> bool:
        return self.mandatory or (self.marketplace_mandatory and context.marketplace)


class ScalarField(_FieldBase):
    """Поле-лист: правила длины, oneOf/anyOf и формата."""

    kind: Literal["scalar"] = "scalar"
    min_length: int | None = Field(default=None, alias="minLength", ge=0)
    max_length: int | None = Field(default=None, alias="maxLength", ge=0)
    one_of: tuple[str, ...] | None = Field(default=None, alias="oneOf")
    any_of: tuple[str, ...] | None = Field(default=None, alias="anyOf")
    format: str | None = None

    @model_validator(mode="after")
    def _one_enumeration(self):
        if self.one_of is not None and self.any_of is not None:
            raise ValueError("oneOf and anyOf are mutually exclusive")
        return self


class ObjectField(_FieldBase):
    """Вложенный объект.

    additionalProperties: false — неизвестные ключи дают UnexpectedProperty.
    atLeastOneOf — хотя бы один из перечисленных ключей должен быть.
    """

    kind: Literal["object"] = "object"
    type: tuple[JsonType, ...] = ("object",)
    properties: dict[str, "FieldSpec"] = Field(default_factory=dict)
    additional_properties: bool = Field(default=True, alias="additionalProperties")
    at_least_one_of: tuple[str, ...] | None = Field(default=None, alias="atLeastOneOf")


class ArrayField(_FieldBase):
    """Массив объектов. Ошибки элементов сворачиваются до уровня поля."""

    kind: Literal["array"] = "array"
    type: tuple[JsonType, ...] = ("array",)
    items: ObjectField


class MapField(_FieldBase):
    """Объект с произвольными ключами: keys и values — имена форматов."""

    kind: Literal["map"] = "map"
    type: tuple[JsonType, ...] = ("object",)
    keys: str
    values: str


FieldSpec = Annotated[
    Union[ScalarField, ObjectField, ArrayField, MapField],
    Field(discriminator="kind"),
]

Schema = dict[str, FieldSpec]

ObjectField.model_rebuild()
ArrayField.model_rebuild()

schema_adapter: TypeAdapter[Schema] = TypeAdapter(Schema)
