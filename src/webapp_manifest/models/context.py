"""Контекст валидации — флаги, которых нет в самом манифесте.

Пример:
    ValidationContext(listed=True)                # приложение в маркетплейсе
    ValidationContext(packaged=False)             # hosted-приложение
    ValidationContext.model_validate({"appType": ""})  # не маркетплейс
"""

from pydantic import BaseModel, Field

# appType по умолчанию — полный набор правил маркетплейса
MARKETPLACE_APP_TYPE = "mkt"


class ValidationContext(BaseModel):
    """Неизменяемый контекст одного вызова validate()."""

    listed: bool = False
    packaged: bool = True
    app_type: str = Field(default=MARKETPLACE_APP_TYPE, alias="appType")

    model_config = {"populate_by_name": True, "frozen": True}

    @property
    def marketplace(self) -> bool:
        """Пустой appType выключает правила маркетплейса."""
        return bool(self.app_type)
