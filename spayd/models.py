# spayd/models.py
"""Input model of the payment descriptor.

Уровни
------
1. **PaymentRecord** – то, что передаёт вызывающий код: разреженный набор
   необязательных полей. Значения хранятся *как есть*, без приведения типов,
   неизвестные ключи отбрасываются.
2. Все проверки (тип, IBAN, сумма, валюта, ...) живут в таблице полей
   :data:`spayd.descriptor.FIELDS` и выполняются строго в её порядке, так что
   первая ошибка – всегда первое по порядку неверное поле.

Модели заморожены (`frozen=True`): генератор никогда не меняет входные данные.
"""
from __future__ import annotations

from enum import Enum
from typing import Any, Mapping, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

__all__ = [
    "NotificationType",
    "ExtendedAttributes",
    "PaymentRecord",
    "to_payment_record",
]


class NotificationType(str, Enum):
    """Канал уведомления плательщика (атрибут NT)."""

    EMAIL = "E"
    PHONE = "P"


class ExtendedAttributes(BaseModel):
    """Czech-specific ``X-*`` attributes."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    per: Any = Field(None, description="Retry days, 0-30")
    vs: Any = Field(None, description="Variable symbol")
    ss: Any = Field(None, description="Specific symbol")
    ks: Any = Field(None, description="Constant symbol")
    id: Any = Field(None, description="Payer-side payment ID")
    url: Any = Field(None, description="http(s) URL")


class PaymentRecord(BaseModel):
    """Разреженная платёжная запись. Все поля необязательны."""

    model_config = ConfigDict(frozen=True, extra="ignore", populate_by_name=True)

    # --- счёт ----------------------------------------------------------------
    acc: Any = Field(None, description="IBAN or IBAN+BIC")
    alt_acc: Any = Field(None, alias="altAcc", description="list of ACC-shaped entries")

    # --- платёж --------------------------------------------------------------
    am: Any = None
    cc: Any = None
    rf: Any = None
    rn: Any = None
    dt: Any = Field(None, description="datetime.date (or datetime)")
    pt: Any = None
    msg: Any = None
    crc32: Any = None

    # --- уведомления ---------------------------------------------------------
    nt: Any = None
    nta: Any = None

    # dict -> ExtendedAttributes; что-то другое остаётся как есть и игнорируется
    x: Any = None

    # --- валидации -----------------------------------------------------------
    @field_validator("nt", mode="before")
    def _enum_value(cls, v: Any) -> Any:  # noqa: N805
        return v.value if isinstance(v, NotificationType) else v

    @field_validator("x", mode="before")
    def _extended(cls, v: Any) -> Any:  # noqa: N805
        if isinstance(v, Mapping):
            return ExtendedAttributes.model_validate(v)
        return v


def to_payment_record(data: Union[PaymentRecord, Mapping[str, Any]]) -> PaymentRecord:
    """Coerce *data* into a :class:`PaymentRecord`.

    Values are not type-checked here; that happens field by field during
    assembly. Unknown keys are dropped.
    """
    if isinstance(data, PaymentRecord):
        return data
    if not isinstance(data, Mapping):
        raise TypeError(f"payment record must be a mapping, got {type(data).__name__}")
    return PaymentRecord.model_validate(data)
