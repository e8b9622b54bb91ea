# spayd/descriptor.py
"""Build the Short Payment Descriptor (SPAYD) string from a payment record.

Output::

    SPD*1.0*ACC:CZ2806000000000168540115*AM:450.00*CC:CZK*MSG:PLATBA ZA ZBOZI

Новое поле = одна строка в таблице :data:`FIELDS`. Порядок строк таблицы –
это порядок атрибутов в результате.
"""
from __future__ import annotations

import logging
import re
import zlib
from dataclasses import dataclass
from typing import Any, Callable, Mapping, Optional, Union

from pydantic import AnyHttpUrl, TypeAdapter, ValidationError

from spayd.attribute import PatternRule, PredicateRule, Rule, SpaydAttribute
from spayd.config import get_settings
from spayd.currencies import is_known_currency
from spayd.date_utils import format_date, is_date
from spayd.iban import is_valid_account, is_valid_account_list
from spayd.models import ExtendedAttributes, NotificationType, PaymentRecord, to_payment_record
from spayd.normalizer import encode_chars

logger = logging.getLogger(__name__)

PROTOCOL_VERSION = "1.0"
HEADER = f"SPD*{PROTOCOL_VERSION}"
DELIMITER = "*"

PaymentData = Union[PaymentRecord, Mapping[str, Any]]


# ---------------------------------------------------------------------------
# Rules
# ---------------------------------------------------------------------------
def _pattern(regex: str) -> PatternRule:
    # ASCII: `\d` must not accept non-Latin digits
    return PatternRule(re.compile(regex, re.ASCII))


def _predicate(func: Callable[[str], bool]) -> PredicateRule:
    # record values are not type-checked up front: non-strings fail here
    return PredicateRule(lambda value, _record: isinstance(value, str) and func(value))


AMOUNT_RULE = _pattern(r"[1-9]\d*(\.\d\d)?")
SYMBOL_RULE = _pattern(r"[1-9]\d{0,9}")  # X-VS / X-SS / X-KS

EMAIL_RE = re.compile(r"[^*]{1,64}@[^*]{1,255}")
PHONE_RE = re.compile(r"\+\d{1,13}|\d{1,14}", re.ASCII)

_URL_ADAPTER = TypeAdapter(AnyHttpUrl)


def _is_http_url(value: str) -> bool:
    try:
        _URL_ADAPTER.validate_python(value)
    except ValidationError:
        return False
    return True


def _is_notification_address(value: Any, record: Optional[PaymentRecord]) -> bool:
    """NTA depends on NT; without a recognised NT it is never valid."""
    if not isinstance(value, str):
        return False
    nt = record.nt if record is not None else None
    if nt == NotificationType.EMAIL:
        return EMAIL_RE.fullmatch(value) is not None
    if nt == NotificationType.PHONE:
        return PHONE_RE.fullmatch(value) is not None
    return False


def _is_account_list(value: Any, record: Optional[PaymentRecord]) -> bool:
    """ALT-ACC must come in as a list of entries, not a pre-joined string."""
    if record is None or not isinstance(record.alt_acc, (list, tuple)):
        return False
    return isinstance(value, str) and is_valid_account_list(value)


def _has_date(_value: Any, record: Optional[PaymentRecord]) -> bool:
    return record is not None and is_date(record.dt)


# ---------------------------------------------------------------------------
# Transforms: (raw value, transliterate) -> serialized value
# ---------------------------------------------------------------------------
def _as_is(value: Any, _transliterate: bool) -> Any:
    return value


def _free_text(value: Any, transliterate: bool) -> Any:
    return encode_chars(value, transliterate) if isinstance(value, str) else value


def _upper(value: Any, _transliterate: bool) -> Any:
    return value.upper() if isinstance(value, str) else value


def _join_accounts(value: Any, _transliterate: bool) -> Any:
    if isinstance(value, (list, tuple)) and all(isinstance(acc, str) for acc in value):
        return ",".join(value)
    return value


def _date(value: Any, _transliterate: bool) -> Any:
    return format_date(value) if is_date(value) else value


def _is_present(value: Any) -> bool:
    return value is not None


def _is_non_empty(value: Any) -> bool:
    return value is not None and value != [] and value != ()


# ---------------------------------------------------------------------------
# Field table
# ---------------------------------------------------------------------------
@dataclass(frozen=True)
class FieldSpec:
    """One row of the field table."""

    name: str
    get: Callable[[PaymentRecord], Any]
    rule: Optional[Rule]
    transform: Callable[[Any, bool], Any] = _as_is
    applies: Callable[[Any], bool] = _is_present

    def build(self, record: PaymentRecord, transliterate: bool) -> Optional[SpaydAttribute]:
        """Return the validated attribute, or ``None`` if the field is absent."""
        raw = self.get(record)
        if not self.applies(raw):
            return None
        value = self.transform(raw, transliterate)
        return SpaydAttribute(self.name, value, self.rule, record)


def _x(field: str) -> Callable[[PaymentRecord], Any]:
    # `x` that is not a mapping carries no extended attributes
    return lambda record: getattr(record.x, field) if isinstance(record.x, ExtendedAttributes) else None


FIELDS: tuple[FieldSpec, ...] = (
    FieldSpec("ACC", lambda r: r.acc, _predicate(is_valid_account)),
    FieldSpec(
        "ALT-ACC",
        lambda r: r.alt_acc,
        PredicateRule(_is_account_list),
        transform=_join_accounts,
        applies=_is_non_empty,
    ),
    FieldSpec("AM", lambda r: r.am, AMOUNT_RULE),
    FieldSpec("CC", lambda r: r.cc, _predicate(is_known_currency), transform=_upper),
    FieldSpec("RF", lambda r: r.rf, _pattern(r"\d{1,16}")),
    FieldSpec("RN", lambda r: r.rn, _pattern(r"[^*]{1,35}"), transform=_free_text),
    FieldSpec("DT", lambda r: r.dt, PredicateRule(_has_date), transform=_date),
    FieldSpec("PT", lambda r: r.pt, _pattern(r"[^*]{1,3}")),
    FieldSpec("MSG", lambda r: r.msg, _pattern(r"[^*]{1,60}"), transform=_free_text),
    FieldSpec("CRC32", lambda r: r.crc32, _pattern(r"[A-F0-9]{8}")),
    FieldSpec("NT", lambda r: r.nt, _pattern(r"[EP]")),
    FieldSpec("NTA", lambda r: r.nta, PredicateRule(_is_notification_address)),
    # --- extended (Czech) attributes ---------------------------------------
    # days to retry an unsuccessful payment
    FieldSpec("X-PER", _x("per"), _pattern(r"30|[12]?\d")),
    FieldSpec("X-VS", _x("vs"), SYMBOL_RULE),
    FieldSpec("X-SS", _x("ss"), SYMBOL_RULE),
    FieldSpec("X-KS", _x("ks"), SYMBOL_RULE),
    FieldSpec("X-ID", _x("id"), _pattern(r"[^*]{1,20}")),
    FieldSpec("X-URL", _x("url"), _predicate(_is_http_url), transform=_free_text),
)


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------
def build_attributes(data: PaymentData, transliterate: Optional[bool] = None) -> list[SpaydAttribute]:
    """Validate every present field of *data*, in :data:`FIELDS` order.

    Raises
    ------
    InvalidAttributeValue
        For the first field that violates its rule.
    """
    record = to_payment_record(data)
    if transliterate is None:
        transliterate = get_settings().transliterate

    attributes: list[SpaydAttribute] = []
    for spec in FIELDS:
        attribute = spec.build(record, transliterate)
        if attribute is not None:
            logger.debug("Accepted %s", attribute)
            attributes.append(attribute)
    return attributes


def create_short_payment_descriptor(data: PaymentData, transliterate: Optional[bool] = None) -> str:
    """Encode *data* as ``SPD*1.0*NAME:value*...``.

    Parameters
    ----------
    data
        :class:`PaymentRecord` or a mapping with the same keys (``altAcc`` and
        ``alt_acc`` are both accepted, ``x`` may be a plain dict).
    transliterate
        Upper-case and strip accents in RN / MSG / X-URL before escaping.
        ``None`` falls back to ``SPAYD_TRANSLITERATE``.

    Nothing is returned partially: the first invalid field raises
    :class:`~spayd.attribute.InvalidAttributeValue`.
    """
    attributes = build_attributes(data, transliterate)
    logger.debug("Built descriptor with %d attributes", len(attributes))
    return DELIMITER.join([HEADER, *(str(attr) for attr in attributes)])


def canonical_string(data: PaymentData, transliterate: Optional[bool] = None) -> str:
    """Checksum input: header plus all attributes except CRC32, sorted by name then value."""
    attributes = [
        attr for attr in build_attributes(data, transliterate) if attr.name != "CRC32"
    ]
    attributes.sort(key=lambda attr: (attr.name, str(attr.value)))
    return DELIMITER.join([HEADER, *(str(attr) for attr in attributes)])


def compute_crc32(data: PaymentData, transliterate: Optional[bool] = None) -> str:
    """CRC32 of :func:`canonical_string` as 8 upper-case hex digits.

    The result can be passed back as ``crc32``; the descriptor builder itself
    never computes it.
    """
    checksum = zlib.crc32(canonical_string(data, transliterate).encode("utf-8"))
    return f"{checksum & 0xFFFFFFFF:08X}"


__all__ = [
    "DELIMITER",
    "FIELDS",
    "FieldSpec",
    "HEADER",
    "PROTOCOL_VERSION",
    "build_attributes",
    "canonical_string",
    "compute_crc32",
    "create_short_payment_descriptor",
]
