# spayd/attribute.py
"""Single ``NAME:value`` attribute of the descriptor plus its validation rule.

A rule is one of two variants sharing ``matches(value, record)``:

* :class:`PatternRule` – the value must *fully* match a compiled regex;
* :class:`PredicateRule` – an arbitrary check that also sees the whole
  record (needed for NTA, whose format depends on NT).

:class:`SpaydAttribute` validates once, in ``__init__``; an instance is never
observable with an invalid value.
"""
from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Callable, Optional, Union

if TYPE_CHECKING:
    from spayd.models import PaymentRecord

logger = logging.getLogger(__name__)

__all__ = [
    "InvalidAttributeValue",
    "PatternRule",
    "PredicateRule",
    "Rule",
    "SpaydAttribute",
]


class InvalidAttributeValue(ValueError):
    """The value supplied for attribute *name* violates its format."""

    def __init__(self, name: str, value: Any) -> None:
        self.name = name
        self.value = value
        super().__init__(f"Invalid value for attribute {name}: {value}")


@dataclass(frozen=True)
class PatternRule:
    pattern: re.Pattern[str]

    def matches(self, value: Any, record: Optional[PaymentRecord] = None) -> bool:
        return isinstance(value, str) and self.pattern.fullmatch(value) is not None


@dataclass(frozen=True)
class PredicateRule:
    predicate: Callable[[Any, Optional[PaymentRecord]], bool]

    def matches(self, value: Any, record: Optional[PaymentRecord] = None) -> bool:
        return bool(self.predicate(value, record))


Rule = Union[PatternRule, PredicateRule]


class SpaydAttribute:
    """Validated ``(name, value)`` pair. ``str()`` gives ``NAME:value``."""

    __slots__ = ("name", "value")

    def __init__(
        self,
        name: str,
        value: Any,
        rule: Optional[Rule] = None,
        record: Optional[PaymentRecord] = None,
    ) -> None:
        if rule is not None and not rule.matches(value, record):
            logger.warning("Rejected value for %s: %r", name, value)
            raise InvalidAttributeValue(name, value)
        self.name = name
        self.value = value

    def __str__(self) -> str:
        return f"{self.name}:{self.value}"

    def __repr__(self) -> str:
        return f"SpaydAttribute({self.name!r}, {self.value!r})"
