# spayd/iban.py
"""IBAN collaborator for the ACC / ALT-ACC attributes.

Checksum and per-country length checks are delegated to *schwifty*; this
module only adapts it to a ``str -> bool`` predicate and knows the
``IBAN[+BIC]`` account shape.
"""
from __future__ import annotations

import re

import schwifty
from schwifty.exceptions import SchwiftyException

# compact, upper-case electronic form only ("CZ65 0800 ..." is rejected)
_COMPACT_IBAN_RE = re.compile(r"[A-Z]{2}\d{2}[A-Z0-9]{1,30}")


def is_valid_iban(text: str) -> bool:
    """`True` if *text* is a valid IBAN in compact electronic form."""
    if not _COMPACT_IBAN_RE.fullmatch(text):
        return False
    try:
        schwifty.IBAN(text)
    except SchwiftyException:
        return False
    return True


def is_valid_account(value: str) -> bool:
    """Validate one ``IBAN`` or ``IBAN+BIC`` account entry.

    When both parts are present only the IBAN is checked; the BIC is
    accepted as long as it is there.
    """
    iban, _, bic = value.partition("+")
    if iban and bic:
        return is_valid_iban(iban)
    return is_valid_iban(value)


def is_valid_account_list(value: str) -> bool:
    """Every comma-separated entry of *value* must pass :func:`is_valid_account`."""
    return all(is_valid_account(acc) for acc in value.split(","))


__all__ = ["is_valid_iban", "is_valid_account", "is_valid_account_list"]
