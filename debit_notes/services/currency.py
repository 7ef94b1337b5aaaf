from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Any

from babel.core import UnknownLocaleError
from babel.numbers import format_currency as babel_format_currency

"""Currency display formatting.

Primary path is Babel's locale-aware formatter. When Babel rejects the locale
or currency, a manual "<symbol>1,234.50" rendering is used instead. Never
raises.
"""

__all__ = [
    "CurrencySettings",
    "format_currency",
    "coerce_amount",
]

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CurrencySettings:
    code: str = "NGN"
    locale: str = "en_NG"
    symbol: str = "₦"


DEFAULT_CURRENCY = CurrencySettings()


def coerce_amount(amount: Any) -> float:
    try:
        num = float(amount)
    except (TypeError, ValueError):
        return 0.0
    return num if math.isfinite(num) else 0.0


def _fallback(num: float, symbol: str) -> str:
    return f"{symbol}{num:,.2f}"


def format_currency(amount: Any, settings: CurrencySettings = DEFAULT_CURRENCY) -> str:
    num = coerce_amount(amount)
    try:
        return babel_format_currency(num, settings.code, locale=settings.locale)
    except (UnknownLocaleError, ValueError, KeyError, TypeError) as e:
        logger.debug("currency format fallback (%s/%s): %s", settings.code, settings.locale, e)
        return _fallback(num, settings.symbol)
