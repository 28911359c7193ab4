from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import UTC, datetime
from decimal import Decimal, InvalidOperation
from html import unescape
from zoneinfo import ZoneInfo

from ridetrack.core.config import settings
from ridetrack.modules.rides.models import Platform

DEFAULT_CURRENCY_SYMBOL = "R$"

MONTHS_PT: dict[str, int] = {
    "janeiro": 1,
    "fevereiro": 2,
    "março": 3,
    "abril": 4,
    "maio": 5,
    "junho": 6,
    "julho": 7,
    "agosto": 8,
    "setembro": 9,
    "outubro": 10,
    "novembro": 11,
    "dezembro": 12,
}

_WRITTEN_DATE_RE = re.compile(r"\b(\d{1,2})\s+de\s+(\w+)\s+de\s+(\d{4})\b", re.I)
_NUMERIC_DATE_RE = re.compile(r"\b(\d{1,2})/(\d{1,2})/(\d{4})\b")


@dataclass(frozen=True)
class ParsedRide:
    platform: Platform
    value: Decimal
    origin: str | None = None
    destination: str | None = None
    occurred_at: datetime | None = None


def _amount_re(symbol: str) -> re.Pattern[str]:
    return re.compile(re.escape(symbol) + r"\s*([0-9][0-9.,]*[0-9]|[0-9])")


def find_amount(text: str | None, *, symbol: str = DEFAULT_CURRENCY_SYMBOL) -> Decimal | None:
    """First currency-marked amount in ``text``, normalized to a 2-place Decimal."""
    if not text:
        return None
    m = _amount_re(symbol).search(text)
    if not m:
        return None
    return parse_amount_decimal(m.group(1))


def find_amount_in_bodies(
    text: str | None, html: str | None, *, symbol: str = DEFAULT_CURRENCY_SYMBOL
) -> Decimal | None:
    amount = find_amount(text, symbol=symbol)
    if amount is None and html:
        amount = find_amount(html_to_text(html), symbol=symbol)
    return amount


def parse_amount_decimal(s: str) -> Decimal | None:
    raw = str(s or "").strip()
    raw = raw.replace("\u202f", "").replace("\xa0", "").replace(" ", "")
    raw = re.sub(r"[^0-9,.]", "", raw)
    if not raw or not any(ch.isdigit() for ch in raw):
        return None

    if "," in raw and "." in raw:
        decimal_sep = "," if raw.rfind(",") > raw.rfind(".") else "."
        thousands_sep = "." if decimal_sep == "," else ","
        normalized = raw.replace(thousands_sep, "").replace(decimal_sep, ".")
    elif "," in raw:
        normalized = _single_separator(raw, ",")
    elif "." in raw:
        normalized = _single_separator(raw, ".")
    else:
        normalized = raw

    try:
        return Decimal(normalized).quantize(Decimal("0.01"))
    except InvalidOperation:
        return None


def _single_separator(raw: str, sep: str) -> str:
    # "1.234.567" / "1,234,567" are grouped thousands; so is a lone group of exactly
    # three digits ("1.500" is fifteen hundred reais, not one and a half).
    if raw.count(sep) > 1:
        return raw.replace(sep, "")
    digits_after = len(raw) - raw.rfind(sep) - 1
    if digits_after == 3:
        return raw.replace(sep, "")
    return raw.replace(sep, ".")


def local_midnight(year: int, month: int, day: int) -> datetime | None:
    """Calendar day in the receipt timezone as an aware UTC datetime; None if invalid."""
    try:
        local = datetime(year, month, day, tzinfo=ZoneInfo(settings.receipt_timezone))
    except ValueError:
        return None
    return local.astimezone(UTC)


def parse_written_date(text: str | None, months: dict[str, int] = MONTHS_PT) -> datetime | None:
    """``"14 de março de 2026"`` style dates."""
    m = _WRITTEN_DATE_RE.search(text or "")
    if not m:
        return None
    day, month_name, year = m.groups()
    month = months.get(month_name.lower())
    if month is None:
        return None
    return local_midnight(int(year), month, int(day))


def parse_numeric_date(text: str | None) -> datetime | None:
    """``"14/03/2026"`` (day first). Out-of-range day or month yields None."""
    m = _NUMERIC_DATE_RE.search(text or "")
    if not m:
        return None
    day, month, year = (int(g) for g in m.groups())
    return local_midnight(year, month, day)


def find_labelled(text: str | None, labels: tuple[str, ...]) -> str | None:
    """Value following ``Label:`` up to the end of that line."""
    if not text:
        return None
    pattern = r"(?im)\b(?:" + "|".join(re.escape(lb) for lb in labels) + r"):[ \t]*(\S[^\r\n]*)"
    m = re.search(pattern, text)
    if not m:
        return None
    return m.group(1).strip() or None


def html_to_text(html: str) -> str:
    html = re.sub(r"(?is)<(script|style).*?>.*?</\1>", "", html)
    html = re.sub(r"(?i)<br\s*/?>", "\n", html)
    html = re.sub(r"(?i)</(p|div|tr|li|h[1-6])\s*>", "\n", html)
    html = re.sub(r"(?s)<[^>]+>", " ", html)
    html = unescape(html)
    lines = [re.sub(r"[ \t\xa0\u202f]+", " ", ln).strip() for ln in html.splitlines()]
    return "\n".join(ln for ln in lines if ln)
