"""Plain-text rendering for research and market tools."""

from __future__ import annotations

from typing import Iterable

FINANCIAL_DISCLAIMER = "I am not a licensed financial advisor. This is educational information only."
RULE = "---"


def _amount(value: float | None, decimals: int = 2, signed: bool = False) -> str:
    if value is None:
        return "n/a"
    sign = "+" if signed else ""
    return f"{value:{sign},.{decimals}f}"


def format_response(
    title: str,
    lines: Iterable[str],
    source: str | None = None,
    warning: str | None = None,
    include_disclaimer: bool = True,
) -> str:
    header = [title]
    if source:
        header.append(f"Source: {source}")
    if warning:
        header.append(f"Warning: {warning}")
    footer = [RULE, FINANCIAL_DISCLAIMER] if include_disclaimer else []
    return "\n".join([*header, *lines, *footer])


def line_money(label: str, value: float | None, currency: str = "KES", signed: bool = False) -> str:
    return f"{label}: {currency} {_amount(value, signed=signed)}"


def line_count(label: str, value: float | None) -> str:
    return f"{label}: {_amount(value, decimals=0)}"


def line_percent(label: str, value: float | None, signed: bool = False) -> str:
    if value is None:
        return f"{label}: n/a"
    return f"{label}: {_amount(value, signed=signed)}%"


def numbered(items: Iterable[str]) -> list[str]:
    return [f"{idx}. {item}" for idx, item in enumerate(items, start=1)]


def split_sections(text: str) -> list[str]:
    """Split advisory text into paragraphs on blank lines."""
    return [section.strip() for section in text.split("\n\n") if section.strip()]
