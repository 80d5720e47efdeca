"""Database property values: write payloads and read-back helpers.

:func:`format_prop_values` turns ``PropValue`` triples into the
``properties`` mapping of a page create/update request.
:func:`get_prop_value_from_page` reads one property of a page object back
as a string.

Both are soft-failing: unsupported types are omitted (write side) or read
as ``""`` (read side), and problems are logged rather than raised.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Callable, Iterable
from datetime import date, datetime
from typing import Any

from notionkit.models import PropertyType, PropValue
from notionkit.observability import get_logger, log_event

log = get_logger("notionkit.properties")

_LEADING_INT_RE = re.compile(r"^\s*([+-]?\d+)")

MULTI_SELECT_SEPARATOR = ","


def _coerce_type(prop_type: PropertyType | str) -> PropertyType | None:
    try:
        return PropertyType(prop_type)
    except ValueError:
        return None


def _type_name(prop_type: PropertyType | str) -> str:
    return prop_type.value if isinstance(prop_type, PropertyType) else str(prop_type)


# ---------------------------------------------------------------------------
# Write side
# ---------------------------------------------------------------------------

def parse_leading_int(value: str) -> int | None:
    """Parse the integer prefix of *value* (``"2.5"`` -> ``2``).

    Returns ``None`` when *value* does not start with a digit, an optional
    sign and optional leading whitespace.
    """
    match = _LEADING_INT_RE.match(value)
    return int(match.group(1)) if match else None


def format_date_value(value: str) -> str | None:
    """Normalise *value* to a ``YYYY-MM-DD`` string.

    A bare ISO date is returned unchanged.  An ISO datetime with an offset
    is converted to the local calendar date; a naive datetime keeps its
    own date.  Returns ``None`` when *value* is not ISO 8601.
    """
    text = value.strip()
    try:
        return date.fromisoformat(text).isoformat()
    except ValueError:
        pass
    try:
        moment = datetime.fromisoformat(text.replace("Z", "+00:00"))
    except ValueError:
        return None
    if moment.tzinfo is not None:
        moment = moment.astimezone()
    return moment.date().isoformat()


def _text_array(value: str) -> list[dict[str, Any]]:
    return [{"text": {"content": value}}]


def _format_title(value: str) -> dict[str, Any]:
    return {"title": _text_array(value)}


def _format_rich_text(value: str) -> dict[str, Any]:
    return {"rich_text": _text_array(value)}


def _format_select(value: str) -> dict[str, Any]:
    return {"select": {"name": value}}


def _format_multi_select(value: str) -> dict[str, Any]:
    # Split strictly on "," -- option names keep their surrounding spaces.
    return {"multi_select": [{"name": part} for part in value.split(MULTI_SELECT_SEPARATOR)]}


def _format_url(value: str) -> dict[str, Any]:
    return {"url": value}


def _format_number(value: str) -> dict[str, Any]:
    return {"number": parse_leading_int(value)}


def _format_status(value: str) -> dict[str, Any]:
    return {"status": {"name": value}}


def _format_checkbox(value: str) -> dict[str, Any]:
    return {"checkbox": value == "true"}


def _format_date(value: str) -> dict[str, Any] | None:
    start = format_date_value(value)
    if start is None:
        return None
    return {"date": {"start": start, "end": None, "time_zone": None}}


_FORMATTERS: dict[PropertyType, Callable[[str], dict[str, Any] | None]] = {
    PropertyType.TITLE: _format_title,
    PropertyType.SELECT: _format_select,
    PropertyType.MULTI_SELECT: _format_multi_select,
    PropertyType.RICH_TEXT: _format_rich_text,
    PropertyType.URL: _format_url,
    PropertyType.NUMBER: _format_number,
    PropertyType.STATUS: _format_status,
    PropertyType.CHECKBOX: _format_checkbox,
    PropertyType.DATE: _format_date,
}


def format_prop_values(prop_values: Iterable[PropValue]) -> dict[str, dict[str, Any]]:
    """Build a page ``properties`` payload from *prop_values*.

    Parameters
    ----------
    prop_values:
        Property triples.  Later entries with the same name overwrite
        earlier ones.

    Returns
    -------
    dict
        Mapping of property name to its write-schema value.  Types without
        a writer (``people``, ``files``, timestamps) and dates that do not
        parse are left out.

    Examples
    --------
    >>> format_prop_values([PropValue("Tags", PropertyType.MULTI_SELECT, "a, b")])
    {'Tags': {'multi_select': [{'name': 'a'}, {'name': ' b'}]}}
    """
    properties: dict[str, dict[str, Any]] = {}
    for prop in prop_values:
        kind = _coerce_type(prop.type)
        formatter = _FORMATTERS.get(kind) if kind is not None else None
        if formatter is None:
            log_event(
                log, logging.DEBUG, "Property type has no writer",
                op="format_prop_values", prop_name=prop.name, prop_type=_type_name(prop.type),
            )
            continue
        formatted = formatter(prop.value)
        if formatted is None:
            log_event(
                log, logging.WARNING, "Property value could not be formatted",
                op="format_prop_values", prop_name=prop.name, prop_type=_type_name(prop.type),
            )
            continue
        properties[prop.name] = formatted
    return properties


# ---------------------------------------------------------------------------
# Read side
# ---------------------------------------------------------------------------

def _read_first_plain_text(items: list[dict[str, Any]]) -> str:
    return items[0]["plain_text"]


def _read_option_name(option: dict[str, Any]) -> str:
    return option["name"]


def _read_option_names(options: list[dict[str, Any]]) -> str:
    return MULTI_SELECT_SEPARATOR.join(option["name"] for option in options)


def _read_date_start(value: dict[str, Any]) -> str:
    return value["start"]


def _read_raw(value: Any) -> str:
    return str(value)


def _read_number(value: int | float) -> str:
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    return str(value)


def _read_checkbox(value: bool) -> str:
    return "true" if value else "false"


_READERS: dict[PropertyType, Callable[[Any], str]] = {
    PropertyType.TITLE: _read_first_plain_text,
    PropertyType.RICH_TEXT: _read_first_plain_text,
    PropertyType.SELECT: _read_option_name,
    PropertyType.STATUS: _read_option_name,
    PropertyType.MULTI_SELECT: _read_option_names,
    PropertyType.DATE: _read_date_start,
    PropertyType.CREATED_TIME: _read_raw,
    PropertyType.LAST_EDITED_TIME: _read_raw,
    PropertyType.URL: _read_raw,
    PropertyType.PHONE_NUMBER: _read_raw,
    PropertyType.NUMBER: _read_number,
    PropertyType.CHECKBOX: _read_checkbox,
}


def get_prop_value_from_page(
    page: dict[str, Any],
    prop_type: PropertyType | str,
    prop_name: str,
) -> str:
    """Read property *prop_name* of *page* as a string.

    Never raises.  Returns ``""`` when the property is missing, empty,
    malformed or of a type without a reader; missing and malformed
    properties are logged.
    """
    prop = (page.get("properties") or {}).get(prop_name)
    if not prop:
        log_event(
            log, logging.ERROR, f"No {prop_name} property found in page object",
            op="get_prop_value", page_id=page.get("id"), prop_name=prop_name,
            available=sorted(page.get("properties") or {}),
        )
        return ""

    kind = _coerce_type(prop_type)
    reader = _READERS.get(kind) if kind is not None else None
    if kind is None or reader is None:
        return ""

    value = prop.get(kind.value)
    if value is None:
        return ""

    try:
        return reader(value)
    except (KeyError, IndexError, TypeError, AttributeError) as exc:
        log_event(
            log, logging.ERROR, "Property value could not be read",
            op="get_prop_value", page_id=page.get("id"), prop_name=prop_name,
            prop_type=kind.value, error=str(exc),
        )
        return ""
