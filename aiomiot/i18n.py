# SPDX-License-Identifier: MIT
# Copyright (c) 2021-2025
"""
Message catalog for exception and log texts.

Catalogs live in aiomiot/translations: strings.json holds the English texts,
<locale>.json overrides them per key. A key missing everywhere renders as
the key itself; placeholders without a value stay in the text.
"""

from __future__ import annotations

from functools import cache
import json
import logging
import pkgutil
from typing import Any, Final

from aiomiot.const import DEFAULT_LOCALE

_LOGGER: Final = logging.getLogger(__name__)

_BASE_RESOURCE: Final = "strings.json"

_current_locale: str = DEFAULT_LOCALE


class _KeepMissing(dict[str, str]):
    def __missing__(self, key: str) -> str:
        return "{" + key + "}"


def _load_resource(*, resource: str) -> dict[str, str]:
    """Return the texts of one catalog file, or an empty dict if it is missing or broken."""
    try:
        if not (raw := pkgutil.get_data(__package__ or "aiomiot", f"translations/{resource}")):
            return {}
        return {str(key): str(text) for key, text in json.loads(raw.decode(encoding="utf-8")).items()}
    except (OSError, ValueError) as exc:
        _LOGGER.debug("I18N: Failed to load catalog %s: %s", resource, exc)
        return {}


@cache
def _catalog(locale: str) -> dict[str, str]:
    """Return the base texts overridden by the texts of the locale."""
    base = _load_resource(resource=_BASE_RESOURCE)
    if locale == DEFAULT_LOCALE:
        return base
    return {**base, **_load_resource(resource=f"{locale}.json")}


def set_locale(*, locale: str | None) -> None:
    """Select the locale of all following texts. Empty values select English."""
    global _current_locale  # noqa: PLW0603  # pylint: disable=global-statement
    _current_locale = (locale or "").strip() or DEFAULT_LOCALE


def get_locale() -> str:
    """Return the active locale."""
    return _current_locale


def tr(key: str, /, **kwargs: Any) -> str:
    """Render the text of key in the active locale with the given placeholder values."""
    template = _catalog(_current_locale).get(key, key)
    try:
        return template.format_map(_KeepMissing({name: str(value) for name, value in kwargs.items()}))
    except (IndexError, ValueError):
        return template
