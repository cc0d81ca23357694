"""
Host context

The narrow interface the processors and diagnostics need from the
surrounding CMS: option lookup, lexicon lookup, logging, a persistence
session and a permission check.
"""

from __future__ import annotations

import logging
from typing import Any

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from extrafields.config import Settings, settings
from extrafields.database import get_db
from extrafields.i18n import Lexicon

NAMESPACE = "extrafields"

ALL_PERMISSIONS = "*"


class Host:
    """Per-request host context handed to processors."""

    namespace = NAMESPACE

    def __init__(
        self,
        db: AsyncSession | None,
        config: Settings | None = None,
        options: dict[str, Any] | None = None,
        permissions: set[str] | None = None,
        language: str | None = None,
    ):
        self.db = db
        self.settings = config or settings
        self.options = options or {}
        self.permissions = permissions if permissions is not None else {ALL_PERMISSIONS}
        self._lexicon = Lexicon(language or self.settings.lexicon_language)
        self.logger = logging.getLogger(f"{NAMESPACE}.host")

    def get_option(self, key: str, default: Any = None) -> Any:
        """
        Look up a component option.

        Order: ``extrafields.<key>`` in the request options, then
        ``extrafields_<key>`` in the settings options, then ``default``.
        """
        request_key = f"{self.namespace}.{key}"
        if request_key in self.options:
            return self.options[request_key]
        return self.settings.options.get(f"{self.namespace}_{key}", default)

    def lexicon(self, key: str, **params) -> str:
        return self._lexicon.get(key, **params)

    def log(self, level: int | str, message: str, context: str = "") -> None:
        if isinstance(level, str):
            level = logging.getLevelName(level.upper())
            if not isinstance(level, int):
                level = logging.INFO
        self.logger.log(level, message, extra={"context": context})

    def has_permission(self, name: str) -> bool:
        return ALL_PERMISSIONS in self.permissions or name in self.permissions


async def get_current_permissions() -> set[str]:
    """Permissions granted to the caller; override to plug in CMS auth."""
    return {ALL_PERMISSIONS}


async def get_host(
    db: AsyncSession = Depends(get_db),
    permissions: set[str] = Depends(get_current_permissions),
) -> Host:
    return Host(db=db, permissions=permissions)
