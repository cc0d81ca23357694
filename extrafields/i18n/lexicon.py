"""
Lexicon: message catalog for processor responses

Entries are keyed by dotted names and may carry ``{param}`` placeholders.
Unknown keys resolve to the key itself so a missing entry never hides the
failure it was meant to describe.
"""

from __future__ import annotations

import logging

logger = logging.getLogger(__name__)

# ── Catalogs ──────────────────────────────────────────────────────────────────

LEXICONS: dict[str, dict[str, str]] = {
    "en": {
        "access_denied": "Access denied.",
        "extrafields.field": "Field",
        "extrafields.field_err_ae": "A field with the name \"{name}\" already exists.",
        "extrafields.field_err_nf": "Field not found.",
        "extrafields.field_err_ns": "Field not specified.",
        "extrafields.field_err_ns_name": "Please specify a name for the field.",
        "extrafields.field_err_remove": "An error occurred while trying to remove the field.",
        "extrafields.field_err_save": "An error occurred while trying to save the field.",
        "extrafields.value_err_ns_resource": "Please specify a resource.",
        "extrafields.value_err_save": "An error occurred while trying to save the value.",
        "extrafields.value_err_remove": "An error occurred while trying to remove the value.",
        "extrafields.diagnostics_err": "Diagnostics reported failures.",
    },
    "fr": {
        "access_denied": "Accès refusé.",
        "extrafields.field": "Champ",
        "extrafields.field_err_ae": "Un champ nommé \"{name}\" existe déjà.",
        "extrafields.field_err_nf": "Champ introuvable.",
        "extrafields.field_err_ns": "Champ non spécifié.",
        "extrafields.field_err_ns_name": "Veuillez indiquer un nom pour le champ.",
        "extrafields.field_err_remove": "Une erreur est survenue lors de la suppression du champ.",
        "extrafields.field_err_save": "Une erreur est survenue lors de l'enregistrement du champ.",
        "extrafields.value_err_ns_resource": "Veuillez indiquer une ressource.",
        "extrafields.value_err_save": "Une erreur est survenue lors de l'enregistrement de la valeur.",
        "extrafields.value_err_remove": "Une erreur est survenue lors de la suppression de la valeur.",
        "extrafields.diagnostics_err": "Le diagnostic a signalé des erreurs.",
    },
}

DEFAULT_LANGUAGE = "en"


class _KeepMissing(dict):
    def __missing__(self, key: str) -> str:
        return "{" + key + "}"


class Lexicon:
    """Localized message lookup with English fallback."""

    def __init__(self, language: str = DEFAULT_LANGUAGE) -> None:
        base = language.split("-")[0].lower()
        if base not in LEXICONS:
            logger.warning("No lexicon for language %r, using %r", language, DEFAULT_LANGUAGE)
            base = DEFAULT_LANGUAGE
        self.language = base

    def get(self, key: str, **params) -> str:
        entry = LEXICONS[self.language].get(key) or LEXICONS[DEFAULT_LANGUAGE].get(key)
        if entry is None:
            return key
        return entry.format_map(_KeepMissing(params))

    __call__ = get
