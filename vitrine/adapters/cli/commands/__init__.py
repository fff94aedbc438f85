"""Sous-package CLI commands - re-exporte les commandes publiques."""

from vitrine.adapters.cli.commands.import_commands import import_csv
from vitrine.adapters.cli.commands.settings_commands import (
    settings_app,
    settings_load,
    settings_reset,
    settings_show,
)
from vitrine.adapters.cli.commands.taxonomy_commands import taxonomies

__all__ = [
    "import_csv",
    "settings_app",
    "settings_load",
    "settings_reset",
    "settings_show",
    "taxonomies",
]
