"""Sous-package CLI commands - re-exporte les commandes publiques."""

from jellymal.adapters.cli.commands.sync_commands import (
    authorize,
    sync,
)
from jellymal.adapters.cli.commands.mapping_commands import (
    update_mappings,
)

__all__ = [
    "authorize",
    "sync",
    "update_mappings",
]
