"""
Utilitaires partages pour les commandes CLI de jellymal.

Ce module fournit :
- with_container : decorateur injectant un container initialise
- require_settings : arret propre si la configuration est incomplete
- console : instance Rich Console partagee (reexportee depuis prompts)
"""

from functools import wraps

import typer

from jellymal.config import Settings
from jellymal.container import Container

# Re-export console depuis prompts pour que tous les modules puissent l'importer ici
from jellymal.adapters.cli.prompts import console


def with_container():
    """
    Decorateur qui injecte un container en premier argument.

    Usage:
        @with_container()
        async def my_command(container, ...):
            config = container.config()
    """
    def decorator(func):
        @wraps(func)
        async def wrapper(*args, **kwargs):
            container = Container()
            return await func(container, *args, **kwargs)
        return wrapper
    return decorator


def require_settings(settings: Settings, jellyfin: bool = False, mal: bool = False) -> None:
    """
    Verifie que les parametres necessaires a une commande sont definis.

    Raises:
        typer.Exit: code 1 si un groupe de parametres manque
    """
    missing = []
    if jellyfin and not settings.jellyfin_enabled:
        missing.append("JELLYMAL_JELLYFIN_HOST, JELLYMAL_JELLYFIN_TOKEN, JELLYMAL_JELLYFIN_USER")
    if mal and not settings.mal_enabled:
        missing.append(
            "JELLYMAL_MAL_CLIENT_ID, JELLYMAL_MAL_CLIENT_SECRET, JELLYMAL_MAL_REDIRECT_URL"
        )
    if missing:
        console.print("[red]Configuration incomplete.[/red] Variables requises :")
        for group in missing:
            console.print(f"  [dim]{group}[/dim]")
        raise typer.Exit(code=1)
