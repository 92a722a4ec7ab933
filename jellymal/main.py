"""
Point d'entree CLI de jellymal.

Configure le logging et fournit les commandes CLI.
"""

from typing import Annotated

import typer
from loguru import logger

from . import __version__
from .adapters.cli.commands import authorize, sync, update_mappings
from .config import Settings
from .container import Container
from .logging_config import configure_logging, verbosity_to_level

app = typer.Typer(
    name="jellymal",
    help="Synchronisation de la progression anime Jellyfin vers MyAnimeList",
)
container = Container()


@app.callback()
def main_callback(
    verbose: Annotated[
        int,
        typer.Option(
            "--verbose", "-v", count=True, help="Augmenter la verbosite (-v)"
        ),
    ] = 0,
    quiet: Annotated[
        bool,
        typer.Option("--quiet", "-q", help="Mode silencieux (erreurs uniquement)"),
    ] = False,
) -> None:
    """jellymal - Jellyfin vers MyAnimeList."""
    settings = get_config()
    level = settings.log_level
    if verbose or quiet:
        level = verbosity_to_level(verbose, quiet)
    configure_logging(
        log_level=level,
        log_file=settings.log_file,
        rotation_size=settings.log_rotation_size,
        retention_count=settings.log_retention_count,
    )


app.command()(sync)
app.command()(authorize)
app.command(name="update-mappings")(update_mappings)


def get_config() -> Settings:
    """Recupere les parametres de l'application depuis le container DI."""
    return container.config()


@app.command()
def info() -> None:
    """Affiche la configuration actuelle."""
    config = get_config()
    logger.info("Configuration jellymal")
    typer.echo(f"Jellyfin : {config.jellyfin_host or 'non configure'}")
    typer.echo(f"Utilisateur Jellyfin : {config.jellyfin_user or 'non configure'}")
    typer.echo(f"Application MyAnimeList : {'configuree' if config.mal_enabled else 'non configuree'}")
    typer.echo(f"Jeton : {config.token_path}")
    typer.echo(f"Correspondance anidb : {config.anidb_mapping_path}")
    typer.echo(f"Correspondance MyAnimeList : {config.mal_mapping_path}")
    typer.echo(f"Niveau de log : {config.log_level}")


@app.command()
def version() -> None:
    """Affiche les informations de version."""
    typer.echo(f"jellymal v{__version__}")


def main() -> None:
    """Point d'entree de l'application."""
    app()


if __name__ == "__main__":
    main()
