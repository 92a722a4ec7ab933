"""
Commande CLI de mise a jour des tables de correspondance.
"""

import asyncio
from typing import Annotated

import typer

from jellymal.adapters.cli.helpers import console, with_container
from jellymal.core.errors import JellymalError


def update_mappings(
    force: Annotated[
        bool,
        typer.Option("--force", "-f", help="Telecharge meme si les fichiers sont recents"),
    ] = False,
) -> None:
    """Telecharge les tables de correspondance tvdb/anidb/MyAnimeList."""
    asyncio.run(_update_mappings_async(force))


@with_container()
async def _update_mappings_async(container, force: bool) -> None:
    """Implementation async de la commande update-mappings."""
    downloader = container.mapping_downloader()

    try:
        with console.status("[cyan]Telechargement des tables de correspondance..."):
            statuses = await downloader.update_all(force=force)
    except JellymalError as e:
        console.print(f"[red]Erreur:[/red] {e}")
        raise typer.Exit(code=1)

    for status in statuses:
        if status.downloaded:
            console.print(f"  [green]✓[/green] {status.name} [dim]{status.path}[/dim]")
        else:
            console.print(f"  [dim]-[/dim] {status.name} [dim]deja a jour[/dim]")
