"""
Commandes CLI de synchronisation Jellyfin -> MyAnimeList et d'autorisation.
"""

import asyncio
from typing import Annotated

import typer

from jellymal.adapters.cli.helpers import console, require_settings, with_container
from jellymal.core.errors import JellymalError
from jellymal.services.reconciliation import ProgressInfo, SyncResult


def sync(
    dry_run: Annotated[
        bool,
        typer.Option(
            "--dry-run",
            help="Affiche les mises a jour prevues sans les envoyer a MyAnimeList",
        ),
    ] = False,
) -> None:
    """Reporte le dernier episode vu dans Jellyfin vers MyAnimeList."""
    asyncio.run(_sync_async(dry_run))


def _render_progress(info: ProgressInfo) -> None:
    """Affiche une ligne par serie traitee."""
    label = f"{info.series_name} S{info.season_number:02d}E{info.episode_number:02d}"
    prefix = f"[dim]{info.current}/{info.total}[/dim]"

    if info.result == SyncResult.UPDATED:
        console.print(
            f"  {prefix} [green]✓[/green] {label} "
            f"[dim](MAL {info.mal_id}: {info.previous_episode_number} -> {info.episode_number})[/dim]"
        )
    elif info.result == SyncResult.WOULD_UPDATE:
        console.print(
            f"  {prefix} [cyan]→[/cyan] {label} "
            f"[dim](MAL {info.mal_id}: {info.previous_episode_number} -> {info.episode_number})[/dim]"
        )
    elif info.result == SyncResult.UNMAPPED:
        console.print(f"  {prefix} [yellow]?[/yellow] {label} - {info.error}")
    else:
        console.print(f"  {prefix} [dim]-[/dim] {label} [dim]a jour[/dim]")


@with_container()
async def _sync_async(container, dry_run: bool) -> None:
    """Implementation async de la commande sync."""
    settings = container.config()
    require_settings(settings, jellyfin=True, mal=True)

    jellyfin_client = container.jellyfin_client()
    oauth_client = container.oauth_client()

    try:
        service = container.reconciliation_service()
        mode = " [yellow](simulation)[/yellow]" if dry_run else ""
        console.print(
            f"[bold cyan]Synchronisation[/bold cyan] de {settings.jellyfin_user}{mode}\n"
        )

        stats = await service.run(
            settings.jellyfin_user,
            dry_run=dry_run,
            on_progress=_render_progress,
        )
    except FileNotFoundError as e:
        console.print(f"[red]Erreur:[/red] {e}")
        console.print("[dim]Lancez d'abord: jellymal update-mappings[/dim]")
        raise typer.Exit(code=1)
    except JellymalError as e:
        console.print(f"[red]Erreur:[/red] {e}")
        raise typer.Exit(code=1)
    finally:
        await jellyfin_client.close()
        await oauth_client.close()

    if stats.total == 0:
        console.print("[yellow]Aucun episode vu dans Jellyfin.[/yellow]")
        return

    # Afficher le resume
    console.print("\n[bold]Resume:[/bold]")
    console.print(f"  {stats.total} serie(s) analysee(s)")
    if dry_run:
        console.print(f"  [cyan]{stats.would_update}[/cyan] mise(s) a jour prevue(s)")
    else:
        console.print(f"  [green]{stats.updated}[/green] mise(s) a jour")
    console.print(f"  [dim]{stats.up_to_date}[/dim] deja a jour")
    if stats.unmapped > 0:
        console.print(f"  [yellow]{stats.unmapped}[/yellow] sans correspondance")


def authorize() -> None:
    """Force une nouvelle autorisation MyAnimeList et enregistre le jeton."""
    asyncio.run(_authorize_async())


@with_container()
async def _authorize_async(container) -> None:
    """Implementation async de la commande authorize."""
    settings = container.config()
    require_settings(settings, mal=True)

    oauth_client = container.oauth_client()
    try:
        manager = container.credential_manager()
        credential = await manager.reauthorize()
    except JellymalError as e:
        console.print(f"[red]Erreur:[/red] {e}")
        raise typer.Exit(code=1)
    finally:
        await oauth_client.close()

    console.print(
        f"[green]Jeton enregistre[/green] dans {settings.token_path} "
        f"[dim](expire a {credential.expires_at})[/dim]"
    )
