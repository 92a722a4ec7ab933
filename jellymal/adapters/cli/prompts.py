"""
Interactions utilisateur de la CLI.

- console : instance Rich Console partagee
- ask_redirect_url : etape interactive de l'autorisation OAuth
"""

from rich.console import Console
from rich.prompt import Prompt

console = Console()


def ask_redirect_url(authorization_url: str) -> str:
    """
    Affiche l'URL d'autorisation et demande l'URL de redirection.

    Args:
        authorization_url: URL a ouvrir dans un navigateur

    Returns:
        URL de redirection collee par l'utilisateur
    """
    console.print("\n[bold]Autorisation MyAnimeList requise[/bold]")
    console.print("Ouvrez cette URL dans un navigateur :")
    console.print(authorization_url, soft_wrap=True, highlight=False)
    return Prompt.ask("\nCollez ici l'URL de redirection", console=console)
