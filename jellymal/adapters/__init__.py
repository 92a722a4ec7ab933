"""
Couche infrastructure : implementations concretes des ports.

- api/ : clients Jellyfin, MyAnimeList et OAuth
- mapping/ : datasets de correspondance d'identifiants
- persistence/ : fichier du jeton OAuth
- cli/ : commandes Typer
"""
