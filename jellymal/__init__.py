"""
jellymal - Synchronisation de la progression Jellyfin vers MyAnimeList.

Ce package parcourt le catalogue Jellyfin d'un utilisateur, calcule le
dernier episode vu de chaque serie, traduit l'identifiant tvdb de la serie
en identifiant MyAnimeList via AniDB, puis met a jour la liste MyAnimeList
quand la progression Jellyfin est en avance.

Architecture : Hexagonale (Ports et Adaptateurs)
- core/ : Couche domaine (entites, ports, erreurs)
- services/ : Couche application (parcours, agregation, traduction, jetons)
- adapters/ : Couche infrastructure (CLI, clients API, fichiers)
"""

__version__ = "0.1.0"
