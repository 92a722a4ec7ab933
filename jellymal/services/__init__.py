"""
Couche application : cas d'utilisation de la synchronisation.

- CatalogTraversalService : parcours du catalogue Jellyfin
- WatchStateAggregator : dernier episode vu par serie
- IdentifierTranslator : tvdb -> anidb -> MyAnimeList
- CredentialLifecycleManager : jeton OAuth MyAnimeList
- ReconciliationService : pilote de la synchronisation
"""
