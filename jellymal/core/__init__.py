"""
Couche domaine (core).

Contient les entites metier, ports (interfaces abstraites) et la taxonomie
d'erreurs. Cette couche n'a AUCUNE dependance vers l'infrastructure.

Sous-packages :
- entities/ : CatalogItem, LatestEpisode, Credential, IdentityMapping
- ports/ : Interfaces abstraites pour les adaptateurs
"""
