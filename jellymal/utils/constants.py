"""
Constantes globales pour jellymal.

- Endpoints MyAnimeList (API v2 et OAuth2)
- URLs des datasets de correspondance d'identifiants
- Seuil de rafraichissement proactif du jeton
"""

# MyAnimeList
MAL_API_URL = "https://api.myanimelist.net/v2"
MAL_AUTH_URL = "https://myanimelist.net/v1/oauth2/authorize"
MAL_TOKEN_URL = "https://myanimelist.net/v1/oauth2/token"

# Datasets de correspondance (projets Anime-Lists et Fribb)
ANIDB_MAPPING_URL = (
    "https://raw.githubusercontent.com/Anime-Lists/anime-lists/master/anime-list-master.xml"
)
MAL_MAPPING_URL = (
    "https://raw.githubusercontent.com/Fribb/anime-lists/master/anime-list-full.json"
)

# Cycle de vie du jeton
DAY_MS = 24 * 60 * 60 * 1000
NEAR_EXPIRY_MS = 5 * DAY_MS  # 5 jours en millisecondes (432000000)
