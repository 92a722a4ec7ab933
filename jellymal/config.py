"""
Configuration de l'application via pydantic-settings.

La configuration est chargee depuis les variables d'environnement avec le prefixe JELLYMAL_,
et peut optionnellement etre fournie via un fichier .env.

Les acces Jellyfin et MyAnimeList sont optionnels au chargement : les commandes
qui en ont besoin verifient leur presence et s'arretent avec un message explicite.
"""

from pathlib import Path
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from jellymal.utils.constants import MAL_API_URL, MAL_AUTH_URL, MAL_TOKEN_URL

# Trouver le fichier .env a la racine du projet (parent de jellymal/)
_PROJECT_ROOT = Path(__file__).parent.parent
_ENV_FILE = _PROJECT_ROOT / ".env"


class Settings(BaseSettings):
    """Parametres de l'application avec support des variables d'environnement.

    Tous les parametres peuvent etre surcharges via des variables d'environnement
    avec le prefixe JELLYMAL_.
    Exemple : JELLYMAL_JELLYFIN_HOST=http://localhost:8096

    Les chemins sont automatiquement etendus (~ -> repertoire home).
    """

    model_config = SettingsConfigDict(
        env_prefix="JELLYMAL_",
        env_file=_ENV_FILE if _ENV_FILE.exists() else ".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Jellyfin
    jellyfin_host: Optional[str] = Field(default=None)
    jellyfin_token: Optional[str] = Field(default=None)
    jellyfin_user: Optional[str] = Field(default=None)

    # MyAnimeList (application OAuth)
    mal_client_id: Optional[str] = Field(default=None)
    mal_client_secret: Optional[str] = Field(default=None)
    mal_redirect_url: Optional[str] = Field(default=None)
    mal_auth_url: str = Field(default=MAL_AUTH_URL)
    mal_token_url: str = Field(default=MAL_TOKEN_URL)
    mal_api_url: str = Field(default=MAL_API_URL)

    # Jeton OAuth persiste
    token_path: Path = Field(default=Path("token.json"))
    near_expiry_days: int = Field(default=5, ge=0)

    # Datasets de correspondance
    mappings_dir: Path = Field(default=Path("mappings"))
    anidb_mapping_file: str = Field(default="anime-list-master.xml")
    mal_mapping_file: str = Field(default="anime-list-full.json")
    mappings_max_age_days: int = Field(default=7, ge=1)

    # Logging (fichier + stderr, rotation 10MB, 5 fichiers de retention)
    log_level: str = Field(default="INFO")
    log_file: Path = Field(default=Path("logs/jellymal.log"))
    log_rotation_size: str = Field(default="10 MB")
    log_retention_count: int = Field(default=5)

    @field_validator("token_path", "mappings_dir", "log_file", mode="before")
    @classmethod
    def expand_path(cls, v: str | Path) -> Path:
        """Etend ~ vers le repertoire home dans les chemins."""
        return Path(v).expanduser()

    @property
    def anidb_mapping_path(self) -> Path:
        return self.mappings_dir / self.anidb_mapping_file

    @property
    def mal_mapping_path(self) -> Path:
        return self.mappings_dir / self.mal_mapping_file

    @property
    def near_expiry_ms(self) -> int:
        """Seuil de rafraichissement proactif en millisecondes."""
        return self.near_expiry_days * 24 * 60 * 60 * 1000

    @property
    def jellyfin_enabled(self) -> bool:
        """Verifie si l'acces Jellyfin est configure."""
        return all((self.jellyfin_host, self.jellyfin_token, self.jellyfin_user))

    @property
    def mal_enabled(self) -> bool:
        """Verifie si l'application MyAnimeList est configuree."""
        return all((self.mal_client_id, self.mal_client_secret, self.mal_redirect_url))
