"""
Configuration de l'application via pydantic-settings.

La configuration est chargée depuis les variables d'environnement avec le préfixe
MEDIAINGEST_, et peut optionnellement être fournie via un fichier .env.

La clé TMDB est optionnelle : sans elle, aucun fournisseur de métadonnées n'est
enregistré et les imports aboutissent à ErrorMatchNotFound.
"""

from pathlib import Path
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Fichier .env à la racine du projet (parent de mediaingest/)
_PROJECT_ROOT = Path(__file__).parent.parent
_ENV_FILE = _PROJECT_ROOT / ".env"


class Settings(BaseSettings):
    """Paramètres de l'application.

    Tous les paramètres peuvent être surchargés via des variables d'environnement
    avec le préfixe MEDIAINGEST_.
    Exemple : MEDIAINGEST_IMPORT_CONCURRENCY=5
    """

    model_config = SettingsConfigDict(
        env_prefix="MEDIAINGEST_",
        env_file=_ENV_FILE if _ENV_FILE.exists() else ".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Chemins (avec expansion ~)
    data_dir: Path = Field(default=Path("~/.local/share/mediaingest"))
    cache_dir: Path = Field(default=Path("~/.cache/mediaingest/api"))

    # Base de données
    database_url: str = Field(default="sqlite:///mediaingest.db")

    # Catalogue TMDB
    tmdb_api_key: Optional[str] = Field(default=None)
    tmdb_language: str = Field(default="en-US")

    # Outils externes
    ffprobe_path: str = Field(default="ffprobe")
    ffmpeg_path: str = Field(default="ffmpeg")
    probe_timeout_seconds: float = Field(default=60.0, gt=0)

    # Concurrence
    import_concurrency: int = Field(default=3, ge=1)
    season_concurrency: int = Field(default=5, ge=1)
    analyze_concurrency: int = Field(default=2, ge=1)

    # Index de prévisualisation
    preview_interval_seconds: int = Field(default=5, ge=1)
    preview_image_width: int = Field(default=240, ge=16)
    preview_image_quality: int = Field(default=2, ge=1, le=31)

    # Logging (fichier + stderr, rotation 10MB, 5 fichiers de rétention)
    log_level: str = Field(default="INFO")
    log_file: Path = Field(default=Path("logs/mediaingest.log"))
    log_rotation_size: str = Field(default="10 MB")
    log_retention_count: int = Field(default=5)

    @field_validator("data_dir", "cache_dir", "log_file", mode="before")
    @classmethod
    def expand_path(cls, v: str | Path) -> Path:
        """Étend ~ vers le répertoire home dans les chemins."""
        return Path(v).expanduser()

    @property
    def tmdb_enabled(self) -> bool:
        """Vérifie si l'API TMDB est configurée."""
        return bool(self.tmdb_api_key)

    @property
    def previews_dir(self) -> Path:
        """Répertoire racine des index BIF."""
        return self.data_dir / "previews"
