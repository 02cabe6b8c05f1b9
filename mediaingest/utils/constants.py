"""
Constantes globales pour MediaIngest.

Ce module contient les constantes utilisees dans l'application:
- Extensions video reconnues par l'analyse et l'import
- Parametres par defaut des index de previsualisation
"""

# Extensions video reconnues (comparees en minuscules, point inclus)
VIDEO_EXTENSIONS = frozenset({
    ".webm",
    ".mpg",
    ".mp2",
    ".mpeg",
    ".mov",
    ".mkv",
    ".avi",
    ".m4p",
    ".mp4",
    ".ogg",
    ".mts",
    ".m2ts",
    ".ts",
    ".wmv",
    ".mpe",
    ".mpv",
    ".m4v",
})

# Intervalle par defaut entre deux vignettes d'un index BIF (ms)
DEFAULT_FRAME_INTERVAL_MS = 5000

# Nom du fichier BIF genere pour chaque media
PREVIEW_FILE_NAME = "index.bif"


def is_video_file(name: str) -> bool:
    """Indique si un nom de fichier porte une extension video reconnue."""
    dot = name.rfind(".")
    if dot <= 0:
        return False
    return name[dot:].lower() in VIDEO_EXTENSIONS
