"""Classification des noms de fichiers et dossiers."""

from mediaingest.adapters.parsing.path_classifier import PathClassifier

__all__ = ["PathClassifier"]
