"""
Adaptateurs : implementations concretes des ports.

- api : client HTTP TMDB, cache disque et retry
- metadata : fournisseur de metadonnees TMDB
- parsing : classification des noms de fichiers et dossiers
- preview : codec BIF des index de previsualisation
- probe : sonde ffprobe et normalisation des flux
"""
