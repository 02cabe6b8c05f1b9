"""
Services applicatifs (cas d'usage).

- ImportCoordinator : import d'une bibliotheque
- MetadataResolver : recherche et import de metadonnees
- StreamAnalyzer : analyse des flux via la sonde
- PreviewGenerator : generation des index BIF
"""
