"""
Couche domaine (core).

Contient les entites metier, ports (interfaces abstraites), et objets valeur.
Cette couche n'a AUCUNE dependance vers l'infrastructure (adapters, frameworks, BDD).

Sous-packages :
- entities : MetadataRecord, MediaLink, StreamEncodingRecord
- ports : contrats des repositories, fournisseurs de metadonnees, sonde de flux
- value_objects : noms classes, identifiants distants, resultats types
"""
