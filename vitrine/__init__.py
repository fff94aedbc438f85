"""
Vitrine - Catalogue vidéo et demandes de soumission d'une agence de production.

Ce package fournit l'import du catalogue depuis un export tableur, le moteur
de recommandation de références vidéo et la prise en charge des demandes
de soumission.

Architecture : Hexagonale (Ports et Adaptateurs)
- core/ : Couche domaine (entités, ports, objets valeur)
- services/ : Couche application (cas d'utilisation, orchestration)
- adapters/ : Couche infrastructure (CLI, CSV, courriel)
- infrastructure/ : Persistance SQLModel
- web/ : API FastAPI
"""

__version__ = "0.1.0"
