"""Couche domaine : entités, objets valeur et ports."""
