"""Couche infrastructure : persistance SQLModel et document de reglages."""
