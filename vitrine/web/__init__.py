"""Interface web (FastAPI)."""
