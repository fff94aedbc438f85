"""
Couche adaptateurs.

Les adaptateurs implementent les ports definis dans core/ports/ et fournissent
des implementations concretes pour les systemes externes.

Sous-packages :
- cli/ : Interface ligne de commande (Typer)
- spreadsheet/ : Lecture des exports tableur (CSV, TSV...)
- email/ : Notification par courriel (Resend)
"""
