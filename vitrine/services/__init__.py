"""
Couche services (cas d'utilisation).

Les services orchestrent la logique du domaine : import du catalogue,
recommandation de references, filtrage du portfolio, reception des
demandes de soumission.

Les services dependent des ports (interfaces) de core/ ; seuls les
parseurs purs de adapters/spreadsheet/ sont importes directement.
"""
