"""
Entités de taxonomie.

Une taxonomie est un tag canonique d'une des six catégories fixes
(type, objectif, keyword, style, feel, parametre) associé aux vidéos
du catalogue via des lignes de jointure.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class TaxonomyKind(str, Enum):
    """Catégorie d'un tag de taxonomie."""

    TYPE = "type"
    OBJECTIF = "objectif"
    KEYWORD = "keyword"
    STYLE = "style"
    FEEL = "feel"
    PARAMETRE = "parametre"


# Catégories regroupées sous "Mots clés" dans l'administration et les suggestions
KEYWORD_GROUP_KINDS: tuple[TaxonomyKind, ...] = (
    TaxonomyKind.KEYWORD,
    TaxonomyKind.STYLE,
    TaxonomyKind.PARAMETRE,
)


@dataclass(frozen=True)
class Taxonomy:
    """
    Tag canonique d'une catégorie donnée.

    Attributs :
        id : Identifiant en base (None avant insertion)
        kind : Catégorie du tag (une valeur de TaxonomyKind)
        label : Libellé affiché, tel que saisi

    Lève ValueError si `kind` n'est pas une catégorie connue.
    """

    kind: TaxonomyKind
    label: str
    id: Optional[int] = None

    def __post_init__(self) -> None:
        # Accepte la valeur brute ("type") et rejette toute catégorie inconnue
        object.__setattr__(self, "kind", TaxonomyKind(self.kind))


@dataclass(frozen=True)
class VideoTaxonomy:
    """Ligne de jointure vidéo <-> taxonomie, sans donnée associée."""

    video_id: int
    taxonomy_id: int
