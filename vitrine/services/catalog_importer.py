"""
Service d'import du catalogue video depuis un export tableur.

Transforme un fichier delimite en videos du catalogue et en liens de
taxonomie :
1. Parsing du fichier (separateur detecte, champs cites)
2. Resolution des colonnes par alias normalises (erreur groupee si manquantes)
3. Conversion des lignes en entrees (titre vide ignore, budget arrondi aux paliers)
4. Reconciliation des tags avec le repertoire de taxonomies (creation des absents,
   puis relecture complete du repertoire)
5. Insertion des videos par lots, correlees par leur marqueur provisoire
6. Insertion des liens video <-> taxonomie par lots

Toute erreur du stockage interrompt l'import ; les lots deja inseres restent
en base. Reimporter le meme fichier cree des videos en double.
"""

import re
import uuid
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Optional

from loguru import logger

from vitrine.adapters.spreadsheet.delimited_parser import read_delimited_file
from vitrine.adapters.spreadsheet.tag_splitter import split_tag_list
from vitrine.core.entities.taxonomy import Taxonomy, TaxonomyKind, VideoTaxonomy
from vitrine.core.entities.video import PENDING_MEDIA_PREFIX, Video, VideoStatus
from vitrine.core.ports.repositories import (
    ITaxonomyRepository,
    IVideoRepository,
    IVideoTaxonomyRepository,
)
from vitrine.core.value_objects.budget import coerce_budget_level, parse_budget_range
from vitrine.utils.helpers import chunked, normalize_text

DEFAULT_VIDEO_BATCH_SIZE = 50
DEFAULT_LINK_BATCH_SIZE = 500
DEFAULT_THUMBNAIL_OFFSET_SECONDS = 1


class CatalogColumn(str, Enum):
    """Colonnes reconnues dans l'export."""

    TITLE = "title"
    KEYWORDS = "keywords"
    BUDGET = "budget"
    FEEL = "feel"
    STYLE = "style"
    TYPE = "type"
    OBJECTIF = "objectif"
    PARAMETRE = "parametre"
    DURATION = "duration"


# Le premier alias sert de nom affiche dans les erreurs
COLUMN_ALIASES: dict[CatalogColumn, tuple[str, ...]] = {
    CatalogColumn.TITLE: ("Nom", "Titre", "Name"),
    CatalogColumn.KEYWORDS: ("Keywords", "Mots clés", "Mots cles"),
    CatalogColumn.BUDGET: ("Budget",),
    CatalogColumn.FEEL: ("Feel",),
    CatalogColumn.STYLE: ("Style",),
    CatalogColumn.TYPE: ("Type de vidéo", "Type de video", "Type"),
    CatalogColumn.OBJECTIF: ("Objectif", "Objectifs"),
    CatalogColumn.PARAMETRE: ("Paramètre", "Paramètres", "Parametre"),
    CatalogColumn.DURATION: ("Durée", "Duree", "Duration"),
}

REQUIRED_COLUMNS: tuple[CatalogColumn, ...] = (
    CatalogColumn.TITLE,
    CatalogColumn.KEYWORDS,
    CatalogColumn.BUDGET,
    CatalogColumn.FEEL,
    CatalogColumn.STYLE,
    CatalogColumn.TYPE,
)

# Colonnes de tags -> categorie de taxonomie
TAG_COLUMNS: dict[TaxonomyKind, CatalogColumn] = {
    TaxonomyKind.TYPE: CatalogColumn.TYPE,
    TaxonomyKind.KEYWORD: CatalogColumn.KEYWORDS,
    TaxonomyKind.STYLE: CatalogColumn.STYLE,
    TaxonomyKind.FEEL: CatalogColumn.FEEL,
    TaxonomyKind.OBJECTIF: CatalogColumn.OBJECTIF,
    TaxonomyKind.PARAMETRE: CatalogColumn.PARAMETRE,
}


class CatalogImportError(Exception):
    """Erreur de contenu du fichier importe."""


class MissingColumnsError(CatalogImportError):
    """Colonnes obligatoires introuvables (toutes signalees en une fois)."""

    def __init__(self, missing: Sequence[str]) -> None:
        self.missing = list(missing)
        super().__init__(f"Colonnes manquantes: {', '.join(self.missing)}")


class EmptyCatalogError(CatalogImportError):
    """Fichier vide ou sans aucune ligne valide."""


class UnreadableCatalogError(CatalogImportError):
    """Fichier qui n'est pas du texte UTF-8 (export Latin-1, classeur binaire)."""


@dataclass
class CatalogEntry:
    """
    Ligne du tableur convertie, prete a inserer.

    Attributs :
        title : Titre de la video
        budget_min, budget_max : Paliers de budget (None si absent)
        duration_seconds : Duree si la colonne existe
        tags : Libelles bruts par categorie
        pending_uid : Marqueur provisoire "pending:<uuid>"
    """

    title: str
    pending_uid: str
    budget_min: Optional[int] = None
    budget_max: Optional[int] = None
    duration_seconds: Optional[int] = None
    tags: dict[TaxonomyKind, list[str]] = field(default_factory=dict)

    def labels(self, kind: TaxonomyKind) -> list[str]:
        return self.tags.get(kind, [])


@dataclass
class ImportReport:
    """Statistiques d'un import."""

    rows: int = 0
    videos: int = 0
    tags: int = 0
    links: int = 0
    dry_run: bool = False

    def summary(self) -> str:
        if self.dry_run:
            return f"Dry-run : {self.rows} lignes analysees."
        return (
            f"Termine : {self.rows} lignes, {self.videos} videos, "
            f"{self.tags} tags, {self.links} liens."
        )


def resolve_column(normalized_header: Sequence[str], aliases: Sequence[str]) -> int:
    """
    Retourne l'index de la premiere cellule d'en-tete egale a un alias.

    La comparaison se fait sur les libelles normalises ; -1 si aucune.
    """
    normalized_aliases = {normalize_text(alias) for alias in aliases}
    for index, value in enumerate(normalized_header):
        if value in normalized_aliases:
            return index
    return -1


def resolve_columns(header: Sequence[str]) -> dict[CatalogColumn, int]:
    """
    Resout toutes les colonnes connues de l'en-tete.

    Raises:
        MissingColumnsError: Liste de toutes les colonnes obligatoires absentes
    """
    normalized_header = [normalize_text(cell) for cell in header]
    columns: dict[CatalogColumn, int] = {}
    missing: list[str] = []
    for column, aliases in COLUMN_ALIASES.items():
        index = resolve_column(normalized_header, aliases)
        if index >= 0:
            columns[column] = index
        elif column in REQUIRED_COLUMNS:
            missing.append(aliases[0])
    if missing:
        raise MissingColumnsError(missing)
    return columns


_DURATION_CLOCK_RE = re.compile(r"^(\d+):([0-5]?\d)$")


def parse_duration(raw: Optional[str]) -> Optional[int]:
    """Convertit "90" ou "1:30" en secondes ; None si illisible."""
    if not raw or not raw.strip():
        return None
    value = raw.strip()
    clock = _DURATION_CLOCK_RE.match(value)
    if clock:
        return int(clock.group(1)) * 60 + int(clock.group(2))
    if value.isdigit():
        return int(value)
    return None


def _cell(row: Sequence[str], index: Optional[int]) -> str:
    """Cellule a l'index donne ; chaine vide si hors ligne (lignes irregulieres)."""
    if index is None or index < 0 or index >= len(row):
        return ""
    return row[index]


def row_to_entry(
    row: Sequence[str],
    columns: dict[CatalogColumn, int],
    uid_factory: Callable[[], str],
) -> Optional[CatalogEntry]:
    """Convertit une ligne en entree ; None si le titre est vide."""
    title = _cell(row, columns.get(CatalogColumn.TITLE)).strip()
    if not title:
        return None

    budget = parse_budget_range(_cell(row, columns.get(CatalogColumn.BUDGET)))
    budget_min = coerce_budget_level(budget.min)
    budget_max = coerce_budget_level(budget.max)
    if budget_min is not None and budget_max is not None and budget_min > budget_max:
        budget_min, budget_max = budget_max, budget_min

    tags = {
        kind: split_tag_list(_cell(row, columns.get(column)))
        for kind, column in TAG_COLUMNS.items()
    }

    return CatalogEntry(
        title=title,
        pending_uid=f"{PENDING_MEDIA_PREFIX}{uid_factory()}",
        budget_min=budget_min,
        budget_max=budget_max,
        duration_seconds=parse_duration(_cell(row, columns.get(CatalogColumn.DURATION))),
        tags=tags,
    )


def parse_entries(
    rows: Sequence[Sequence[str]],
    uid_factory: Callable[[], str] = lambda: str(uuid.uuid4()),
) -> list[CatalogEntry]:
    """
    Convertit les lignes parsees (en-tete compris) en entrees.

    Raises:
        EmptyCatalogError: Si le fichier n'a pas de ligne de donnees
        MissingColumnsError: Si des colonnes obligatoires manquent
    """
    if len(rows) < 2:
        raise EmptyCatalogError("Fichier vide ou sans ligne de donnees.")
    columns = resolve_columns(rows[0])
    entries = []
    for row in rows[1:]:
        entry = row_to_entry(row, columns, uid_factory)
        if entry is not None:
            entries.append(entry)
    return entries


class TaxonomyDirectory:
    """
    Repertoire en memoire des taxonomies, indexe par (kind, libelle normalise).

    En cas de doublons normalises en base, la premiere ligne rencontree l'emporte.
    """

    def __init__(self, taxonomies: Sequence[Taxonomy] = ()) -> None:
        self._by_key: dict[tuple[TaxonomyKind, str], Taxonomy] = {}
        for taxonomy in taxonomies:
            key = (taxonomy.kind, normalize_text(taxonomy.label))
            self._by_key.setdefault(key, taxonomy)

    def __len__(self) -> int:
        return len(self._by_key)

    def get(self, kind: TaxonomyKind, label: str) -> Optional[Taxonomy]:
        return self._by_key.get((kind, normalize_text(label)))

    def __contains__(self, key: tuple[TaxonomyKind, str]) -> bool:
        kind, label = key
        return self.get(kind, label) is not None


class CatalogImporterService:
    """
    Service d'import du catalogue.

    Attributs injectes:
        taxonomy_repo: Repertoire des taxonomies
        video_repo: Stockage des videos
        link_repo: Stockage des liens video <-> taxonomie
        video_batch_size: Taille des lots de videos
        link_batch_size: Taille des lots de liens
        dry_run: Si True, analyse le fichier sans rien ecrire
    """

    def __init__(
        self,
        taxonomy_repo: ITaxonomyRepository,
        video_repo: IVideoRepository,
        link_repo: IVideoTaxonomyRepository,
        video_batch_size: int = DEFAULT_VIDEO_BATCH_SIZE,
        link_batch_size: int = DEFAULT_LINK_BATCH_SIZE,
        dry_run: bool = False,
        uid_factory: Callable[[], str] = lambda: str(uuid.uuid4()),
    ) -> None:
        self._taxonomy_repo = taxonomy_repo
        self._video_repo = video_repo
        self._link_repo = link_repo
        self._video_batch_size = video_batch_size
        self._link_batch_size = link_batch_size
        self._dry_run = dry_run
        self._uid_factory = uid_factory

    def run(self, file_path: Path) -> ImportReport:
        """
        Importe un fichier delimite.

        Raises:
            FileNotFoundError: Si le fichier n'existe pas
            CatalogImportError: Fichier illisible, vide, colonnes manquantes ou aucune ligne valide
        """
        logger.info("Import du catalogue", file=str(file_path), dry_run=self._dry_run)
        try:
            rows = read_delimited_file(file_path)
        except UnicodeDecodeError as e:
            raise UnreadableCatalogError(
                f"Encodage non supporte (UTF-8 attendu) a l'octet {e.start}: {file_path.name}"
            ) from e
        return self.import_rows(rows)

    def import_rows(self, rows: Sequence[Sequence[str]]) -> ImportReport:
        """Importe des lignes deja parsees (en-tete compris)."""
        entries = parse_entries(rows, self._uid_factory)
        if not entries:
            raise EmptyCatalogError("Aucune ligne valide dans le fichier.")

        report = ImportReport(rows=len(entries), dry_run=self._dry_run)
        if self._dry_run:
            logger.info("Dry-run termine", rows=report.rows)
            return report

        directory, created = self.reconcile_taxonomies(entries)
        report.tags = created

        for batch in chunked(entries, self._video_batch_size):
            videos, links = self._import_batch(batch, directory)
            report.videos += videos
            report.links += links

        logger.info(
            "Import termine",
            rows=report.rows,
            videos=report.videos,
            tags=report.tags,
            links=report.links,
        )
        return report

    def reconcile_taxonomies(
        self, entries: Sequence[CatalogEntry]
    ) -> tuple[TaxonomyDirectory, int]:
        """
        Cree les taxonomies absentes puis relit le repertoire complet.

        Retourne le repertoire rafraichi et le nombre de lignes creees
        ou mises a jour par l'upsert.
        """
        directory = TaxonomyDirectory(self._taxonomy_repo.list_all())

        missing: list[tuple[TaxonomyKind, str]] = []
        queued: set[tuple[TaxonomyKind, str]] = set()
        for entry in entries:
            for kind in TAG_COLUMNS:
                for label in entry.labels(kind):
                    key = (kind, normalize_text(label))
                    if not key[1] or key in queued or directory.get(kind, label):
                        continue
                    queued.add(key)
                    missing.append((kind, label))

        created = 0
        if missing:
            logger.debug("Creation des taxonomies absentes", count=len(missing))
            created = len(self._taxonomy_repo.bulk_upsert(missing))

        # Relecture complete : l'upsert peut dedoublonner cote stockage
        return TaxonomyDirectory(self._taxonomy_repo.list_all()), created

    def _import_batch(
        self, batch: Sequence[CatalogEntry], directory: TaxonomyDirectory
    ) -> tuple[int, int]:
        """Insere un lot de videos puis leurs liens. Retourne (videos, liens)."""
        videos = [
            Video(
                title=entry.title,
                external_media_id=entry.pending_uid,
                status=VideoStatus.PENDING,
                thumbnail_offset_seconds=DEFAULT_THUMBNAIL_OFFSET_SECONDS,
                duration_seconds=entry.duration_seconds,
                budget_min=entry.budget_min,
                budget_max=entry.budget_max,
            )
            for entry in batch
        ]
        inserted = self._video_repo.bulk_insert(videos)
        id_by_uid = {media_id: video_id for video_id, media_id in inserted}

        links: list[VideoTaxonomy] = []
        for entry in batch:
            video_id = id_by_uid.get(entry.pending_uid)
            if video_id is None:
                continue
            taxonomy_ids: dict[int, None] = {}
            for kind in TAG_COLUMNS:
                for label in entry.labels(kind):
                    taxonomy = directory.get(kind, label)
                    if taxonomy is not None and taxonomy.id is not None:
                        taxonomy_ids[taxonomy.id] = None
            links.extend(
                VideoTaxonomy(video_id=video_id, taxonomy_id=taxonomy_id)
                for taxonomy_id in taxonomy_ids
            )

        linked = 0
        for link_batch in chunked(links, self._link_batch_size):
            linked += self._link_repo.bulk_insert(link_batch)

        logger.debug("Lot importe", videos=len(inserted), links=linked)
        return len(inserted), linked
