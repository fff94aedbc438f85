"""
Parser pour les exports tableur delimites (CSV, TSV...).

Les exports varient selon l'outil et la locale : separateur virgule,
point-virgule, tabulation ou barre verticale, champs entre guillemets
pouvant contenir le separateur ou des retours a la ligne.

Le parser est une machine a etats caractere par caractere :
- guillemets doubles ("") dans un champ cite -> guillemet litteral
- fins de ligne \\r\\n ou \\n
- lignes entierement vides ignorees
- lignes de longueur variable conservees telles quelles (indexation positionnelle)
"""

from pathlib import Path
from typing import Optional

DELIMITER_CANDIDATES: tuple[str, ...] = (",", ";", "\t", "|")
DEFAULT_DELIMITER = ","


def detect_delimiter(header_line: str) -> str:
    """
    Choisit le separateur le plus frequent dans la ligne d'en-tete.

    En cas d'egalite ou d'absence de separateur, le premier candidat
    rencontre l'emporte (la virgule par defaut).
    """
    best = DEFAULT_DELIMITER
    best_count = 0
    for candidate in DELIMITER_CANDIDATES:
        count = header_line.count(candidate)
        if count > best_count:
            best_count = count
            best = candidate
    return best


def _is_blank(row: list[str]) -> bool:
    return all(not cell.strip() for cell in row)


def parse_delimited(text: str, delimiter: Optional[str] = None) -> list[list[str]]:
    """
    Decoupe un texte delimite en lignes de champs.

    Args:
        text: Contenu complet du fichier
        delimiter: Separateur a utiliser (detecte sur la premiere ligne si None)

    Returns:
        Liste des lignes non vides, chacune etant la liste de ses champs

    Ex: 'a,"b,c""d"' -> [["a", 'b,c"d']]
    """
    if delimiter is None:
        first_line = text.replace("\r\n", "\n").split("\n", 1)[0]
        delimiter = detect_delimiter(first_line)

    rows: list[list[str]] = []
    row: list[str] = []
    field: list[str] = []
    in_quotes = False
    i = 0
    length = len(text)

    while i < length:
        char = text[i]

        if in_quotes:
            if char == '"':
                if i + 1 < length and text[i + 1] == '"':
                    field.append('"')
                    i += 2
                    continue
                in_quotes = False
            else:
                field.append(char)
            i += 1
            continue

        if char == '"':
            in_quotes = True
        elif char == delimiter:
            row.append("".join(field))
            field = []
        elif char == "\n":
            row.append("".join(field))
            field = []
            if not _is_blank(row):
                rows.append(row)
            row = []
        elif char != "\r":
            field.append(char)
        i += 1

    # Derniere ligne sans retour a la ligne final
    if field or row:
        row.append("".join(field))
        if not _is_blank(row):
            rows.append(row)

    return rows


def read_delimited_file(file_path: Path) -> list[list[str]]:
    """
    Lit et parse un fichier delimite encode en UTF-8 (BOM tolere).

    Raises:
        FileNotFoundError: Si le fichier n'existe pas
        UnicodeDecodeError: Si le contenu n'est pas de l'UTF-8
    """
    if not file_path.exists():
        raise FileNotFoundError(f"Fichier non trouve: {file_path}")
    text = file_path.read_text(encoding="utf-8-sig")
    return parse_delimited(text)
