"""
Adapters de lecture des exports tableur.

- delimited_parser : detection du separateur et parsing a etats
- tag_splitter : decoupage des listes de tags en texte libre
"""

from vitrine.adapters.spreadsheet.delimited_parser import (
    detect_delimiter,
    parse_delimited,
    read_delimited_file,
)
from vitrine.adapters.spreadsheet.tag_splitter import split_tag_list

__all__ = [
    "detect_delimiter",
    "parse_delimited",
    "read_delimited_file",
    "split_tag_list",
]
