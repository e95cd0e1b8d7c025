"""Map file extensions to the coarse category folders used by ``organize``."""
from typing import Dict, FrozenSet

CATEGORIES: Dict[str, FrozenSet[str]] = {
    "archive": frozenset({"bz", "dmg", "gz", "tar", "tbz2", "zip"}),
    "audio": frozenset({"aac", "m4a", "mp3", "wav"}),
    "data": frozenset({"csv", "json", "xls", "xlsx"}),
    "doc": frozenset({"doc", "docx", "pages", "pdf", "rtf", "rtfd", "txt"}),
    "book": frozenset({"epub"}),
    "image": frozenset({"avif", "bmp", "gif", "heic", "jpg", "jpeg", "png", "svg", "tif", "webp"}),
    "video": frozenset({"avi", "mp4", "mpeg"}),
    "web": frozenset({"css", "html", "ico", "js", "sass"}),
}

DEFAULT_CATEGORY = "misc"

ALL_CATEGORIES = tuple(CATEGORIES) + (DEFAULT_CATEGORY,)


def _check_disjoint(table: Dict[str, FrozenSet[str]]) -> None:
    """Raise ``ValueError`` if an extension is listed under two categories."""
    seen: Dict[str, str] = {}
    for category, extensions in table.items():
        for ext in extensions:
            if ext in seen:
                raise ValueError(
                    f"extension {ext!r} listed under both {seen[ext]!r} and {category!r}"
                )
            seen[ext] = category


_check_disjoint(CATEGORIES)


def extension_of(name: str) -> str:
    """Return the lowercased text after the last dot of ``name``.

    ``"report.PDF"`` gives ``"pdf"``; names without a dot, and dotfiles
    such as ``".bashrc"``, give ``""``.
    """
    stem, dot, ext = name.rpartition(".")
    if not dot or not stem:
        return ""
    return ext.lower()


def classify(extension: str) -> str:
    """Return the category for ``extension`` or ``misc`` when unknown."""
    ext = (extension or "").lower()
    if ext.startswith("."):
        ext = ext[1:]
    for category, extensions in CATEGORIES.items():
        if ext in extensions:
            return category
    return DEFAULT_CATEGORY
