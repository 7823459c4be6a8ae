"""Group note file paths by hierarchy level."""

import fnmatch
from pathlib import PurePosixPath

from notetree.models.node import FileMeta


def get_file_meta(fpaths: list[str]) -> dict[int, list[FileMeta]]:
    """Map level (number of dot-separated segments in the stem) to file metas.

    Input order is kept within each level; callers sort upstream.
    """
    meta_dict: dict[int, list[FileMeta]] = {}
    for fpath in fpaths:
        meta = FileMeta(prefix=PurePosixPath(fpath).stem, fpath=fpath)
        meta_dict.setdefault(meta.level, []).append(meta)
    return meta_dict


def glob_match(patterns: list[str], path: str) -> bool:
    """Return True if path, or its file name, matches any glob pattern."""
    name = PurePosixPath(path).name
    return any(fnmatch.fnmatchcase(path, p) or fnmatch.fnmatchcase(name, p) for p in patterns)
