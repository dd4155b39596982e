"""Loading of `.env` files for the CLI and converters."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Iterable, List, Union

from dotenv import find_dotenv, load_dotenv

PathLike = Union[str, Path]
_REPO_ROOT = Path(__file__).resolve().parent.parent
_LOADED = False


def _candidates(extra_paths: Iterable[PathLike] | None) -> List[Path]:
    paths = [Path(p).expanduser() for p in extra_paths or ()]
    explicit = os.getenv("APM_ENV_FILE")
    if explicit:
        paths.append(Path(explicit).expanduser())
    found = find_dotenv(usecwd=True)
    if found:
        paths.append(Path(found))
    paths.append(_REPO_ROOT / ".env")
    return paths


def load_env(*, override: bool = False, extra_paths: Iterable[PathLike] | None = None) -> bool:
    """Load environment variables from `.env` files if they exist.

    Files are read in order: *extra_paths*, ``$APM_ENV_FILE``, the nearest
    ``.env`` above the working directory, then the repository root. Earlier
    files win unless *override* is set.

    Returns:
        ``True`` if any environment file was loaded.
    """

    global _LOADED

    if _LOADED and not override and extra_paths is None:
        return True

    loaded_any = False
    seen: set[Path] = set()
    for path in _candidates(extra_paths):
        if not path.is_file():
            continue
        resolved = path.resolve()
        if resolved in seen:
            continue
        seen.add(resolved)
        loaded_any = load_dotenv(resolved, override=override) or loaded_any

    if not override:
        _LOADED = True
    return loaded_any
