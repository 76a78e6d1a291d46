"""External program discovery for Folio.

Folio shells out to pandoc for document conversion and, when present, to
terser for inline script minification. Both are looked up on ``PATH`` first;
terser is commonly installed per project, so ``node_modules/.bin`` under the
project root is searched as well. Only files the current user may execute
are returned, so a stray non-executable ``node_modules/.bin/terser`` falls
through to rjsmin instead of failing the build.

Functions:
    find_executable: Locate an executable in PATH or node_modules.
"""

from __future__ import annotations

import shutil
from pathlib import Path

LOCAL_BIN = Path("node_modules") / ".bin"


def find_executable(name: str, project_root: Path | None = None) -> str | None:
    """Find an executable in PATH or the project's node_modules.

    Args:
        name: Name of the executable to find (e.g., 'pandoc', 'terser').
        project_root: Optional project root to search for a local
            ``node_modules/.bin`` installation.

    Returns:
        Full path to the executable if found, None otherwise.

    Examples:
        >>> find_executable('terser', Path('/my/site'))
        '/my/site/node_modules/.bin/terser'
    """
    search = [None]
    if project_root is not None:
        search.append(str(project_root / LOCAL_BIN))
    for path in search:
        found = shutil.which(name, path=path)
        if found:
            return found
    return None
