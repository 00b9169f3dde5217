"""
readmegen Directory Tree Renderer

Renders a depth-bounded ASCII tree of a project directory, in the style of
the Unix `tree` command, for embedding in the "Project Structure" section.

Key Behaviors:
    1. The root directory's own name is not printed; only its contents are
    2. Dependency caches, build output, VCS metadata, lockfiles and OS
       metadata files are skipped entirely (never shown, never entered)
    3. Recursion stops at max_depth without any truncation marker
    4. Entries are sorted by name so the output is deterministic

Limitations:
    - Symlinked directories are listed but not followed, to avoid cycles
    - Unreadable directories are shown without children
"""

import os
from pathlib import Path
from typing import Iterator

# Directories that are never shown or descended into.
IGNORE_DIRS: frozenset[str] = frozenset({
    # Version control
    ".git",

    # Dependencies
    "node_modules",
    "venv",
    ".venv",
    "__pycache__",

    # Build outputs
    "dist",
    "build",
    ".next",
    "target",       # Rust build output

    # Coverage artifacts
    "coverage",
})

# Files that are never shown.
IGNORE_FILES: frozenset[str] = frozenset({
    ".DS_Store",
    "package-lock.json",
    "yarn.lock",
    "pnpm-lock.yaml",
})

DEFAULT_MAX_DEPTH = 3

BRANCH = "├── "
LAST_BRANCH = "└── "
PIPE_PREFIX = "│   "
SPACE_PREFIX = "    "


def is_ignored(name: str) -> bool:
    """Return True if an entry with this name is excluded from the tree."""
    return name in IGNORE_DIRS or name in IGNORE_FILES


def _list_entries(directory: Path) -> list[str]:
    """
    List the visible entries of a directory in lexical order.

    Unreadable directories are reported as empty.
    """
    try:
        names = os.listdir(directory)
    except OSError:
        return []
    return sorted(name for name in names if not is_ignored(name))


def _walk(
    directory: Path,
    prefix: str,
    max_depth: int,
    depth: int,
) -> Iterator[str]:
    """
    Yield tree lines for the children of `directory`.

    Args:
        directory: Directory whose children are rendered
        prefix: Continuation bars inherited from ancestor levels
        max_depth: Depth at which recursion stops
        depth: Depth of the children being rendered (root children are 1)
    """
    if depth >= max_depth:
        return

    entries = _list_entries(directory)
    for index, name in enumerate(entries):
        is_last = index == len(entries) - 1
        yield f"{prefix}{LAST_BRANCH if is_last else BRANCH}{name}"

        child = directory / name
        if child.is_dir() and not child.is_symlink():
            child_prefix = prefix + (SPACE_PREFIX if is_last else PIPE_PREFIX)
            yield from _walk(child, child_prefix, max_depth, depth + 1)


def iter_tree_lines(
    path: str | Path,
    max_depth: int = DEFAULT_MAX_DEPTH,
) -> Iterator[str]:
    """
    Lazily yield one line per visible entry below `path`.

    Lines do not include a trailing newline.

    Args:
        path: Root directory to render
        max_depth: Depth at which recursion stops (the root is depth 0)

    Yields:
        Tree lines such as "├── src" or "│   └── main.py"
    """
    root = Path(path)
    if not root.is_dir():
        return
    yield from _walk(root, "", max_depth, 1)


def render_tree(path: str | Path, max_depth: int = DEFAULT_MAX_DEPTH) -> str:
    """
    Render the directory tree below `path` as a single string.

    Every line ends with a newline; an empty or unreadable directory
    renders as the empty string.

    Example:
        >>> print(render_tree("my-project"), end="")
        ├── package.json
        └── src
            └── index.js
    """
    return "".join(f"{line}\n" for line in iter_tree_lines(path, max_depth))
