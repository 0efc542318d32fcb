# Copyright 2026 Pramod Kumar Voola
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

# -----------------------------------------------------------------------------
# THE ARCHIVER - DISTRIBUTION CONTAINERS
# -----------------------------------------------------------------------------
# Responsibility: Pack a distribution tree into a single gzip-compressed tar
# written next to it (server/ -> server.tar.gz).
#
# Concurrency: archive_trees() packs each tree on its own worker thread.
# Calls share nothing: each reads only its own tree and writes only its own
# container. Every failure is collected before raising.
# -----------------------------------------------------------------------------

import tarfile
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path

from rich.console import Console

from packsmith.domain.errors import ArchiveError, ArchiveGroupError

console = Console()

ARCHIVE_EXTENSION = ".tar.gz"


def container_path(tree_path: Path) -> Path:
    """Sibling container path for a tree: <parent>/<name>.tar.gz."""
    tree_path = Path(tree_path)
    return tree_path.parent / f"{tree_path.name}{ARCHIVE_EXTENSION}"


def archive(tree_path: Path) -> Path:
    """
    Pack every file under tree_path into one compressed container.

    Members are stored under the tree's own directory name, so extracting
    server.tar.gz recreates server/.

    Args:
        tree_path: Existing directory to pack.

    Returns:
        Path of the written container.

    Raises:
        ArchiveError: The tree is missing or an I/O error occurred.
    """
    tree_path = Path(tree_path)
    target = container_path(tree_path)

    if not tree_path.is_dir():
        raise ArchiveError(f"Not a directory: {tree_path}", tree=tree_path)

    console.print(f"[cyan][ARCHIVER] Packing {tree_path.name} -> {target.name}[/cyan]")
    try:
        with tarfile.open(target, mode="w:gz") as tar:
            tar.add(tree_path, arcname=tree_path.name, recursive=True)
    except (OSError, tarfile.TarError) as e:
        raise ArchiveError(f"Could not archive {tree_path}: {e}", tree=tree_path) from e

    console.print(f"[green][ARCHIVER] Wrote {target} ({target.stat().st_size} bytes)[/green]")
    return target


def archive_trees(tree_paths: list[Path]) -> list[Path]:
    """
    Archive several disjoint trees concurrently and wait for all of them.

    Args:
        tree_paths: Directories to pack, one worker each.

    Returns:
        Container paths in the same order as tree_paths.

    Raises:
        ArchiveError: Exactly one tree failed.
        ArchiveGroupError: More than one tree failed (all errors attached).
    """
    if not tree_paths:
        return []

    with ThreadPoolExecutor(max_workers=len(tree_paths), thread_name_prefix="archive") as pool:
        futures = [pool.submit(archive, Path(tree)) for tree in tree_paths]

    results: list[Path] = []
    errors: list[ArchiveError] = []
    for tree, future in zip(tree_paths, futures):
        error = future.exception()
        if error is None:
            results.append(future.result())
        elif isinstance(error, ArchiveError):
            errors.append(error)
        else:
            wrapped = ArchiveError(f"Could not archive {tree}: {error}", tree=Path(tree))
            wrapped.__cause__ = error
            errors.append(wrapped)

    if len(errors) == 1:
        raise errors[0]
    if errors:
        console.print(f"[red][ARCHIVER] {len(errors)} archive tasks failed[/red]")
        raise ArchiveGroupError(errors)

    return results
