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
# THE ORGANIZER - DISTRIBUTION TREES
# -----------------------------------------------------------------------------
# Responsibility: Fetch every manifest artifact into a staging folder and
# place it into server/mods, client/mods, both, or neither.
#
# Placement order matters: the server tree gets a COPY first, then the client
# tree takes the staged file with a MOVE. Reversing the two would leave
# nothing to copy. Staging is deleted once every artifact is processed.
#
# No rollback: on failure, whatever was already placed stays on disk.
# -----------------------------------------------------------------------------

import shutil
from pathlib import Path

from rich.console import Console

from packsmith.domain.errors import PlacementError
from packsmith.domain.models import BuildManifest, BuildOutput, FetchedArtifact, Placement
from packsmith.infra.fetcher import Fetcher

console = Console()

MODS_DIR = "mods"


class Organizer:
    """Fetches artifacts and distributes them between the server and client trees."""

    def __init__(self, fetcher: Fetcher) -> None:
        self._fetcher = fetcher

    def _stage(self, name: str, link: str, staging_dir: Path) -> FetchedArtifact:
        console.print(f"[cyan][ORGANIZER] Fetching {name}[/cyan]")
        return FetchedArtifact(local_path=self._fetcher.fetch(link, staging_dir), logical_name=name)

    def _warn_if_taken(self, target: Path, fetched: FetchedArtifact) -> None:
        if target.exists():
            console.print(
                f"[yellow][ORGANIZER] {target} already exists - {fetched.logical_name} "
                f"overwrites it[/yellow]"
            )

    def _place(self, fetched: FetchedArtifact, placement: Placement, output: BuildOutput) -> None:
        source = fetched.local_path
        filename = source.name

        if placement.to_server:
            target = output.server / MODS_DIR / filename
            self._warn_if_taken(target, fetched)
            try:
                target.parent.mkdir(parents=True, exist_ok=True)
                shutil.copy2(source, target)
            except OSError as e:
                raise PlacementError(
                    f"Could not copy {fetched.logical_name} to {target}: {e}",
                    artifact=fetched.logical_name,
                    path=target,
                ) from e

        if placement.to_client:
            target = output.client / MODS_DIR / filename
            self._warn_if_taken(target, fetched)
            try:
                target.parent.mkdir(parents=True, exist_ok=True)
                shutil.move(str(source), str(target))
            except OSError as e:
                raise PlacementError(
                    f"Could not move {fetched.logical_name} to {target}: {e}",
                    artifact=fetched.logical_name,
                    path=target,
                ) from e

        if placement is Placement.NEITHER:
            console.print(
                f"[yellow][ORGANIZER] {fetched.logical_name} is not flagged for server or "
                f"client - fetched but not placed[/yellow]"
            )
        else:
            console.print(f"[green][ORGANIZER] Placed {fetched.logical_name} ({placement.value})[/green]")

    def organize(self, manifest: BuildManifest, staging_dir: Path, output_root: Path) -> BuildOutput:
        """
        Fetch and place every artifact in the manifest, then drop the staging folder.

        Args:
            manifest: Validated build manifest.
            staging_dir: Existing scratch directory for downloads.
            output_root: Build root holding server/ and client/.

        Returns:
            BuildOutput recording where each artifact went.

        Raises:
            FetchError: An artifact could not be downloaded.
            PlacementError: A copy, move or directory creation failed.
        """
        output = BuildOutput(root=Path(output_root))
        staging_dir = Path(staging_dir)

        console.print(f"[cyan][ORGANIZER] Organizing {len(manifest.artifacts)} artifacts[/cyan]")

        for name, spec in manifest.artifacts.items():
            fetched = self._stage(name, spec.link, staging_dir)
            self._place(fetched, spec.placement, output)
            output.placed[name] = spec.placement

        try:
            shutil.rmtree(staging_dir)
        except OSError as e:
            raise PlacementError(
                f"Could not remove staging folder {staging_dir}: {e}", artifact="*", path=staging_dir
            ) from e

        console.print("[green][ORGANIZER] Distribution trees ready[/green]")
        return output
