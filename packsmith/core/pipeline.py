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
# THE PIPELINE - BUILD ORCHESTRATOR
# -----------------------------------------------------------------------------
# Responsibility: Sequence one complete build.
#
#   INIT -> PREPARED -> ORGANIZED -> (ARCHIVED) -> BOOTSTRAPPED -> DONE
#                     any stage -> FAILED
#
# 1. Prepare: wipe and recreate <manifest_dir>/<name>/{server,client}/mods
#    plus the download/ staging folder
# 2. Organize: fetch and place every artifact, drop staging
# 3. Accept the EULA in server/
# 4. Archive server/ and client/ concurrently (only when requested)
# 5. Bootstrap: fetch the loader and run it once
#
# Every error is fatal: the state moves to FAILED, nothing further runs and
# the error propagates to the caller. Partial output is left on disk.
# -----------------------------------------------------------------------------

import shutil
from enum import Enum
from pathlib import Path

from rich.console import Console

from packsmith.core.archiver import archive_trees
from packsmith.core.bootstrapper import Bootstrapper, accept_eula
from packsmith.core.organizer import MODS_DIR, Organizer
from packsmith.core.settings import Settings
from packsmith.domain.errors import PlacementError
from packsmith.domain.models import BuildManifest, BuildOutput, LaunchResult
from packsmith.infra.fetcher import Fetcher

console = Console()

STAGING_DIR = "download"


class PipelineState(str, Enum):
    """Stages of a build run."""

    INIT = "init"
    PREPARED = "prepared"
    ORGANIZED = "organized"
    ARCHIVED = "archived"
    BOOTSTRAPPED = "bootstrapped"
    DONE = "done"
    FAILED = "failed"


class BuildPipeline:
    """
    The build orchestrator.

    Holds no state between runs except the state history of the most
    recent one. Paths and the manifest are passed explicitly to each stage.
    """

    def __init__(self, settings: Settings | None = None, fetcher: Fetcher | None = None) -> None:
        self._settings = settings or Settings()
        self._fetcher = fetcher or Fetcher(
            timeout=self._settings.fetch_timeout, retries=self._settings.fetch_retries
        )
        self.state = PipelineState.INIT
        self.history: list[PipelineState] = [PipelineState.INIT]

    def _advance(self, state: PipelineState) -> None:
        self.state = state
        self.history.append(state)
        console.print(f"[dim][PIPELINE] -> {state.value}[/dim]")

    @staticmethod
    def output_root(manifest: BuildManifest, output_parent: Path) -> Path:
        """Build root for a manifest: <output_parent>/<info.name>."""
        return Path(output_parent) / manifest.info.name

    def prepare(self, manifest: BuildManifest, output_parent: Path) -> Path:
        """
        Create a fresh output layout, deleting any previous build of the same name.

        Returns:
            The output root.

        Raises:
            PlacementError: The old build could not be removed or a folder created.
        """
        root = self.output_root(manifest, output_parent)
        try:
            if root.exists():
                console.print(f"[yellow][PIPELINE] Removing previous build: {root}[/yellow]")
                shutil.rmtree(root)

            console.print(f"[cyan][PIPELINE] Creating output directory: {root}[/cyan]")
            (root / "server" / MODS_DIR).mkdir(parents=True)
            (root / "client" / MODS_DIR).mkdir(parents=True)
            (root / STAGING_DIR).mkdir(parents=True)
        except OSError as e:
            raise PlacementError(f"Cannot prepare {root}: {e}", artifact="*", path=root) from e
        return root

    def run(self, manifest: BuildManifest, output_parent: Path, compress: bool = False) -> LaunchResult:
        """
        Execute one full build.

        Args:
            manifest: Validated build manifest.
            output_parent: Directory that receives the <name>/ build root
                (normally the manifest's own directory).
            compress: Also pack server/ and client/ into sibling containers.

        Returns:
            The loader's LaunchResult. A non-zero exit status is reported,
            not raised.

        Raises:
            PacksmithError: Any stage failed; no later stage ran.
        """
        self.state = PipelineState.INIT
        self.history = [PipelineState.INIT]
        console.print(f"[bold cyan][PIPELINE] Building {manifest.info.name}[/bold cyan]")

        try:
            root = self.prepare(manifest, output_parent)
            self._advance(PipelineState.PREPARED)

            output: BuildOutput = Organizer(self._fetcher).organize(
                manifest, root / STAGING_DIR, root
            )
            self._advance(PipelineState.ORGANIZED)

            accept_eula(output.server)

            if compress:
                archive_trees([output.server, output.client])
                self._advance(PipelineState.ARCHIVED)

            bootstrapper = Bootstrapper(
                self._fetcher,
                launch=manifest.launch,
                loader_meta_url=self._settings.loader_meta_url,
            )
            result = bootstrapper.bootstrap(manifest.info, output.server)
            self._advance(PipelineState.BOOTSTRAPPED)

        except Exception as e:
            self._advance(PipelineState.FAILED)
            console.print(f"[red][PIPELINE] Build failed in stage after {self.history[-2].value}: {e}[/red]")
            raise

        self._advance(PipelineState.DONE)
        console.print(f"[bold green][PIPELINE] Build complete: {root}[/bold green]")
        return result
