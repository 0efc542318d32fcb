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
# THE BOOTSTRAPPER - SERVER FIRST RUN
# -----------------------------------------------------------------------------
# Responsibility: Accept the EULA, download the server loader jar into the
# server tree and run it once, synchronously, capturing all output.
#
# The loader's exit status is reported, never judged: a non-zero exit is a
# normal LaunchResult. Only failing to spawn the process or to collect its
# output is an error (ProcessLaunchError).
# -----------------------------------------------------------------------------

import subprocess
from pathlib import Path

from rich.console import Console

from packsmith.core.settings import DEFAULT_LOADER_META_URL
from packsmith.domain.errors import PlacementError, ProcessLaunchError
from packsmith.domain.models import BuildInfo, LaunchConfig, LaunchResult
from packsmith.infra.fetcher import Fetcher

console = Console()

EULA_FILENAME = "eula.txt"
EULA_CONTENT = "eula=true"


def accept_eula(server_tree: Path) -> Path:
    """
    Write the license acceptance marker into the server tree.

    Raises:
        PlacementError: The marker could not be written.
    """
    path = Path(server_tree) / EULA_FILENAME
    try:
        path.write_text(EULA_CONTENT)
    except OSError as e:
        raise PlacementError(f"Could not write {path}: {e}", artifact="eula", path=path) from e
    console.print(f"[cyan][BOOTSTRAP] EULA accepted: {path}[/cyan]")
    return path


def loader_url(info: BuildInfo, base_url: str = DEFAULT_LOADER_META_URL) -> str:
    """Download URL of the server loader jar for this runtime/loader/launcher triple."""
    return f"{base_url.rstrip('/')}/{info.mc_version}/{info.loader}/{info.launcher}/server/jar"


class Bootstrapper:
    """
    Fetches and launches the server loader.

    The first start generates the server's config and world files.
    """

    def __init__(
        self,
        fetcher: Fetcher,
        launch: LaunchConfig | None = None,
        loader_meta_url: str = DEFAULT_LOADER_META_URL,
    ) -> None:
        self._fetcher = fetcher
        self._launch = launch or LaunchConfig()
        self._loader_meta_url = loader_meta_url

    def _run(self, command: list[str], server_tree: Path) -> LaunchResult:
        """
        Run the loader to completion with output captured.

        Raises:
            ProcessLaunchError: Spawn failure, timeout, or output capture failure.
        """
        timeout = self._launch.timeout_seconds
        try:
            with console.status(
                f"[cyan]Running {' '.join(command)} in {server_tree}...[/cyan]", spinner="dots"
            ):
                completed = subprocess.run(
                    command,
                    cwd=server_tree,
                    capture_output=True,
                    timeout=timeout,
                )
        except OSError as e:
            console.print(f"[red][BOOTSTRAP] Could not start {command[0]}: {e}[/red]")
            raise ProcessLaunchError(f"Could not start {command[0]}: {e}", command=command) from e
        except subprocess.TimeoutExpired as e:
            raise ProcessLaunchError(
                f"Server did not exit within {timeout}s", command=command
            ) from e
        except subprocess.SubprocessError as e:
            raise ProcessLaunchError(f"Could not collect server output: {e}", command=command) from e

        return LaunchResult(
            exit_status=completed.returncode,
            stdout=completed.stdout or b"",
            stderr=completed.stderr or b"",
        )

    def bootstrap(self, info: BuildInfo, server_tree: Path) -> LaunchResult:
        """
        Prepare and launch the server once.

        Args:
            info: Build info selecting the loader version.
            server_tree: The server distribution directory (process cwd).

        Returns:
            LaunchResult with the exit status and full stdout/stderr.

        Raises:
            PlacementError: The EULA marker could not be written.
            FetchError: The loader jar could not be downloaded.
            ProcessLaunchError: The process could not be run.
        """
        server_tree = Path(server_tree)
        console.print("[cyan][BOOTSTRAP] Initializing server[/cyan]")

        # Also written by BuildPipeline before archiving; repeated for standalone use
        accept_eula(server_tree)

        url = loader_url(info, self._loader_meta_url)
        self._fetcher.fetch(url, server_tree, filename=self._launch.loader_filename)

        command = self._launch.command()
        console.print(f"[cyan][BOOTSTRAP] Launching: {' '.join(command)}[/cyan]")
        result = self._run(command, server_tree)

        colour = "green" if result.succeeded else "yellow"
        console.print(f"[{colour}][BOOTSTRAP] Exit code: {result.exit_status}[/{colour}]")
        return result
