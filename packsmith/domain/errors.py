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
# BUILD ERRORS
# -----------------------------------------------------------------------------
# Every failure a build can hit. Each one is fatal to the run: the pipeline
# stops at the stage that raised and the CLI exits non-zero.
# -----------------------------------------------------------------------------

from pathlib import Path


class PacksmithError(Exception):
    """Base class for all build failures."""

    pass


class ManifestError(PacksmithError):
    """Raised when the manifest file cannot be read or fails validation."""

    def __init__(self, message: str, path: Path | None = None) -> None:
        super().__init__(message)
        self.path = path


class FetchError(PacksmithError):
    """Raised on network failure, non-success HTTP status or local write failure."""

    def __init__(self, message: str, url: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.url = url
        self.status_code = status_code


class PlacementError(PacksmithError):
    """Raised when copying or moving an artifact into a distribution tree fails."""

    def __init__(self, message: str, artifact: str, path: Path | None = None) -> None:
        super().__init__(message)
        self.artifact = artifact
        self.path = path


class ArchiveError(PacksmithError):
    """Raised when a distribution tree cannot be packed into its container."""

    def __init__(self, message: str, tree: Path) -> None:
        super().__init__(message)
        self.tree = tree


class ArchiveGroupError(PacksmithError):
    """Raised when more than one concurrent archive task failed. Keeps all of them."""

    def __init__(self, errors: list[ArchiveError]) -> None:
        trees = ", ".join(str(e.tree) for e in errors)
        super().__init__(f"{len(errors)} archive tasks failed: {trees}")
        self.errors = errors


class ProcessLaunchError(PacksmithError):
    """Raised when the loader process cannot be spawned or its output cannot be collected."""

    def __init__(self, message: str, command: list[str]) -> None:
        super().__init__(message)
        self.command = command
