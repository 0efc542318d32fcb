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
# DOMAIN MODELS - BUILD MANIFEST
# -----------------------------------------------------------------------------
# These Pydantic models describe a mod-pack build: which artifacts to fetch,
# where each one lands (server tree, client tree, both, neither) and how the
# server loader is launched afterwards.
#
# The manifest is validated once at load time and is immutable afterwards.
# Nothing downstream re-checks URLs or names.
# -----------------------------------------------------------------------------

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from urllib.parse import urlparse

from pydantic import BaseModel, Field, field_validator


class Placement(str, Enum):
    """
    Destination trees for a single artifact.

    Derived once from the two manifest booleans so callers branch on one
    value instead of re-testing flags. NEITHER is kept as an explicit case:
    the artifact is fetched but never placed.
    """

    SERVER_ONLY = "server_only"
    CLIENT_ONLY = "client_only"
    BOTH = "both"
    NEITHER = "neither"

    @classmethod
    def from_flags(cls, server: bool, client: bool) -> "Placement":
        if server and client:
            return cls.BOTH
        if server:
            return cls.SERVER_ONLY
        if client:
            return cls.CLIENT_ONLY
        return cls.NEITHER

    @property
    def to_server(self) -> bool:
        return self in (Placement.SERVER_ONLY, Placement.BOTH)

    @property
    def to_client(self) -> bool:
        return self in (Placement.CLIENT_ONLY, Placement.BOTH)


class BuildInfo(BaseModel):
    """
    Pack identity and the loader coordinates.

    Fields:
    - name: Output directory name (single path component)
    - mc_version: Game runtime version (e.g., "1.20.1")
    - loader: Loader version (e.g., "0.14.21")
    - launcher: Installer/launcher channel version (e.g., "0.11.2")
    """

    name: str = Field(..., min_length=1, description="Output directory name for the build")
    mc_version: str = Field(..., min_length=1, description="Game runtime version")
    loader: str = Field(..., min_length=1, description="Loader version")
    launcher: str = Field(..., min_length=1, description="Launcher channel version")

    class Config:
        """Pydantic configuration for strict validation."""

        frozen = True
        str_strip_whitespace = True

    @field_validator("name")
    @classmethod
    def _single_path_component(cls, value: str) -> str:
        if value in (".", "..") or "/" in value or "\\" in value:
            raise ValueError(f"name must be a single directory name, got {value!r}")
        return value

    @property
    def runtime_version(self) -> str:
        return self.mc_version

    @property
    def loader_kind(self) -> str:
        return self.loader

    @property
    def launcher_channel(self) -> str:
        return self.launcher


class ArtifactSpec(BaseModel):
    """
    A single downloadable mod.

    depends_on is carried for information only. It never affects ordering
    or selection.
    """

    link: str = Field(..., min_length=1, description="Absolute http(s) URL of the artifact")
    server: bool = Field(False, description="Place a copy in the server tree")
    client: bool = Field(False, description="Place the file in the client tree")
    depends_on: list[str] | None = Field(None, description="Informational dependency names")

    class Config:
        frozen = True
        str_strip_whitespace = True

    @field_validator("link")
    @classmethod
    def _absolute_http_url(cls, value: str) -> str:
        parsed = urlparse(value)
        if parsed.scheme not in ("http", "https") or not parsed.netloc:
            raise ValueError(f"link must be an absolute http(s) URL, got {value!r}")
        return value

    @property
    def source_url(self) -> str:
        return self.link

    @property
    def placement(self) -> Placement:
        return Placement.from_flags(self.server, self.client)


class LaunchConfig(BaseModel):
    """
    How the fetched loader is started.

    Defaults reproduce the stock invocation:
    java -Xmx2G -jar fabric.jar nogui server
    """

    java: str = Field("java", min_length=1, description="Runtime executable on PATH")
    memory: str = Field(
        "2G", pattern=r"^[0-9]+[kKmMgG]?$", description="Max heap passed as -Xmx"
    )
    loader_filename: str = Field("fabric.jar", min_length=1, description="Local loader jar name")
    server_args: list[str] = Field(
        default_factory=lambda: ["nogui", "server"],
        description="Arguments after the jar path (headless flag, server mode)",
    )
    timeout_seconds: float | None = Field(
        None, gt=0, description="Kill the server after this many seconds (None = wait)"
    )

    class Config:
        frozen = True

    def command(self) -> list[str]:
        """Full argv for the loader process."""
        return [self.java, f"-Xmx{self.memory}", "-jar", self.loader_filename, *self.server_args]


class BuildManifest(BaseModel):
    """
    The complete build description.

    The artifact table is named `mods` in manifest files; `artifacts` is the
    same mapping under its generic name.
    """

    info: BuildInfo
    mods: dict[str, ArtifactSpec] = Field(default_factory=dict)
    launch: LaunchConfig = Field(default_factory=LaunchConfig)

    class Config:
        frozen = True

    @property
    def artifacts(self) -> dict[str, ArtifactSpec]:
        return self.mods


@dataclass
class FetchedArtifact:
    """A downloaded file waiting in the staging area."""

    local_path: Path
    logical_name: str


@dataclass
class BuildOutput:
    """The on-disk result of organizing a manifest."""

    root: Path
    placed: dict[str, Placement] = field(default_factory=dict)

    @property
    def server(self) -> Path:
        return self.root / "server"

    @property
    def client(self) -> Path:
        return self.root / "client"


@dataclass
class LaunchResult:
    """Exit status and full captured output of the loader process."""

    exit_status: int
    stdout: bytes = b""
    stderr: bytes = b""

    @property
    def succeeded(self) -> bool:
        return self.exit_status == 0

    def stdout_text(self) -> str:
        return self.stdout.decode("utf-8", errors="replace")

    def stderr_text(self) -> str:
        return self.stderr.decode("utf-8", errors="replace")
