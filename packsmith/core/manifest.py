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
# MANIFEST LOADER
# -----------------------------------------------------------------------------
# Responsibility: Read a manifest file (TOML, or YAML) and validate it into a
# BuildManifest. Anything malformed is rejected here with ManifestError,
# before the output directory is touched.
# -----------------------------------------------------------------------------

import tomllib
from pathlib import Path

import yaml
from pydantic import ValidationError
from rich.console import Console

from packsmith.domain.errors import ManifestError
from packsmith.domain.models import BuildManifest

console = Console()

YAML_SUFFIXES = (".yaml", ".yml")


def _read_document(path: Path) -> dict:
    try:
        with open(path, "rb") as f:
            if path.suffix.lower() in YAML_SUFFIXES:
                data = yaml.safe_load(f)
            else:
                data = tomllib.load(f)
    except OSError as e:
        raise ManifestError(f"Cannot read manifest {path}: {e}", path=path) from e
    except (tomllib.TOMLDecodeError, yaml.YAMLError) as e:
        raise ManifestError(f"Cannot parse manifest {path}: {e}", path=path) from e

    if not isinstance(data, dict):
        raise ManifestError(f"Manifest {path} must be a table/mapping at top level", path=path)
    return data


def load_manifest(path: Path) -> BuildManifest:
    """
    Load and validate a build manifest.

    Args:
        path: Manifest file. ".yaml"/".yml" is parsed as YAML, anything else as TOML.

    Returns:
        The validated, immutable BuildManifest.

    Raises:
        ManifestError: Unreadable file, syntax error, or schema violation.
    """
    path = Path(path)
    data = _read_document(path)

    try:
        manifest = BuildManifest.model_validate(data)
    except ValidationError as e:
        console.print(f"[red][MANIFEST] Invalid manifest {path}[/red]")
        raise ManifestError(f"Invalid manifest {path}: {e}", path=path) from e

    console.print(
        f"[green][MANIFEST] Loaded {manifest.info.name}: {len(manifest.artifacts)} artifacts[/green]"
    )
    return manifest
