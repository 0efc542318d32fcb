# -----------------------------------------------------------------------------
# CORE LAYER
# -----------------------------------------------------------------------------
# The build pipeline of Packsmith:
# - Manifest: TOML/YAML loader and validation
# - Organizer: Fetch + place artifacts into server/ and client/
# - Archiver: Concurrent per-tree compressed containers
# - Bootstrapper: EULA, loader download, single server run
# - BuildPipeline: Stage orchestrator
# -----------------------------------------------------------------------------

from .archiver import archive, archive_trees
from .bootstrapper import Bootstrapper, accept_eula, loader_url
from .manifest import load_manifest
from .organizer import Organizer
from .pipeline import BuildPipeline, PipelineState
from .settings import Settings

__all__ = [
    "archive", "archive_trees",
    "Bootstrapper", "accept_eula", "loader_url",
    "load_manifest",
    "Organizer",
    "BuildPipeline", "PipelineState",
    "Settings",
]
