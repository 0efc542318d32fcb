# -----------------------------------------------------------------------------
# DOMAIN LAYER
# -----------------------------------------------------------------------------
# Contains the Build Manifest (Pydantic models), the transient values passed
# between pipeline stages, and the error taxonomy.
# -----------------------------------------------------------------------------

from .errors import (
    ArchiveError,
    ArchiveGroupError,
    FetchError,
    ManifestError,
    PacksmithError,
    PlacementError,
    ProcessLaunchError,
)
from .models import (
    ArtifactSpec,
    BuildInfo,
    BuildManifest,
    BuildOutput,
    FetchedArtifact,
    LaunchConfig,
    LaunchResult,
    Placement,
)

__all__ = [
    "ArtifactSpec", "BuildInfo", "BuildManifest", "BuildOutput",
    "FetchedArtifact", "LaunchConfig", "LaunchResult", "Placement",
    "PacksmithError", "ManifestError", "FetchError", "PlacementError",
    "ArchiveError", "ArchiveGroupError", "ProcessLaunchError",
]
