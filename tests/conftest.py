"""
Pytest configuration and fixtures for Packsmith tests.
"""

import subprocess
import sys
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest

# Add project root to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from packsmith.core.bootstrapper import loader_url
from packsmith.domain.models import ArtifactSpec, BuildInfo, BuildManifest

LOADER_JAR = b"PK\x03\x04 fake loader jar"


def make_response(url: str, content: bytes = b"", status_code: int = 200) -> MagicMock:
    """A requests.Response stand-in with a streamed body."""
    response = MagicMock()
    response.url = url
    response.status_code = status_code
    response.iter_content.side_effect = lambda chunk_size=1: iter([content])
    return response


@pytest.fixture
def build_info():
    """Build info for a small test pack."""
    return BuildInfo(name="test-pack", mc_version="1.20.1", loader="0.14.21", launcher="0.11.2")


@pytest.fixture
def make_manifest(build_info):
    """Factory: make_manifest(mods={"a": {...}}, launch={...})."""

    def _make(mods: dict | None = None, **extra) -> BuildManifest:
        return BuildManifest(
            info=build_info,
            mods={name: ArtifactSpec(**spec) for name, spec in (mods or {}).items()},
            **extra,
        )

    return _make


@pytest.fixture
def fake_web(build_info):
    """
    Patch requests.get with an in-memory web.

    Add pages with fake_web.pages[url] = bytes; unknown URLs return 404.
    The loader jar for build_info is served by default.
    """
    pages: dict[str, bytes] = {loader_url(build_info): LOADER_JAR}

    def _get(url, **kwargs):
        if url in pages:
            return make_response(url, pages[url])
        return make_response(url, b"not found", status_code=404)

    with patch("packsmith.infra.fetcher.requests.get", side_effect=_get) as mock_get:
        mock_get.pages = pages
        yield mock_get


@pytest.fixture
def fake_java():
    """Patch subprocess.run in the bootstrapper; the loader exits 0 by default."""
    with patch("packsmith.core.bootstrapper.subprocess.run") as mock_run:
        mock_run.return_value = subprocess.CompletedProcess(
            args=["java"], returncode=0, stdout=b"Done (1.2s)!", stderr=b""
        )
        yield mock_run


@pytest.fixture
def http_response():
    """The make_response factory, for tests that patch requests.get themselves."""
    return make_response
