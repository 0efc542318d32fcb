# =============================================================================
# PACKSMITH ORGANIZER TESTS
# =============================================================================
# Tests for fetching and distributing artifacts between server/ and client/.
# =============================================================================

from unittest.mock import patch

import pytest

from packsmith.core.organizer import Organizer
from packsmith.domain.errors import FetchError, PlacementError
from packsmith.domain.models import Placement
from packsmith.infra.fetcher import Fetcher


@pytest.fixture
def layout(tmp_path):
    """A prepared build root with empty mods folders and staging."""
    root = tmp_path / "test-pack"
    (root / "server" / "mods").mkdir(parents=True)
    (root / "client" / "mods").mkdir(parents=True)
    (root / "download").mkdir()
    return root


def _organize(manifest, root):
    return Organizer(Fetcher()).organize(manifest, root / "download", root)


class TestPlacement:
    """Test where artifacts end up."""

    def test_server_only(self, layout, make_manifest, fake_web):
        """A server-only artifact lands in server/mods and nowhere else."""
        fake_web.pages["https://example.test/mod-a.jar"] = b"A"
        manifest = make_manifest(
            {"A": {"link": "https://example.test/mod-a.jar", "server": True, "client": False}}
        )

        output = _organize(manifest, layout)

        assert (layout / "server" / "mods" / "mod-a.jar").read_bytes() == b"A"
        assert list((layout / "client" / "mods").iterdir()) == []
        assert output.placed == {"A": Placement.SERVER_ONLY}

    def test_client_only(self, layout, make_manifest, fake_web):
        """A client-only artifact lands in client/mods only."""
        fake_web.pages["https://example.test/shader.jar"] = b"S"
        manifest = make_manifest({"shader": {"link": "https://example.test/shader.jar", "client": True}})

        _organize(manifest, layout)

        assert (layout / "client" / "mods" / "shader.jar").read_bytes() == b"S"
        assert list((layout / "server" / "mods").iterdir()) == []

    def test_both_trees_get_independent_copies(self, layout, make_manifest, fake_web):
        """Both trees hold a complete file; neither took it from the other."""
        fake_web.pages["https://example.test/lib.jar"] = b"library-bytes"
        manifest = make_manifest(
            {"lib": {"link": "https://example.test/lib.jar", "server": True, "client": True}}
        )

        _organize(manifest, layout)

        server_file = layout / "server" / "mods" / "lib.jar"
        client_file = layout / "client" / "mods" / "lib.jar"
        assert server_file.read_bytes() == b"library-bytes"
        assert client_file.read_bytes() == b"library-bytes"
        assert not server_file.samefile(client_file)

    def test_neither_is_fetched_but_not_placed(self, layout, make_manifest, fake_web):
        """An unflagged artifact is downloaded, then discarded with staging."""
        fake_web.pages["https://example.test/unused.jar"] = b"U"
        manifest = make_manifest({"unused": {"link": "https://example.test/unused.jar"}})

        output = _organize(manifest, layout)

        assert fake_web.call_count == 1
        assert list((layout / "server" / "mods").iterdir()) == []
        assert list((layout / "client" / "mods").iterdir()) == []
        assert output.placed == {"unused": Placement.NEITHER}

    def test_staging_removed(self, layout, make_manifest, fake_web):
        """The staging folder is gone after organizing."""
        fake_web.pages["https://example.test/a.jar"] = b"A"
        manifest = make_manifest({"a": {"link": "https://example.test/a.jar", "server": True}})

        _organize(manifest, layout)

        assert not (layout / "download").exists()

    def test_depends_on_does_not_fetch_extra(self, layout, make_manifest, fake_web):
        """depends_on is informational; only listed artifacts are fetched."""
        fake_web.pages["https://example.test/b.jar"] = b"B"
        manifest = make_manifest(
            {"b": {"link": "https://example.test/b.jar", "server": True, "depends_on": ["missing"]}}
        )

        _organize(manifest, layout)

        assert fake_web.call_count == 1


class TestFailures:
    """Test failure propagation."""

    def test_fetch_error_aborts(self, layout, make_manifest, fake_web):
        """A 404 stops organizing and leaves staging in place."""
        manifest = make_manifest({"gone": {"link": "https://example.test/gone.jar", "server": True}})

        with pytest.raises(FetchError) as exc_info:
            _organize(manifest, layout)

        assert exc_info.value.status_code == 404
        assert (layout / "download").exists()
        assert list((layout / "server" / "mods").iterdir()) == []

    def test_copy_failure_is_placement_error(self, layout, make_manifest, fake_web):
        """An OSError while copying becomes PlacementError."""
        fake_web.pages["https://example.test/a.jar"] = b"A"
        manifest = make_manifest({"a": {"link": "https://example.test/a.jar", "server": True}})

        with patch("packsmith.core.organizer.shutil.copy2", side_effect=OSError("disk full")):
            with pytest.raises(PlacementError) as exc_info:
                _organize(manifest, layout)

        assert exc_info.value.artifact == "a"

    def test_move_failure_is_placement_error(self, layout, make_manifest, fake_web):
        """An OSError while moving becomes PlacementError."""
        fake_web.pages["https://example.test/a.jar"] = b"A"
        manifest = make_manifest({"a": {"link": "https://example.test/a.jar", "client": True}})

        with patch("packsmith.core.organizer.shutil.move", side_effect=PermissionError("denied")):
            with pytest.raises(PlacementError):
                _organize(manifest, layout)


class TestCollisions:
    """Test artifacts that resolve to the same filename."""

    def test_same_filename_warns_and_last_wins(self, layout, make_manifest, fake_web):
        """A second artifact with the same name is reported and replaces the first."""
        fake_web.pages["https://one.example.test/mod.jar"] = b"first"
        fake_web.pages["https://two.example.test/mod.jar"] = b"second"
        manifest = make_manifest(
            {
                "one": {"link": "https://one.example.test/mod.jar", "server": True, "client": True},
                "two": {"link": "https://two.example.test/mod.jar", "server": True, "client": True},
            }
        )

        with patch("packsmith.core.organizer.console") as mock_console:
            _organize(manifest, layout)

        printed = [str(c.args[0]) for c in mock_console.print.call_args_list]
        warnings = [line for line in printed if "already exists" in line]
        assert len(warnings) == 2
        assert all("two overwrites it" in w for w in warnings)
        assert (layout / "server" / "mods" / "mod.jar").read_bytes() == b"second"
        assert (layout / "client" / "mods" / "mod.jar").read_bytes() == b"second"

    def test_distinct_names_do_not_warn(self, layout, make_manifest, fake_web):
        """No warning when filenames differ."""
        fake_web.pages["https://example.test/a.jar"] = b"A"
        fake_web.pages["https://example.test/b.jar"] = b"B"
        manifest = make_manifest(
            {
                "a": {"link": "https://example.test/a.jar", "server": True},
                "b": {"link": "https://example.test/b.jar", "server": True},
            }
        )

        with patch("packsmith.core.organizer.console") as mock_console:
            _organize(manifest, layout)

        assert not any("already exists" in str(c.args[0]) for c in mock_console.print.call_args_list)
