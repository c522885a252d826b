"""Tests for FoundryVTT asset path helpers."""

import pytest


@pytest.mark.unit
class TestResolveAssetUrl:
    """Tests for resolve_asset_url."""

    def test_relative_path(self):
        """Relative paths join the FoundryVTT URL."""
        from foundry.files import resolve_asset_url

        url = resolve_asset_url("worlds/test/maps/cave.webp", "http://localhost:30000")

        assert url == "http://localhost:30000/worlds/test/maps/cave.webp"

    def test_route_prefix_kept(self):
        """A base URL with a route prefix keeps it."""
        from foundry.files import resolve_asset_url

        url = resolve_asset_url("worlds/a.webp", "https://example.com/foundry")

        assert url == "https://example.com/foundry/worlds/a.webp"

    def test_absolute_url_unchanged(self):
        """Absolute URLs pass through."""
        from foundry.files import resolve_asset_url

        src = "https://assets.example.com/map.png"

        assert resolve_asset_url(src, "http://localhost:30000") == src


@pytest.mark.unit
class TestLocalAssetPath:
    """Tests for local_asset_path."""

    def test_existing_file(self, tmp_path):
        """Existing files under the Data directory are found."""
        from foundry.files import local_asset_path

        target = tmp_path / "worlds" / "my world" / "tile.png"
        target.parent.mkdir(parents=True)
        target.write_bytes(b"x")

        assert local_asset_path("worlds/my%20world/tile.png", tmp_path) == target

    def test_missing_file(self, tmp_path):
        """Missing files return None."""
        from foundry.files import local_asset_path

        assert local_asset_path("worlds/none.png", tmp_path) is None

    def test_no_data_path(self):
        """Without a Data directory nothing is local."""
        from foundry.files import local_asset_path

        assert local_asset_path("worlds/a.png", None) is None
