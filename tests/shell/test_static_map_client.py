"""Tests for static map client.

Uses mocked tile fetching to avoid network calls in tests.
"""

from unittest.mock import patch, MagicMock

import pytest

from src.core.geo import BoundingBox
from src.core.static_map import MapConfig, MapFrame, MarkerDescriptor
from src.shell.static_map_client import StaticMapClient, MapImageResult, DEFAULT_TILE_URL


MARKER = MarkerDescriptor(
    id="us1",
    latitude=37.78,
    longitude=-122.42,
    radius=12.0,
    color="#BD0026",
    popup="Somewhere",
)

FRAMED_CONFIG = MapConfig(
    width=400,
    height=300,
    markers=(MARKER,),
    frame=MapFrame(bounds=BoundingBox(37.78, 37.78, -122.42, -122.42), padding=(50, 50)),
)

UNFRAMED_CONFIG = MapConfig(width=400, height=300)


@pytest.fixture
def mock_static_map_class():
    """Patch StaticMap and make render() produce fake PNG bytes."""
    with patch("src.shell.static_map_client.StaticMap") as mock_class:
        mock_map = MagicMock()
        mock_class.return_value = mock_map

        mock_image = MagicMock()
        mock_image.save = lambda buf, format: buf.write(b"PNG_IMAGE_DATA")
        mock_map.render.return_value = mock_image

        yield mock_class


class TestStaticMapClientInit:
    """Tests for StaticMapClient initialization."""

    def test_default_tile_url(self):
        """Default tile URL is OpenStreetMap."""
        client = StaticMapClient()
        assert "openstreetmap" in client.tile_url.lower()

    def test_custom_tile_url(self):
        """Custom tile URL is accepted."""
        custom_url = "https://tiles.example.com/{z}/{x}/{y}.png"
        client = StaticMapClient(tile_url=custom_url)
        assert client.tile_url == custom_url


class TestStaticMapClientGenerateMap:
    """Tests for StaticMapClient.generate_map()."""

    def test_successful_generation_returns_image_bytes(self, mock_static_map_class):
        result = StaticMapClient().generate_map(FRAMED_CONFIG)

        assert result.success is True
        assert result.image_bytes == b"PNG_IMAGE_DATA"
        assert result.error is None

    def test_uses_specified_dimensions_and_padding(self, mock_static_map_class):
        StaticMapClient().generate_map(FRAMED_CONFIG)

        mock_static_map_class.assert_called_once_with(
            400,
            300,
            padding_x=50,
            padding_y=50,
            url_template=DEFAULT_TILE_URL,
        )

    def test_config_tile_url_takes_precedence(self, mock_static_map_class):
        config = MapConfig(width=10, height=10, tile_url="https://t/{z}/{x}/{y}.png")

        StaticMapClient().generate_map(config)

        kwargs = mock_static_map_class.call_args.kwargs
        assert kwargs["url_template"] == "https://t/{z}/{x}/{y}.png"

    def test_adds_outline_and_circle_per_marker(self, mock_static_map_class):
        StaticMapClient().generate_map(FRAMED_CONFIG)

        mock_map = mock_static_map_class.return_value
        assert mock_map.add_marker.call_count == 2

        outline, circle = [c.args[0] for c in mock_map.add_marker.call_args_list]
        assert outline.color == "white"
        assert circle.color == "#BD0026"
        assert circle.width == 12.0
        # (lon, lat) order for staticmap
        assert circle.coord == (-122.42, 37.78)

    def test_framed_map_fits_markers(self, mock_static_map_class):
        """With a frame, zoom and center are left to staticmap."""
        StaticMapClient().generate_map(FRAMED_CONFIG)

        mock_static_map_class.return_value.render.assert_called_once_with()

    def test_unframed_map_uses_default_view(self, mock_static_map_class):
        """Without a frame, the map keeps its default center and zoom."""
        StaticMapClient().generate_map(UNFRAMED_CONFIG)

        mock_static_map_class.return_value.render.assert_called_once_with(
            zoom=2,
            center=[0.0, 20.0],
        )

    def test_unframed_map_has_no_padding(self, mock_static_map_class):
        StaticMapClient().generate_map(UNFRAMED_CONFIG)

        kwargs = mock_static_map_class.call_args.kwargs
        assert kwargs["padding_x"] == 0
        assert kwargs["padding_y"] == 0

    def test_render_failure_returns_error(self, mock_static_map_class):
        mock_static_map_class.return_value.render.side_effect = RuntimeError("tile fetch failed")

        result = StaticMapClient().generate_map(FRAMED_CONFIG)

        assert result == MapImageResult(success=False, error="tile fetch failed")
