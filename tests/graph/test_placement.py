"""Tests for mapping drop coordinates into graph space."""

import pytest

from flowedit.graph import Bounds, PlacementError, PlacementMapper, Position, Viewport, map_to_graph


class TestMapToGraph:
    """Tests for map_to_graph()."""

    def test_identity_viewport_subtracts_container_origin(self):
        result = map_to_graph(Position(120, 80), Position(20, 60), Viewport.identity())
        assert result == Position(100, 20)

    def test_pan_is_removed(self):
        result = map_to_graph(Position(120, 80), Position(20, 60), Viewport(x=50, y=-10))
        assert result == Position(50, 30)

    def test_zoom_is_inverted(self):
        result = map_to_graph(Position(220, 60), Position(20, 60), Viewport(zoom=2.0))
        assert result == Position(100, 0)

    def test_pan_and_zoom_round_trip(self):
        viewport = Viewport(x=30, y=40, zoom=0.5)
        graph_point = Position(300, -120)
        screen = viewport.to_screen(graph_point)
        assert viewport.to_graph(screen) == graph_point

    @pytest.mark.parametrize("zoom", [0, -1.5])
    def test_non_positive_zoom_raises(self, zoom):
        with pytest.raises(PlacementError):
            Viewport(zoom=zoom).to_graph(Position(1, 1))


class TestPlacementMapper:
    """Tests for PlacementMapper.place()."""

    @pytest.fixture
    def mapper(self):
        return PlacementMapper(["textUpdater"])

    def test_known_payload_is_placed(self, mapper):
        position = mapper.place(
            "textUpdater", Position(120, 80), Bounds(left=20, top=60), Viewport.identity()
        )
        assert position == Position(100, 20)

    @pytest.mark.parametrize("payload_type", [None, "", "imageNode"])
    def test_unrecognized_payload_aborts(self, mapper, payload_type):
        position = mapper.place(
            payload_type, Position(120, 80), Bounds(left=20, top=60), Viewport.identity()
        )
        assert position is None

    def test_missing_bounds_aborts(self, mapper):
        assert mapper.place("textUpdater", Position(1, 1), None, Viewport.identity()) is None
