import json
import logging
import pytest
from domain.geometry.point import Point
from models.design_model import DesignModel
from models.exceptions import MalformedDocument
from models.node import NodeKind

SCREEN = {
    "name": "Screen", "type": "group", "x": 0, "y": 0, "width": 375, "height": 812,
    "children": [
        {"name": "Card", "type": "group", "x": 16, "y": 260, "width": 343, "height": 120,
         "children": [
             {"name": "Title", "type": "text", "x": 12, "y": 12, "width": 200, "height": 24, "text": "Welcome"},
             {"name": "Overflow", "type": "image", "x": 300, "y": 100, "width": 80, "height": 80},
         ]},
        {"name": "Badge", "type": "image", "x": -20, "y": -10, "width": 30, "height": 30},
    ],
}


@pytest.fixture
def design_file(tmp_path):
    path = tmp_path / "screen.json"
    path.write_text(json.dumps(SCREEN), encoding="utf-8")
    return path


class TestDesignModel:
    def test_initial_state(self):
        model = DesignModel()

        assert model.root is None
        assert model.filepath is None
        assert model.node_count == 0
        assert list(model.iter_nodes()) == []

    def test_load_file(self, design_file):
        model = DesignModel()

        assert model.load_file(str(design_file))
        assert model.filepath == str(design_file)
        assert model.root.name == "Screen"
        assert model.node_count == 5
        assert model.last_error is None

    def test_load_missing_file(self, tmp_path, caplog):
        model = DesignModel()

        with caplog.at_level(logging.ERROR):
            assert not model.load_file(str(tmp_path / "missing.json"))

        assert model.root is None
        assert model.last_error
        assert "Error loading file" in caplog.text

    def test_load_malformed_file_keeps_previous_document(self, design_file, tmp_path):
        broken = tmp_path / "broken.json"
        broken.write_text('{"name":"Broken","type":"group","x":0,"y":0,"width":1}', encoding="utf-8")
        model = DesignModel()
        model.load_file(str(design_file))

        assert not model.load_file(str(broken))

        assert model.root.name == "Screen"
        assert model.filepath == str(design_file)
        assert "height" in model.last_error

    def test_strict_types(self):
        document = json.dumps({"name": "n", "type": "sprite", "x": 0, "y": 0, "width": 1, "height": 1})

        assert DesignModel().load_document(document).kind is NodeKind.GROUP
        with pytest.raises(MalformedDocument):
            DesignModel(strict_types=True).load_document(document)

    def test_iter_nodes_absolute_origins(self):
        model = DesignModel()
        model.load_document(json.dumps(SCREEN))

        origins = {node.name: (path, origin) for path, node, origin in model.iter_nodes()}

        assert [node.name for _, node, _ in model.iter_nodes()] == [
            "Screen", "Card", "Title", "Overflow", "Badge"
        ]
        assert origins["Screen"] == ((), Point(x=0.0, y=0.0))
        assert origins["Card"] == ((0,), Point(x=16.0, y=260.0))
        assert origins["Title"] == ((0, 0), Point(x=28.0, y=272.0))
        assert origins["Overflow"] == ((0, 1), Point(x=316.0, y=360.0))
        assert origins["Badge"] == ((1,), Point(x=-20.0, y=-10.0))

    def test_extents_cover_all_nodes(self):
        model = DesignModel()
        model.load_document(json.dumps(SCREEN))

        assert model.model_min_x == -20.0
        assert model.model_min_y == -10.0
        assert model.model_max_x == 396.0
        assert model.model_max_y == 812.0

    def test_find_node(self):
        model = DesignModel()
        model.load_document(json.dumps(SCREEN))

        assert model.find_node(()).name == "Screen"
        assert model.find_node((0, 1)).name == "Overflow"
        assert model.find_node((2,)) is None
        assert model.find_node((0, 0, 0)) is None

    def test_find_node_without_document(self):
        assert DesignModel().find_node(()) is None

    def test_count_by_kind(self):
        model = DesignModel()
        model.load_document(json.dumps(SCREEN))

        assert model.count_by_kind() == {NodeKind.GROUP: 2, NodeKind.IMAGE: 2, NodeKind.TEXT: 1}
