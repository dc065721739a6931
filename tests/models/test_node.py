import pytest
from domain.geometry.point import Point
from domain.geometry.size import Size
from models.node import Node, NodeKind


def make_node(name="node", kind=NodeKind.GROUP, children=(), **fields):
    values = {"x": 0.0, "y": 0.0, "width": 10.0, "height": 10.0}
    values.update(fields)
    return Node(name=name, kind=kind, type_name=kind.value, children=tuple(children), **values)


class TestNodeKind:
    def test_known_type_names(self):
        assert NodeKind.from_type_name("group") is NodeKind.GROUP
        assert NodeKind.from_type_name("image") is NodeKind.IMAGE
        assert NodeKind.from_type_name("text") is NodeKind.TEXT

    def test_unknown_type_defaults_to_group(self):
        assert NodeKind.from_type_name("sprite") is NodeKind.GROUP
        assert NodeKind.from_type_name("") is NodeKind.GROUP

    def test_type_names_are_case_sensitive(self):
        assert not NodeKind.is_known("Image")
        assert NodeKind.from_type_name("Image") is NodeKind.GROUP

    def test_is_known(self):
        assert NodeKind.is_known("text")
        assert not NodeKind.is_known("sprite")


class TestNode:
    def test_create_node(self):
        node = make_node(name="Root", x=1.5, y=2.5, width=100.0, height=50.0)

        assert node.name == "Root"
        assert node.kind is NodeKind.GROUP
        assert node.position == Point(x=1.5, y=2.5)
        assert node.size == Size(width=100.0, height=50.0)
        assert node.children == ()

    def test_zero_size_is_valid(self):
        node = make_node(width=0.0, height=0.0)
        assert node.size.is_empty

    def test_negative_size_rejected(self):
        with pytest.raises(ValueError):
            make_node(width=-1.0)

    def test_non_finite_position_rejected(self):
        with pytest.raises(ValueError):
            make_node(x=float('inf'))

    def test_immutability(self):
        node = make_node()

        with pytest.raises(Exception):
            node.name = "changed"

        with pytest.raises(Exception):
            node.width = 5.0

    def test_children_cannot_be_appended(self):
        node = make_node(children=[make_node(name="a")])

        with pytest.raises(AttributeError):
            node.children.append(make_node(name="b"))

    def test_content_fields_follow_kind(self):
        image = make_node(kind=NodeKind.IMAGE, image_source="https://example.com/a.png")
        text = make_node(kind=NodeKind.TEXT, text="Hi")

        assert image.image_source == "https://example.com/a.png"
        assert text.text == "Hi"

        with pytest.raises(ValueError):
            make_node(kind=NodeKind.GROUP, image_source="https://example.com/a.png")
        with pytest.raises(ValueError):
            make_node(kind=NodeKind.IMAGE, text="Hi")

    def test_display_text(self):
        assert make_node(kind=NodeKind.TEXT, text="Hi").display_text == "Hi"
        assert make_node(kind=NodeKind.TEXT).display_text == ""

    def test_iter_subtree_is_pre_order(self):
        tree = make_node(name="root", children=[
            make_node(name="a", children=[make_node(name="a1"), make_node(name="a2")]),
            make_node(name="b"),
        ])

        assert [node.name for node in tree.iter_subtree()] == ["root", "a", "a1", "a2", "b"]
        assert tree.count() == 5

    def test_string_representation(self):
        node = make_node(name="Label", kind=NodeKind.TEXT, x=10.0, y=5.0, width=80.0, height=20.0)
        assert str(node) == "text 'Label' at (10.0, 5.0) size 80.0x20.0"
