import pytest
from domain.geometry.coordinates import CoordinateConvention, Y_DOWN, Y_UP
from domain.geometry.point import Point


class TestCoordinateConvention:
    def test_y_up_negates_y(self):
        target = Y_UP.to_target(Point(x=10.0, y=5.0))
        assert target == Point(x=10.0, y=-5.0)

    def test_y_down_is_identity(self):
        point = Point(x=10.0, y=5.0)
        assert Y_DOWN.to_target(point) == point

    def test_origin_offset(self):
        convention = CoordinateConvention(name="centered", y_axis_up=True, origin=Point(x=-50.0, y=25.0))
        target = convention.to_target(Point(x=10.0, y=5.0))

        assert target.x == -40.0
        assert target.y == 20.0

    @pytest.mark.parametrize("convention", [
        Y_UP,
        Y_DOWN,
        CoordinateConvention(name="offset", y_axis_up=True, origin=Point(x=3.0, y=-7.0)),
    ])
    def test_to_design_inverts_to_target(self, convention):
        point = Point(x=12.5, y=-4.0)
        assert convention.to_design(convention.to_target(point)).as_tuple() == pytest.approx(point.as_tuple())

    def test_subclass_can_override_conversion(self):
        class DoubledConvention(CoordinateConvention):
            def to_target(self, point: Point) -> Point:
                return Point(x=point.x * 2, y=point.y * 2)

        convention = DoubledConvention(name="doubled", y_axis_up=False)
        assert convention.to_target(Point(x=1.0, y=2.0)) == Point(x=2.0, y=4.0)

    def test_immutability(self):
        with pytest.raises(Exception):
            Y_UP.y_axis_up = False
