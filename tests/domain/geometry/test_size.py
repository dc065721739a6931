import pytest
from domain.geometry.size import Size


class TestSize:
    def test_create_size(self):
        s = Size(width=100.0, height=50.0)
        assert s.as_tuple() == (100.0, 50.0)
        assert str(s) == "100.0x50.0"

    def test_zero_is_valid(self):
        s = Size(width=0.0, height=20.0)
        assert s.width == 0.0
        assert s.is_empty

    def test_non_empty(self):
        assert not Size(width=1.0, height=1.0).is_empty

    def test_negative_extent_rejected(self):
        with pytest.raises(ValueError):
            Size(width=-1.0, height=10.0)
        with pytest.raises(ValueError):
            Size(width=1.0, height=-0.5)

    def test_non_finite_extent_rejected(self):
        with pytest.raises(ValueError):
            Size(width=float('inf'), height=10.0)
        with pytest.raises(ValueError):
            Size(width=1.0, height=float('nan'))
