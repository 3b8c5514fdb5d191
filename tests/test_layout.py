"""
Tests for grid placement
"""
import pytest

from svgsmith.layout import GridLayoutCursor, Placement, Quat, Vec3, grid_offset


class TestGridOffset:
    def test_first_row(self):
        assert grid_offset(0, 10) == Vec3(0, 0, 0)
        assert grid_offset(9, 10) == Vec3(9, 0, 0)

    def test_wraps_to_next_row(self):
        assert grid_offset(10, 10) == Vec3(0, 0, 1)
        assert grid_offset(23, 10) == Vec3(3, 0, 2)

    def test_spacing_scales_offset(self):
        assert grid_offset(12, 10, spacing=2.5) == Vec3(5.0, 0, 2.5)

    def test_invalid_arguments(self):
        with pytest.raises(ValueError):
            grid_offset(0, 0)
        with pytest.raises(ValueError):
            grid_offset(-1, 10)


class TestGridLayoutCursor:
    def test_cursor_follows_formula(self):
        cursor = GridLayoutCursor(row_size=3, spacing=2.0)
        offsets = [cursor.next() for _ in range(7)]
        expected = [Vec3(i % 3, 0, i // 3).scaled(2.0) for i in range(7)]
        assert offsets == expected
        assert cursor.index == 7

    def test_rejects_bad_row_size(self):
        with pytest.raises(ValueError):
            GridLayoutCursor(row_size=0)


class TestPlacement:
    def test_offset_keeps_rotation(self):
        rotation = Quat(0.0, 0.0, 1.0, 0.0)
        placed = Placement(Vec3(1, 2, 3), rotation).offset_by(Vec3(1, 0, 1))
        assert placed.position == Vec3(2, 2, 4)
        assert placed.rotation == rotation

    def test_identity(self):
        assert Quat.identity().to_list() == [1.0, 0.0, 0.0, 0.0]
