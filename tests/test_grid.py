"""Tests for ColonyGrid."""
import pytest

from data_colony import ColonyGrid, GridCell


class TestGridConstruction:
    def test_default_size(self):
        grid = ColonyGrid()
        assert grid.size == 5

    def test_all_cells_empty(self):
        grid = ColonyGrid(size=3)
        assert all(cell.building_id is None for row in grid.cells() for cell in row)
        assert list(grid.occupied()) == []

    def test_rows_are_indexed_by_y_then_x(self):
        grid = ColonyGrid(size=3)
        assert grid.cells()[2][1] == GridCell(1, 2)

    def test_non_positive_size_raises(self):
        with pytest.raises(ValueError, match="size must be positive"):
            ColonyGrid(size=0)


class TestGetCell:
    def test_in_bounds(self):
        grid = ColonyGrid(size=5)
        cell = grid.get_cell((4, 0))
        assert cell is not None
        assert cell.position == (4, 0)
        assert cell.building_id is None

    @pytest.mark.parametrize("pos", [(-1, 0), (0, -1), (5, 0), (0, 5), (7, 7)])
    def test_out_of_bounds_is_none(self, pos):
        grid = ColonyGrid(size=5)
        assert grid.get_cell(pos) is None


class TestSetBuilding:
    def test_place_on_empty_cell(self):
        grid = ColonyGrid()
        assert grid.set_building((1, 1), "compute_node") is True
        assert grid.building_at((1, 1)) == "compute_node"

    def test_place_on_occupied_cell_fails_without_mutation(self):
        grid = ColonyGrid()
        grid.set_building((1, 1), "compute_node")
        assert grid.set_building((1, 1), "storage_array") is False
        assert grid.building_at((1, 1)) == "compute_node"

    def test_invalid_position_fails(self):
        grid = ColonyGrid()
        assert grid.set_building((5, 5), "compute_node") is False
        assert grid.set_building((-1, 2), None) is False

    def test_clear_is_idempotent(self):
        grid = ColonyGrid()
        grid.set_building((2, 2), "compute_node")
        assert grid.set_building((2, 2), None) is True
        assert grid.set_building((2, 2), None) is True
        assert grid.building_at((2, 2)) is None

    def test_occupied_lists_placed_cells(self):
        grid = ColonyGrid()
        grid.set_building((0, 0), "a")
        grid.set_building((3, 4), "b")
        assert {(c.position, c.building_id) for c in grid.occupied()} == {
            ((0, 0), "a"),
            ((3, 4), "b"),
        }


class TestNeighbors:
    def test_corner_has_two(self):
        grid = ColonyGrid(size=5)
        assert len(grid.get_neighbors((0, 0))) == 2
        assert len(grid.get_neighbors((4, 4))) == 2

    def test_edge_has_three(self):
        grid = ColonyGrid(size=5)
        assert len(grid.get_neighbors((2, 0))) == 3
        assert len(grid.get_neighbors((0, 2))) == 3

    def test_interior_has_four(self):
        grid = ColonyGrid(size=5)
        assert len(grid.get_neighbors((2, 2))) == 4

    def test_order_is_north_south_east_west(self):
        grid = ColonyGrid(size=5)
        positions = [c.position for c in grid.get_neighbors((2, 2))]
        assert positions == [(2, 1), (2, 3), (3, 2), (1, 2)]

    def test_neighbors_report_occupants(self):
        grid = ColonyGrid(size=5)
        grid.set_building((2, 1), "cooling_unit")
        north = grid.get_neighbors((2, 2))[0]
        assert north.building_id == "cooling_unit"

    def test_single_cell_grid_has_no_neighbors(self):
        grid = ColonyGrid(size=1)
        assert grid.get_neighbors((0, 0)) == []


class TestClear:
    def test_clear_empties_every_cell(self):
        grid = ColonyGrid(size=3)
        for x in range(3):
            grid.set_building((x, x), "node")
        grid.clear()
        assert list(grid.occupied()) == []
        assert grid.set_building((1, 1), "node") is True
