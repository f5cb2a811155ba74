import numpy as np

from tetris_core.game import HEIGHT, WIDTH, Cell, SettledCells

from conftest import positions


def full_row(y, kind=1):
    return [Cell(x, y, kind) for x in range(WIDTH)]


def test_positions_are_unique():
    grid = SettledCells()
    grid.add([Cell(2, 3, 1), Cell(2, 3, 6), Cell(4, 3, 1)])
    assert len(grid) == 2
    assert (2, 3) in grid
    assert Cell(2, 3) in grid
    assert grid.get(2, 3).kind == 6


def test_can_place_checks_bounds_and_blocks():
    grid = SettledCells()
    grid.add([Cell(5, 5, 1)])
    assert grid.can_place([Cell(0, 0), Cell(WIDTH - 1, HEIGHT - 1)])
    assert not grid.can_place([Cell(-1, 0)])
    assert not grid.can_place([Cell(WIDTH, 0)])
    assert not grid.can_place([Cell(0, HEIGHT)])
    assert not grid.can_place([Cell(0, -1)])
    assert not grid.can_place([Cell(5, 5)])
    assert grid.overlaps([Cell(5, 5), Cell(0, 0)])
    assert not grid.overlaps([Cell(0, 0)])


def test_full_rows():
    grid = SettledCells()
    grid.add(full_row(5))
    grid.add(full_row(21))
    grid.add(full_row(10)[:-1])
    assert grid.full_rows() == [5, 21]


def test_clear_row_shifts_cells_above_only():
    grid = SettledCells()
    grid.add(full_row(5))
    grid.add([Cell(0, 2, 3), Cell(7, 4, 4), Cell(1, 6, 5)])
    grid.clear_rows([5])
    assert grid.row(5) == [Cell(7, 5)]
    assert positions(grid) == {(0, 3), (7, 5), (1, 6)}
    assert grid.get(7, 5).kind == 4


def test_clearing_two_rows_shifts_by_rows_below():
    grid = SettledCells()
    grid.add(full_row(8))
    grid.add(full_row(12))
    grid.add([Cell(3, 1, 2), Cell(3, 10, 2), Cell(3, 15, 2)])
    grid.clear_rows([12, 8])
    assert positions(grid) == {(3, 3), (3, 11), (3, 15)}


def test_clearing_interleaved_rows_keeps_every_other_cell():
    grid = SettledCells()
    for y in (10, 12, 13):
        grid.add(full_row(y))
    column = [Cell(4, y, y % 7 + 1) for y in list(range(10)) + [11, 14]]
    grid.add(column)
    grid.clear_rows([13, 10, 12, 10])
    assert len(grid) == len(column)
    assert positions(grid) == {(4, y) for y in range(3, 15)}
    # order within the column is unchanged
    kinds = [grid.get(4, y).kind for y in range(3, 15)]
    assert kinds == [c.kind for c in column]


def test_clearing_no_rows_changes_nothing():
    grid = SettledCells()
    grid.add([Cell(1, 1, 2)])
    grid.clear_rows([])
    assert positions(grid) == {(1, 1)}


def test_compaction_fills_gap_below_cleared_row():
    grid = SettledCells()
    # column 0 has two empty cells under row 19, column 1 has one
    grid.add([Cell(1, 21, 1)])
    grid.add([Cell(x, y, 1) for x in range(2, WIDTH) for y in (20, 21)])
    grid.add([Cell(0, 18, 2), Cell(0, 19, 2), Cell(1, 19, 3), Cell(5, 19, 4)])
    assert grid.compact_below(19)
    assert grid.get(0, 21).kind == 2
    assert grid.get(0, 20).kind == 2
    assert grid.get(1, 20).kind == 3
    assert grid.get(5, 19).kind == 4
    assert grid.row(20) == full_row(20)


def test_compaction_stops_at_first_block():
    grid = SettledCells()
    grid.add([Cell(0, 21, 1), Cell(0, 17, 2)])
    # empty run under row 17 stops at the block in row 21
    assert grid.compact_below(17)
    assert positions(grid) == {(0, 21), (0, 20)}


def test_compaction_without_gaps_moves_nothing():
    grid = SettledCells()
    grid.add(full_row(21))
    grid.add([Cell(4, 19, 1)])
    assert not grid.compact_below(20)
    assert positions(grid) == {(x, 21) for x in range(WIDTH)} | {(4, 19)}


def test_clone_state():
    grid = SettledCells()
    grid.add([Cell(0, 0, 3), Cell(9, 21, 7)])
    state = grid.clone_state()
    assert state.shape == (HEIGHT, WIDTH)
    assert state.dtype == np.int8
    assert state[0, 0] == 3
    assert state[21, 9] == 7
    assert int(state.sum()) == 10
