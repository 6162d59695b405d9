import unittest

from crossfill.core.constants import Direction
from crossfill.core.exceptions import StructuralError
from crossfill.core.models import Slot
from crossfill.engine.grid import CrosswordGrid


class GridParsingTests(unittest.TestCase):
    def test_open_square_derives_both_directions(self) -> None:
        grid = CrosswordGrid.from_pattern("__\n__")
        self.assertEqual((grid.height, grid.width), (2, 2))
        self.assertEqual(
            grid.slots,
            (
                Slot(0, 0, Direction.DOWN, 2),
                Slot(0, 0, Direction.ACROSS, 2),
                Slot(0, 1, Direction.DOWN, 2),
                Slot(1, 0, Direction.ACROSS, 2),
            ),
        )
        self.assertTrue(grid.is_fully_open)

    def test_ragged_rows_are_padded_with_blocks(self) -> None:
        grid = CrosswordGrid.from_pattern("___\n_")
        self.assertEqual(grid.width, 3)
        self.assertEqual(grid.structure[1], (True, False, False))
        self.assertEqual(
            grid.slots,
            (Slot(0, 0, Direction.DOWN, 2), Slot(0, 0, Direction.ACROSS, 3)),
        )
        self.assertFalse(grid.is_fully_open)

    def test_any_other_character_blocks(self) -> None:
        grid = CrosswordGrid.from_pattern("_x_\n___")
        self.assertFalse(grid.is_open(0, 1))
        self.assertEqual(
            set(grid.slots),
            {
                Slot(0, 0, Direction.DOWN, 2),
                Slot(0, 2, Direction.DOWN, 2),
                Slot(1, 0, Direction.ACROSS, 3),
            },
        )

    def test_isolated_cells_form_no_slots(self) -> None:
        grid = CrosswordGrid.from_pattern("_#\n#_")
        self.assertEqual(grid.slots, ())
        self.assertEqual(list(grid.open_cells()), [(0, 0), (1, 1)])

    def test_trailing_newline_is_ignored(self) -> None:
        grid = CrosswordGrid.from_pattern("__\n__\n")
        self.assertEqual(grid.height, 2)

    def test_trailing_row_of_spaces_is_blocked_row(self) -> None:
        grid = CrosswordGrid.from_pattern("__\n  ")
        self.assertEqual((grid.height, grid.width), (2, 2))
        self.assertEqual(grid.structure[1], (False, False))
        self.assertEqual(grid.slots, (Slot(0, 0, Direction.ACROSS, 2),))

    def test_empty_pattern_is_structural_error(self) -> None:
        with self.assertRaises(StructuralError):
            CrosswordGrid.from_pattern("")
        with self.assertRaises(StructuralError):
            CrosswordGrid.from_pattern("\n\n")
        with self.assertRaises(StructuralError):
            CrosswordGrid([])
        with self.assertRaises(StructuralError):
            CrosswordGrid([[], []])

    def test_to_pattern_round_trips_structure(self) -> None:
        pattern = "#___#\n_____\n#___#"
        self.assertEqual(CrosswordGrid.from_pattern(pattern).to_pattern(), pattern)

    def test_slot_at_finds_slot_by_start(self) -> None:
        grid = CrosswordGrid.from_pattern("___\n_#_\n___")
        self.assertEqual(grid.slot_at(2, 0, Direction.ACROSS), Slot(2, 0, Direction.ACROSS, 3))
        self.assertIsNone(grid.slot_at(1, 0, Direction.ACROSS))


class SlotTests(unittest.TestCase):
    def test_cells_follow_direction(self) -> None:
        self.assertEqual(Slot(1, 2, Direction.ACROSS, 3).cells, ((1, 2), (1, 3), (1, 4)))
        self.assertEqual(Slot(1, 2, Direction.DOWN, 2).cells, ((1, 2), (2, 2)))

    def test_identity_is_structural(self) -> None:
        a = Slot(0, 0, Direction.ACROSS, 3)
        b = Slot(0, 0, Direction.ACROSS, 3)
        self.assertEqual(a, b)
        self.assertEqual(len({a, b}), 1)
        self.assertNotEqual(a, Slot(0, 0, Direction.DOWN, 3))

    def test_offset_of(self) -> None:
        slot = Slot(0, 1, Direction.DOWN, 3)
        self.assertEqual(slot.offset_of((2, 1)), 2)


if __name__ == "__main__":  # pragma: no cover
    unittest.main()
