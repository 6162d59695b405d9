import unittest

from crossfill.core.constants import Direction
from crossfill.core.exceptions import UnknownSlotError
from crossfill.core.models import Slot
from crossfill.engine.constraints import ConstraintGraph
from crossfill.engine.grid import CrosswordGrid

D00 = Slot(0, 0, Direction.DOWN, 3)
A00 = Slot(0, 0, Direction.ACROSS, 3)
D02 = Slot(0, 2, Direction.DOWN, 3)
A20 = Slot(2, 0, Direction.ACROSS, 3)


class ConstraintGraphTests(unittest.TestCase):
    def setUp(self) -> None:
        self.grid = CrosswordGrid.from_pattern("___\n_#_\n___")
        self.graph = ConstraintGraph(self.grid.slots)

    def test_ring_slots(self) -> None:
        self.assertEqual(self.grid.slots, (D00, A00, D02, A20))

    def test_overlap_offsets_swap_with_order(self) -> None:
        self.assertEqual(self.graph.overlap(D00, A00), (0, 0))
        self.assertEqual(self.graph.overlap(D00, A20), (2, 0))
        self.assertEqual(self.graph.overlap(A20, D00), (0, 2))
        self.assertEqual(self.graph.overlap(A00, D02), (2, 0))
        self.assertEqual(self.graph.overlap(D02, A20), (2, 2))

    def test_parallel_slots_do_not_overlap(self) -> None:
        self.assertIsNone(self.graph.overlap(D00, D02))
        self.assertIsNone(self.graph.overlap(A00, A20))

    def test_neighbors_exclude_self_and_match_overlaps(self) -> None:
        self.assertEqual(self.graph.neighbors(D00), frozenset({A00, A20}))
        self.assertEqual(self.graph.neighbors(A00), frozenset({D00, D02}))
        for slot in self.graph.slots:
            self.assertNotIn(slot, self.graph.neighbors(slot))
            for other in self.graph.slots:
                if other == slot:
                    continue
                has_overlap = self.graph.overlap(slot, other) is not None
                self.assertEqual(has_overlap, other in self.graph.neighbors(slot))

    def test_arcs_cover_every_ordered_pair(self) -> None:
        arcs = list(self.graph.arcs())
        self.assertEqual(len(arcs), 12)
        self.assertEqual(len(set(arcs)), 12)
        self.assertEqual(len(self.graph.overlapping_pairs()), 4)

    def test_unknown_slot_fails_loudly(self) -> None:
        stranger = Slot(5, 5, Direction.ACROSS, 2)
        with self.assertRaises(UnknownSlotError):
            self.graph.overlap(stranger, D00)
        with self.assertRaises(KeyError):
            self.graph.neighbors(stranger)

    def test_multi_cell_overlap_keeps_one_crossing(self) -> None:
        first = Slot(0, 0, Direction.ACROSS, 3)
        second = Slot(0, 1, Direction.ACROSS, 3)
        graph = ConstraintGraph([first, second])
        self.assertEqual(graph.overlap(first, second), (2, 1))
        self.assertEqual(graph.overlap(second, first), (1, 2))
        self.assertEqual(graph.degree(first), 1)


if __name__ == "__main__":  # pragma: no cover
    unittest.main()
