import itertools
import random
import unittest

from crossfill.core.constants import Direction
from crossfill.core.models import Slot
from crossfill.engine.arc_consistency import ac3, is_arc_consistent, revise
from crossfill.engine.constraints import ConstraintGraph
from crossfill.engine.domains import DomainStore
from crossfill.engine.grid import CrosswordGrid

RING = "___\n_#_\n___"


def _prepare(pattern, words):
    grid = CrosswordGrid.from_pattern(pattern)
    graph = ConstraintGraph(grid.slots)
    domains = DomainStore.from_vocabulary(grid.slots, words)
    domains.enforce_node_consistency()
    return grid, graph, domains


def _brute_force_solutions(graph, domains):
    slots = graph.slots
    for combo in itertools.product(*(domains[slot] for slot in slots)):
        assignment = dict(zip(slots, combo))
        if all(
            assignment[x][i] == assignment[y][j]
            for x, y, (i, j) in graph.overlapping_pairs()
        ):
            yield assignment


class ReviseTests(unittest.TestCase):
    def test_revise_drops_unsupported_words(self) -> None:
        across = Slot(0, 0, Direction.ACROSS, 2)
        down = Slot(0, 0, Direction.DOWN, 2)
        graph = ConstraintGraph([across, down])
        domains = DomainStore({across: ["AB", "CD"], down: ["AX"]})
        self.assertTrue(revise(graph, domains, across, down))
        self.assertEqual(domains[across], ["AB"])
        self.assertFalse(revise(graph, domains, across, down))

    def test_revise_without_overlap_is_noop(self) -> None:
        _, graph, domains = _prepare("__\n__", ["AB", "CD"])
        top = Slot(0, 0, Direction.ACROSS, 2)
        bottom = Slot(1, 0, Direction.ACROSS, 2)
        self.assertFalse(revise(graph, domains, top, bottom))
        self.assertEqual(domains[top], ["AB", "CD"])


class Ac3Tests(unittest.TestCase):
    def test_ac3_leaves_domains_arc_consistent(self) -> None:
        _, graph, domains = _prepare(RING, ["CAR", "CAT", "RAT", "TOT", "XYZ", "QQQ", "TAR"])
        self.assertTrue(ac3(graph, domains))
        self.assertTrue(is_arc_consistent(graph, domains))
        for x in graph.slots:
            for y in graph.neighbors(x):
                i, j = graph.overlap(x, y)
                for word in domains[x]:
                    self.assertTrue(any(word[i] == other[j] for other in domains[y]))

    def test_ac3_only_removes_values(self) -> None:
        _, graph, domains = _prepare(RING, ["CAR", "CAT", "RAT", "TOT", "XYZ"])
        before = domains.as_dict()
        ac3(graph, domains)
        for slot, words in domains.as_dict().items():
            self.assertTrue(set(words) <= set(before[slot]))

    def test_ac3_detects_empty_domain(self) -> None:
        _, graph, domains = _prepare("__\n__", ["AB", "CD"])
        self.assertFalse(ac3(graph, domains))
        self.assertTrue(domains.empty_slots())

    def test_ac3_with_explicit_empty_worklist_changes_nothing(self) -> None:
        _, graph, domains = _prepare("__\n__", ["AB", "CD"])
        before = domains.as_dict()
        self.assertTrue(ac3(graph, domains, arcs=[]))
        self.assertEqual(domains.as_dict(), before)

    def test_failure_is_sound_against_brute_force(self) -> None:
        rng = random.Random(7)
        alphabet_words = ["".join(letters) for letters in itertools.product("AB", repeat=3)]
        for _ in range(40):
            words = rng.sample(alphabet_words, rng.randint(1, 5))
            _, graph, domains = _prepare(RING, words)
            original = domains.copy()
            solutions = list(_brute_force_solutions(graph, original))
            consistent = ac3(graph, domains)
            if not consistent:
                self.assertEqual(solutions, [], f"AC-3 rejected solvable vocabulary {words}")
                continue
            # Pruning never removes a word that belongs to some solution.
            for solution in solutions:
                for slot, word in solution.items():
                    self.assertIn(word, domains[slot])


if __name__ == "__main__":  # pragma: no cover
    unittest.main()
