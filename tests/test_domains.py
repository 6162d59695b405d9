import unittest

from crossfill.core.constants import Direction
from crossfill.core.exceptions import UnknownSlotError
from crossfill.core.models import Slot
from crossfill.engine.domains import DomainStore

SHORT = Slot(0, 0, Direction.ACROSS, 2)
LONG = Slot(0, 0, Direction.DOWN, 3)


class DomainStoreTests(unittest.TestCase):
    def setUp(self) -> None:
        self.store = DomainStore.from_vocabulary([SHORT, LONG], ["AB", "ABC", "AB", "XY"])

    def test_initial_domains_are_deduplicated_vocabulary(self) -> None:
        self.assertEqual(self.store[SHORT], ["AB", "ABC", "XY"])
        self.assertEqual(self.store[LONG], ["AB", "ABC", "XY"])
        self.assertEqual(self.store.total_size(), 6)

    def test_node_consistency_filters_by_length(self) -> None:
        removed = self.store.enforce_node_consistency()
        self.assertEqual(removed, 3)
        self.assertEqual(self.store[SHORT], ["AB", "XY"])
        self.assertEqual(self.store[LONG], ["ABC"])
        self.assertTrue(self.store.is_node_consistent())

    def test_node_consistency_is_idempotent(self) -> None:
        self.store.enforce_node_consistency()
        before = self.store.as_dict()
        self.assertEqual(self.store.enforce_node_consistency(), 0)
        self.assertEqual(self.store.as_dict(), before)

    def test_missing_length_leaves_empty_domain(self) -> None:
        store = DomainStore.from_vocabulary([SHORT, LONG], ["AB", "CD"])
        store.enforce_node_consistency()
        self.assertEqual(store.empty_slots(), [LONG])

    def test_copy_does_not_see_later_restrictions(self) -> None:
        self.store.enforce_node_consistency()
        snapshot = self.store.copy()
        self.store.assign(SHORT, "XY")
        self.assertEqual(self.store[SHORT], ["XY"])
        self.assertEqual(snapshot[SHORT], ["AB", "XY"])

    def test_discard_word_skips_excluded_slots(self) -> None:
        other = Slot(1, 0, Direction.ACROSS, 2)
        store = DomainStore.from_vocabulary([SHORT, other], ["AB", "XY"])
        changed = store.discard_word("AB", exclude=[SHORT])
        self.assertEqual(changed, [other])
        self.assertEqual(store[SHORT], ["AB", "XY"])
        self.assertEqual(store[other], ["XY"])

    def test_unknown_slot_raises(self) -> None:
        stranger = Slot(9, 9, Direction.DOWN, 2)
        with self.assertRaises(UnknownSlotError):
            self.store[stranger]
        with self.assertRaises(UnknownSlotError):
            self.store.restrict(stranger, [])


if __name__ == "__main__":  # pragma: no cover
    unittest.main()
