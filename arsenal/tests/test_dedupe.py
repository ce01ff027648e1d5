"""Tests for duplicate detection, dedupe and case-insensitive sorting."""

import unittest

from arsenal.dedupe import (
    count_occurrences,
    find_duplicates,
    normalize_items,
    remove_duplicates,
    sort_case_insensitive,
)


class TestDedupe(unittest.TestCase):
    def test_count_occurrences(self) -> None:
        counts = count_occurrences(["b", "a", "b", "b"])
        self.assertEqual(counts, {"b": 3, "a": 1})
        self.assertEqual(list(counts), ["b", "a"])

    def test_count_is_pure(self) -> None:
        values = ["x", "x"]
        self.assertEqual(count_occurrences(values), count_occurrences(values))
        self.assertEqual(values, ["x", "x"])

    def test_find_duplicates_reports_each_value_once(self) -> None:
        self.assertEqual(find_duplicates(["c", "B", "c", "a", "B", "c"]), ["B", "c"])

    def test_find_duplicates_none(self) -> None:
        self.assertEqual(find_duplicates(["a", "b"]), [])

    def test_remove_duplicates_keeps_first_seen_order(self) -> None:
        self.assertEqual(remove_duplicates(["b", "a", "b", "c", "a"]), ["b", "a", "c"])

    def test_sort_case_insensitive(self) -> None:
        self.assertEqual(
            sort_case_insensitive(["rhs_weap_M4", "ACE_fieldDressing", "acc_flashlight"]),
            ["acc_flashlight", "ACE_fieldDressing", "rhs_weap_M4"],
        )

    def test_sort_is_stable_for_case_variants(self) -> None:
        self.assertEqual(sort_case_insensitive(["b", "Item", "a", "item"]), ["a", "b", "Item", "item"])

    def test_sort_orders_digits_underscore_letters_by_code_point(self) -> None:
        self.assertEqual(
            sort_case_insensitive(["m4_x", "M4a", "m41"]),
            ["m41", "m4_x", "M4a"],
        )

    def test_case_variants_survive_merge_and_sit_together(self) -> None:
        # Dedupe is exact-match while sorting ignores case: both spellings remain
        merged = normalize_items(["ItemMap", "zulu", "itemmap", "ItemMap", "alpha"])
        self.assertEqual(merged, ["alpha", "ItemMap", "itemmap", "zulu"])
        self.assertEqual(find_duplicates(["ItemMap", "itemmap"]), [])


if __name__ == "__main__":
    unittest.main()
