"""
Unit tests for pagination math and the page-change bounds policy.
"""

import math
import random
import unittest

from crosspage_selector.core.models import Page
from crosspage_selector.core.pagination import PaginationController, to_page, total_pages_for


def make_page(total_records, page_number=1, page_size=10):
    return Page(items=(), page_number=page_number, page_size=page_size, total_records=total_records)


class TestPageMath(unittest.TestCase):
    def test_to_page(self):
        self.assertEqual(to_page(0, 10), 1)
        self.assertEqual(to_page(9, 10), 1)
        self.assertEqual(to_page(10, 10), 2)
        self.assertEqual(to_page(45, 20), 3)

    def test_to_page_invalid(self):
        with self.assertRaises(ValueError):
            to_page(-1, 10)
        with self.assertRaises(ValueError):
            to_page(0, 0)

    def test_total_pages_is_ceiling(self):
        for size in (5, 10, 20):
            for total in range(0, 101):
                with self.subTest(size=size, total=total):
                    self.assertEqual(total_pages_for(total, size), math.ceil(total / size))
                    self.assertEqual(make_page(total, page_size=size).total_pages, math.ceil(total / size))

    def test_to_page_monotonic_in_offset(self):
        for size in (5, 10, 20):
            pages = [to_page(offset, size) for offset in range(0, 200)]
            self.assertEqual(pages, sorted(pages))


class TestPaginationController(unittest.TestCase):
    def setUp(self):
        self.ctrl = PaginationController(page_size=10)
        self.ctrl.apply_page(make_page(95))

    def test_initial_state(self):
        ctrl = PaginationController()
        self.assertEqual(ctrl.offset, 0)
        self.assertEqual(ctrl.page_size, 10)
        self.assertEqual(ctrl.current_page, 1)
        self.assertEqual(ctrl.total_pages, 0)

    def test_rejects_unknown_initial_page_size(self):
        with self.assertRaises(ValueError):
            PaginationController(page_size=7)

    def test_accepts_in_range_change(self):
        self.assertTrue(self.ctrl.request_page_change(90, 10))
        self.assertEqual(self.ctrl.offset, 90)
        self.assertEqual(self.ctrl.current_page, 10)

    def test_rejects_out_of_range_change_without_mutation(self):
        self.assertFalse(self.ctrl.request_page_change(100, 10))
        self.assertEqual((self.ctrl.offset, self.ctrl.page_size), (0, 10))

    def test_rejects_unlisted_page_size_without_mutation(self):
        self.ctrl.go_to_page(2)
        for size in (7, 15, 100):
            with self.subTest(size=size):
                self.assertFalse(self.ctrl.request_page_change(0, size))
                self.assertEqual((self.ctrl.offset, self.ctrl.page_size), (10, 10))

    def test_rejection_property_over_random_requests(self):
        rng = random.Random(1234)
        for _ in range(500):
            before = self.ctrl.view
            offset = rng.randint(-5, 400)
            size = rng.choice([5, 10, 20, 0, -1])
            accepted = self.ctrl.request_page_change(offset, size)
            if accepted:
                self.assertTrue(1 <= to_page(offset, size) <= self.ctrl.total_pages)
                self.assertEqual((self.ctrl.offset, self.ctrl.page_size), (offset, size))
            else:
                self.assertEqual(self.ctrl.view, before)

    def test_everything_rejected_before_first_page(self):
        ctrl = PaginationController()
        self.assertFalse(ctrl.go_to_page(1))
        self.assertEqual(ctrl.offset, 0)

    def test_go_to_page(self):
        self.assertTrue(self.ctrl.go_to_page(3))
        self.assertEqual(self.ctrl.offset, 20)
        self.assertFalse(self.ctrl.go_to_page(0))
        self.assertFalse(self.ctrl.go_to_page(11))
        self.assertEqual(self.ctrl.offset, 20)

    def test_set_page_size_resets_offset(self):
        self.ctrl.go_to_page(4)
        self.assertTrue(self.ctrl.set_page_size(20))
        self.assertEqual((self.ctrl.offset, self.ctrl.page_size), (0, 20))
        self.assertEqual(self.ctrl.total_pages, 5)

    def test_set_page_size_rejects_unlisted_size(self):
        self.ctrl.go_to_page(2)
        self.assertFalse(self.ctrl.set_page_size(15))
        self.assertEqual((self.ctrl.offset, self.ctrl.page_size), (10, 10))

    def test_advance_page_is_unchecked(self):
        self.ctrl.go_to_page(10)
        self.assertFalse(self.ctrl.has_next_page())
        self.assertEqual(self.ctrl.advance_page(), 100)
        self.assertEqual(self.ctrl.current_page, 11)


if __name__ == "__main__":
    unittest.main()
