import random

from rangefold.exceptions import IndexOutOfRange, InvalidRange
from rangefold.segment_tree import SegmentTree
from rangefold.structures import (
    ALL,
    ANY,
    CONCAT,
    EMPTY,
    FIELD_PRODUCT,
    FIRST,
    LAST,
    MAX,
    MIN,
    PRODUCT,
    SUM,
    CombiningStructure,
    Kind,
)
from rangefold.test import MyTestCase, naive_fold, parametrize, parametrize_product, random_value, range_generator

ALL_STRUCTURES = (ALL, ANY, FIRST, LAST, MAX, MIN, SUM, PRODUCT, FIELD_PRODUCT, CONCAT)


class SegmentTreeTest(MyTestCase):
    def test_range(self):
        size = 100
        tests = 10

        t = list(range(size))
        random.shuffle(t)

        for structure, truthfunc in ((MIN, min), (MAX, max), (SUM, sum)):
            st = SegmentTree(t, structure)

            for left, right in range_generator(size, tests):
                if left == right:
                    continue

                result = st.query(left, right)
                truth = truthfunc(t[left:right])
                self.assertEqual(truth, result)

    @parametrize_product(ALL_STRUCTURES, (0, 1, 2, 3, 5, 8, 13, 64))
    def test_fold_equivalence(self, structure, size):
        values = [random_value(structure) for _ in range(size)]
        st = SegmentTree(values, structure)

        for _ in range(30):
            if size:
                index = random.randrange(size)
                value = random_value(structure)
                st.update(index, value)
                values[index] = value

            for left, right in range_generator(size, 5):
                self.assertEqual(naive_fold(structure, values, left, right), st.query(left, right))

        self.assertIterEqual(values, st)

    def test_sum_scenario(self):
        st = SegmentTree([1, 2, 3, 4, 5], SUM)
        self.assertEqual(9, st.query(1, 4))
        st.update(2, 10)
        self.assertEqual(16, st.query(1, 4))
        self.assertEqual(22, st.query(0, 5))

    def test_max_scenario(self):
        st = SegmentTree([3, 1, 2], MAX)
        self.assertEqual(3, st.query(0, 3))
        st.update(0, 0)
        self.assertEqual(2, st.query(0, 3))

    def test_order(self):
        st = SegmentTree([(i,) for i in range(7)], CONCAT)
        self.assertEqual((2, 3, 4, 5), st.query(2, 6))
        self.assertEqual((0, 1, 2, 3, 4, 5, 6), st.query(0, 7))

        st = SegmentTree("abcdefghijk", CombiningStructure(Kind.CONCAT, identity=""))
        self.assertEqual("defgh", st.query(3, 8))
        st.update(4, "XY")
        self.assertEqual("dXYfgh", st.query(3, 8))

    @parametrize(
        (FIRST, 0, 4, 3),
        (LAST, 0, 4, 5),
        (FIRST, 0, 1, EMPTY),
        (LAST, 2, 3, EMPTY),
        (LAST, 0, 3, 3),
    )
    def test_first_last(self, structure, left, right, truth):
        st = SegmentTree([EMPTY, 3, EMPTY, 5], structure)
        result = st.query(left, right)
        self.assertEqual(truth, result)

    @parametrize(*((s,) for s in ALL_STRUCTURES))
    def test_empty_range(self, structure):
        size = 6
        st = SegmentTree([random_value(structure) for _ in range(size)], structure)
        for i in range(size + 1):
            self.assertEqual(structure.identity(), st.query(i, i))

    def test_empty(self):
        st = SegmentTree([], SUM)
        self.assertEqual(0, len(st))
        self.assertEqual(0, st.query(0, 0))
        with self.assertRaises(IndexOutOfRange):
            st.update(0, 1)

    def test_boundaries(self):
        st = SegmentTree([1, 2, 3], SUM)

        st.update(2, 4)
        self.assertEqual(4, st.get(2))
        self.assertEqual(0, st.query(3, 3))

        with self.assertRaises(IndexOutOfRange):
            st.update(3, 1)
        with self.assertRaises(IndexOutOfRange):
            st.update(-1, 1)
        with self.assertRaises(IndexOutOfRange):
            st.get(3)
        with self.assertRaises(IndexOutOfRange):
            st.query(0, 4)
        with self.assertRaises(IndexOutOfRange):
            st.query(-1, 2)
        with self.assertRaises(InvalidRange):
            st.query(2, 1)
        with self.assertRaises(TypeError):
            st.get(1.0)
        with self.assertRaises(TypeError):
            st.get(True)
        with self.assertRaises(TypeError):
            st.update(False, 7)

        self.assertEqual([1, 2, 4], list(st))

    def test_sequence_protocol(self):
        st = SegmentTree([1, 2, 3, 4], SUM)

        self.assertEqual(4, len(st))
        self.assertEqual(4, st.length())
        self.assertEqual(3, st[2])
        self.assertEqual(5, st[1:3])
        self.assertEqual(10, st[:])
        self.assertEqual(7, st[2:])

        st[0] = 10
        self.assertEqual([10, 2, 3, 4], list(st))

        with self.assertRaises(ValueError):
            st[0:4:2]
        with self.assertRaises(IndexOutOfRange):
            st[-1:]

        self.assertEqual("SegmentTree([10, 2, 3, 4], CombiningStructure(Kind.SUM))", repr(st))

    def test_owns_storage(self):
        values = [1, 2, 3]
        st = SegmentTree(values, SUM)
        st.update(0, 5)
        self.assertEqual([1, 2, 3], values)

    def test_logging(self):
        with self.assertLogs("rangefold.segment_tree", level="DEBUG") as cm:
            SegmentTree([1, 2, 3], SUM)
        self.assertIn("length 3 (4 leaves)", cm.output[0])


if __name__ == "__main__":
    import unittest

    unittest.main()
