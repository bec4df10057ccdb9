import sys
import os
import unittest

sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", "src"))

from avl_balance import Balance, single_rotation_tags, double_rotation_tags


class TestBalance(unittest.TestCase):
    def test_values_are_height_differences(self):
        self.assertEqual(Balance.LEFT_HEAVY, 1)
        self.assertEqual(Balance.BALANCED, 0)
        self.assertEqual(Balance.RIGHT_HEAVY, -1)

    def test_opposite(self):
        self.assertIs(Balance.LEFT_HEAVY.opposite(), Balance.RIGHT_HEAVY)
        self.assertIs(Balance.RIGHT_HEAVY.opposite(), Balance.LEFT_HEAVY)
        self.assertIs(Balance.BALANCED.opposite(), Balance.BALANCED)


class TestSingleRotationTags(unittest.TestCase):
    def test_same_side_child_balances_both(self):
        self.assertEqual(
            single_rotation_tags(Balance.LEFT_HEAVY, Balance.LEFT_HEAVY),
            (Balance.BALANCED, Balance.BALANCED),
        )
        self.assertEqual(
            single_rotation_tags(Balance.RIGHT_HEAVY, Balance.RIGHT_HEAVY),
            (Balance.BALANCED, Balance.BALANCED),
        )

    def test_balanced_child_leaves_both_leaning(self):
        self.assertEqual(
            single_rotation_tags(Balance.LEFT_HEAVY, Balance.BALANCED),
            (Balance.LEFT_HEAVY, Balance.RIGHT_HEAVY),
        )
        self.assertEqual(
            single_rotation_tags(Balance.RIGHT_HEAVY, Balance.BALANCED),
            (Balance.RIGHT_HEAVY, Balance.LEFT_HEAVY),
        )

    def test_opposite_child_raises(self):
        with self.assertRaises(ValueError):
            single_rotation_tags(Balance.LEFT_HEAVY, Balance.RIGHT_HEAVY)
        with self.assertRaises(ValueError):
            single_rotation_tags(Balance.RIGHT_HEAVY, Balance.LEFT_HEAVY)

    def test_balanced_heavy_side_raises(self):
        with self.assertRaises(ValueError):
            single_rotation_tags(Balance.BALANCED, Balance.BALANCED)


class TestDoubleRotationTags(unittest.TestCase):
    def test_left_heavy_pivot(self):
        self.assertEqual(
            double_rotation_tags(Balance.LEFT_HEAVY),
            (Balance.BALANCED, Balance.RIGHT_HEAVY),
        )

    def test_balanced_pivot(self):
        self.assertEqual(
            double_rotation_tags(Balance.BALANCED),
            (Balance.BALANCED, Balance.BALANCED),
        )

    def test_right_heavy_pivot(self):
        self.assertEqual(
            double_rotation_tags(Balance.RIGHT_HEAVY),
            (Balance.LEFT_HEAVY, Balance.BALANCED),
        )


if __name__ == '__main__':
    unittest.main()
