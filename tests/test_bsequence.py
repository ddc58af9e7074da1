import unittest

import numpy as np

from bsequence import BSequence
from msequence import MSequence


class BSequenceTestCase(unittest.TestCase):
    def test_push_drops_oldest(self):
        bs = BSequence(4)
        for bit in (1, 0, 1, 1):
            bs.push(bit)
        np.testing.assert_array_equal(bs.to_array(), [1, 0, 1, 1])
        bs.push(0)
        np.testing.assert_array_equal(bs.to_array(), [0, 1, 1, 0])
        self.assertEqual(bs.get_value(0), 0)
        self.assertEqual(bs.get_value(3), 0)
        self.assertEqual(str(bs), "0110")

    def test_push_masks_bit(self):
        bs = BSequence(2)
        bs.push(3)
        bs.push(2)
        self.assertEqual(str(bs), "10")

    def test_circshift(self):
        bs = BSequence(4)
        for bit in (1, 0, 1, 1):
            bs.push(bit)
        bs.circshift()
        self.assertEqual(str(bs), "0111")

    def test_reset(self):
        bs = BSequence(8)
        for _ in range(5):
            bs.push(1)
        bs.reset()
        self.assertEqual(bs.accumulate(), 0)
        self.assertEqual(bs.get_length(), 8)

    def test_invalid(self):
        with self.assertRaises(ValueError):
            BSequence(0)
        with self.assertRaises(ValueError):
            BSequence(4).correlate(BSequence(5))


class MSequenceBufferTestCase(unittest.TestCase):
    def test_init_msequence(self):
        ms = MSequence.create_default(5)
        bs = BSequence(ms.get_length())
        bs.push(1)
        bs.init_msequence(ms)
        self.assertEqual(bs.accumulate(), 16)

        ref = MSequence.create_default(5)
        np.testing.assert_array_equal(bs.to_array(), ref.generate_bits(31))

    def test_autocorrelation(self):
        n = 63
        a = BSequence(n)
        b = BSequence(n)
        MSequence.create_default(6).fill_buffer(a)
        MSequence.create_default(6).fill_buffer(b)
        self.assertEqual(a.correlate(b), n)

        for k in range(1, n):
            b.circshift()
            # Two-valued autocorrelation of an m-sequence
            self.assertEqual(a.correlate(b), (n - 1) // 2)


if __name__ == "__main__":
    unittest.main()
