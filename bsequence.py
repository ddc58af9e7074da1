import numpy as np

class BSequence:
    """
    Fixed-length binary sequence. New bits are pushed onto the end and the
    oldest bit falls off the front, so the buffer always holds the most
    recent num_bits values.
    """
    def __init__(self, num_bits):
        if num_bits < 1:
            raise ValueError(f"BSequence length must be at least 1, got {num_bits}")
        self.num_bits = num_bits
        # Ring buffer; _head points at the oldest bit
        self._bits = np.zeros(num_bits, dtype=np.uint8)
        self._head = 0

    def reset(self):
        """Clear all bits to zero."""
        self._bits[:] = 0
        self._head = 0

    def push(self, bit):
        self._bits[self._head] = bit & 1
        self._head = (self._head + 1) % self.num_bits

    def circshift(self):
        """Rotate the sequence left by one bit."""
        self._head = (self._head + 1) % self.num_bits

    def get_length(self):
        return self.num_bits

    def get_value(self, i):
        """Return bit i, counting from the oldest."""
        return int(self._bits[(self._head + i) % self.num_bits])

    def to_array(self):
        return np.roll(self._bits, -self._head)

    def accumulate(self):
        """Number of ones in the sequence."""
        return int(np.count_nonzero(self._bits))

    def correlate(self, other):
        """Number of positions where both sequences hold the same bit."""
        if other.get_length() != self.num_bits:
            raise ValueError(f"Cannot correlate sequences of length {self.num_bits} and {other.get_length()}")
        return int(np.count_nonzero(self.to_array() == other.to_array()))

    def init_msequence(self, ms):
        """Fill with one full period of an m-sequence."""
        ms.fill_buffer(self)

    def __str__(self):
        return "".join(str(b) for b in self.to_array())
