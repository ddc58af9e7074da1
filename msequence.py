# Maximal-length sequence (m-sequence) generator built on a linear-feedback shift register
from types import MappingProxyType
import numpy as np
from numba import jit

MIN_M = 2
MAX_M = 31
MAX_DEFAULT_M = 15


class ConfigurationError(ValueError):
    """Raised when an m-sequence cannot be built from the given parameters."""


# Known primitive polynomials, one per register length.
# Note that 'g' is stored shifted right by one bit; the top bit is implied
# and never used in the feedback computation.
#      m: (m,  g,      a,      n,            v,      b)
DEFAULT_SEQUENCES = MappingProxyType({
    2:  (2,  0x0003, 0x0002, (1 << 2) - 1,  0x0002, 0),
    3:  (3,  0x0005, 0x0004, (1 << 3) - 1,  0x0004, 0),
    4:  (4,  0x0009, 0x0008, (1 << 4) - 1,  0x0008, 0),
    5:  (5,  0x0012, 0x0010, (1 << 5) - 1,  0x0010, 0),
    6:  (6,  0x0021, 0x0020, (1 << 6) - 1,  0x0020, 0),
    7:  (7,  0x0044, 0x0040, (1 << 7) - 1,  0x0040, 0),
    8:  (8,  0x008E, 0x0080, (1 << 8) - 1,  0x0080, 0),
    9:  (9,  0x0108, 0x0100, (1 << 9) - 1,  0x0100, 0),
    10: (10, 0x0204, 0x0200, (1 << 10) - 1, 0x0200, 0),
    11: (11, 0x0402, 0x0400, (1 << 11) - 1, 0x0400, 0),
    12: (12, 0x0829, 0x0800, (1 << 12) - 1, 0x0800, 0),
    13: (13, 0x100d, 0x1000, (1 << 13) - 1, 0x1000, 0),
    14: (14, 0x2015, 0x2000, (1 << 14) - 1, 0x2000, 0),
    15: (15, 0x4001, 0x4000, (1 << 15) - 1, 0x4000, 0),
})


def reverse_bits(value: int, width: int) -> int:
    """Reverse the lowest `width` bits of value, 0001 -> 1000."""
    out = 0
    for _ in range(width):
        out = (out << 1) | (value & 1)
        value >>= 1
    return out


def parity(value: int) -> int:
    # Requires Python 3.10+
    return value.bit_count() & 1


# JIT-compiled kernel for bulk generation
@jit(nopython=True)
def _generate_jit(count, state, genpoly, mask):
    out = np.empty(count, dtype=np.uint8)
    bit = 0

    for i in range(count):
        # Manual popcount compatible with Numba
        c = 0
        t = state & genpoly
        while t > 0:
            t &= (t - 1)
            c += 1
        bit = c & 1

        state = ((state << 1) | bit) & mask
        out[i] = bit

    return out, state, bit


class MSequence:
    """
    Linear-feedback shift register producing a maximal-length sequence of
    period 2^m - 1 when the generator polynomial is primitive.

    The polynomial is given in conventional form with its most-significant
    bit present, e.g. x^5 + x^2 + 1 -> 0b100101. The initial state is
    bit-reversed across m bits, so the default state 1 becomes 100...0 in
    the register.
    """
    def __init__(self, m: int, g: int, a: int = 1):
        if m < MIN_M or m > MAX_M:
            raise ConfigurationError(f"msequence create: m={m} not in range [{MIN_M}, {MAX_M}]")

        self._m = m
        self._g = g >> 1
        self._a = reverse_bits(a, m)
        self._n = (1 << m) - 1
        self._v = self._a
        self._b = 0

    @classmethod
    def create_genpoly(cls, g: int) -> "MSequence":
        """Create a sequence from a generator polynomial alone, starting at state 1."""
        t = g.bit_length()
        if t < 2:
            raise ConfigurationError(f"msequence create_genpoly: invalid generator polynomial 0x{g:x}")
        return cls(t - 1, g, 1)

    @classmethod
    def create_default(cls, m: int) -> "MSequence":
        """Create a sequence of register length m from the table of known primitive polynomials."""
        if m < MIN_M or m > MAX_DEFAULT_M:
            raise ConfigurationError(f"msequence create_default: m={m} not in range [{MIN_M}, {MAX_DEFAULT_M}]")

        ms = cls.__new__(cls)
        ms._m, ms._g, ms._a, ms._n, ms._v, ms._b = DEFAULT_SEQUENCES[m]
        return ms

    def copy(self) -> "MSequence":
        ms = self.__class__.__new__(self.__class__)
        ms._m, ms._g, ms._a, ms._n, ms._v, ms._b = self._m, self._g, self._a, self._n, self._v, self._b
        return ms

    def destroy(self):
        # Drop every field; any later call fails with AttributeError
        for name in ("_m", "_g", "_a", "_n", "_v", "_b"):
            self.__dict__.pop(name, None)

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.destroy()
        return False

    def advance(self) -> int:
        """Advance the shift register by one step and return the output bit."""
        # Binary dot product between the register and the generator polynomial
        self._b = parity(self._v & self._g)

        self._v = ((self._v << 1) | self._b) & self._n
        return self._b

    def generate_symbol(self, bps: int) -> int:
        """Pack the next bps output bits into one integer, most-significant bit first."""
        s = 0
        for _ in range(bps):
            s = (s << 1) | self.advance()
        return s

    def generate_bits(self, count: int) -> np.ndarray:
        """
        Generates the next count output bits as a uint8 array.
        Leaves the object in the same state as count calls to advance().
        """
        if count <= 0:
            return np.zeros(0, dtype=np.uint8)

        head = None
        if self._v > self._n:
            # A caller-set state may exceed the register width, take one step
            # here so the kernel only ever sees masked values
            head = self.advance()
            count -= 1

        # Only bits below m ever meet the register once it is masked
        bits, state, bit = _generate_jit(count, self._v, self._g & self._n, self._n)
        self._v = int(state)
        if count > 0:
            self._b = int(bit)

        if head is not None:
            bits = np.concatenate((np.array([head], dtype=np.uint8), bits))
        return bits

    def measure_period(self) -> int:
        """
        Count the steps until the register returns to its current value.
        Returns 0 if it never comes back within 2^m steps. State is restored.
        """
        start_v, start_b = self._v, self._b
        period = 0
        for i in range(1, self._n + 2):
            self.advance()
            if self._v == start_v:
                period = i
                break
        self._v, self._b = start_v, start_b
        return period

    def reset(self):
        """Reset the shift register to its initial state."""
        self._v = self._a

    def fill_buffer(self, buffer):
        """Clear buffer then push one full period of output bits into it."""
        buffer.reset()
        for _ in range(self._n):
            buffer.push(self.advance())

    def get_genpoly_length(self) -> int:
        return self._m

    def get_length(self) -> int:
        return self._n

    def get_genpoly(self) -> int:
        return self._g

    def get_state(self) -> int:
        return self._v

    def set_state(self, a: int):
        # Zero locks the generator, but the caller may still set it
        if a == 0:
            print("Warning: m-sequence state set to zero, generator will only output zeros")
        self._v = a

    def render(self) -> str:
        v = format(self._v & self._n, f"0{self._m}b")
        g = format(self._g & self._n, f"0{self._m}b")
        return (f"msequence: m={self._m} (n={self._n}):\n"
                f"    shift register: {v}\n"
                f"    generator poly: {g}")

    def print(self):
        print(self.render())

    def __repr__(self):
        return f"MSequence(m={self._m}, g=0x{self._g:x}, state=0x{self._v:x})"


if __name__ == "__main__":
    # Simple test
    for m in range(MIN_M, MAX_DEFAULT_M + 1):
        ms = MSequence.create_default(m)
        ones = sum(ms.advance() for _ in range(ms.get_length()))
        assert ms.get_state() == DEFAULT_SEQUENCES[m][4], f"m={m} did not return to its initial state"
        assert ones == 1 << (m - 1), f"m={m} is not balanced"
        print(f"m={m:2d}: period {ms.get_length()} ok, {ones} ones")

    ms = MSequence.create_default(9)
    ms.print()

    from time import time
    # Performance test
    ms = MSequence.create_default(15)
    start_time = time()
    bits = ms.generate_bits(10_000_000)
    end_time = time()
    print(f"Generated {len(bits)} bits in {end_time - start_time:.2f} seconds.")
