from msequence import MSequence, MIN_M, MAX_DEFAULT_M
import numpy as np
import sys

USAGE = "Usage: python mseq_gen.py <m | 0xPOLY> [output_file.npy]"

class Config:
    def __init__(self, argv):
        assert len(argv) == 2 or len(argv) == 3, USAGE

        arg = argv[1]
        # A hex argument is a full generator polynomial, anything else a register length
        if arg.lower().startswith("0x"):
            self.genpoly = int(arg, 16)
            self.m = None
            assert self.genpoly > 0, "Generator polynomial must be non-zero"
        else:
            self.genpoly = None
            self.m = int(arg)
            assert MIN_M <= self.m <= MAX_DEFAULT_M, f"Default register length must be in [{MIN_M}, {MAX_DEFAULT_M}]"

        self.output_file = argv[2] if len(argv) == 3 else "msequence.npy"
        assert self.output_file.endswith(".npy"), "Output file must be a .npy file"

        # Bits shown on the console
        self.preview_bits = 64

        if self.genpoly is not None:
            print(f"Generator polynomial: 0x{self.genpoly:x}")
        else:
            print(f"Default sequence, m={self.m}")
        print(f"Output file: {self.output_file}")

    def create_sequence(self):
        if self.genpoly is not None:
            return MSequence.create_genpoly(self.genpoly)
        return MSequence.create_default(self.m)


def main(argv):
    cfg = Config(argv)
    ms = cfg.create_sequence()
    ms.print()

    n = ms.get_length()
    print(f"Generating one period, {n} bits.")
    bits = ms.generate_bits(n)

    preview = "".join(str(b) for b in bits[:cfg.preview_bits])
    print(f"Sequence: {preview}{'...' if n > cfg.preview_bits else ''}")
    print(f"Ones: {int(np.count_nonzero(bits))}, zeros: {n - int(np.count_nonzero(bits))}")

    # Warn rather than fail: a non-primitive polynomial is the caller's choice
    if ms.measure_period() != n:
        print("Warning: polynomial does not produce a maximal-length sequence")

    np.save(cfg.output_file, bits)
    print(f"Saved sequence to {cfg.output_file}")
    return bits


if __name__ == "__main__":
    main(sys.argv)
