import gmpy2


def mersenne_number(p):
    """2^p - 1 built from scratch."""
    return gmpy2.mpz((1 << p) - 1)


class CandidateAccumulator:
    """
    Grow-only 2^p - 1 for one worker.

    Bits below the watermark are already set; moving to a larger p only
    sets the bits in [watermark, p).
    """

    def __init__(self):
        self._bits = gmpy2.xmpz(0)
        self.watermark = 0

    def reset(self):
        self._bits = gmpy2.xmpz(0)
        self.watermark = 0

    def advance(self, p):
        if p < self.watermark:
            raise ValueError(
                f"exponent {p} is below the watermark {self.watermark}; reset first"
            )
        bits = self._bits
        for index in range(self.watermark, p):
            bits[index] = 1
        self.watermark = p
        return self.value

    @property
    def value(self):
        return gmpy2.mpz(self._bits)
