"""
Gaussian integer value type.

Only construction, range checking and display live here. Arithmetic belongs
to the evaluator that consumes the AST.

Author: xwest
"""

from dataclasses import dataclass

# Signed 64-bit bounds for both components
INT64_MIN = -(2 ** 63)
INT64_MAX = 2 ** 63 - 1


@dataclass(frozen=True)
class GaussianInt:
    """
    A complex number with integer real and imaginary parts.

    Both parts are signed 64-bit integers.
    """
    real: int
    imag: int

    def __post_init__(self):
        for part_name in ("real", "imag"):
            part = getattr(self, part_name)
            if isinstance(part, bool) or not isinstance(part, int):
                raise TypeError(f"{part_name} part must be an int, got {type(part).__name__}")
            if not INT64_MIN <= part <= INT64_MAX:
                raise ValueError(f"{part_name} part {part} does not fit in a signed 64-bit integer")

    @classmethod
    def make(cls, real: int, imag: int) -> 'GaussianInt':
        """Construct a value, raising ValueError if a part is out of range."""
        return cls(real, imag)

    @property
    def is_real(self) -> bool:
        return self.imag == 0

    def __str__(self) -> str:
        if self.is_real:
            return str(self.real)
        if self.real == 0:
            return f"{self.imag}i"
        sign = "+" if self.imag > 0 else "-"
        return f"{self.real}{sign}{abs(self.imag)}i"

    def __repr__(self) -> str:
        return f"GaussianInt({self.real}, {self.imag})"
