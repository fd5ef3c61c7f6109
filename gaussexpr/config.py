"""
Parser configuration.

Author: xwest
"""

from dataclasses import dataclass
from typing import Optional

# Nesting deep enough for any hand-written expression, well below the
# interpreter's recursion limit (each level costs several Python frames).
DEFAULT_MAX_DEPTH = 64


@dataclass(frozen=True)
class ParserConfig:
    """
    Settings for a Parser instance.

    Attributes:
        max_depth: Maximum nesting of recursive grammar rules, None for no limit
        filename: Name reported in source locations and diagnostics
    """
    max_depth: Optional[int] = DEFAULT_MAX_DEPTH
    filename: str = "<string>"

    def __post_init__(self):
        if self.max_depth is not None and self.max_depth < 1:
            raise ValueError(f"max_depth must be positive or None, got {self.max_depth}")
