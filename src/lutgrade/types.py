"""Type aliases for lutgrade.

Provides unified type hints for color-like parameters across all modules.
"""

from collections.abc import Sequence

import numpy as np

# RGB triple in [0, 1]
RGB = tuple[float, float, float]

# Anything that can be read as an RGB triple
ColorLike = tuple[float, float, float] | Sequence[float] | np.ndarray
