"""
Per-response color assignment for diagnostic plots.

Responses are colored by their rank in total abundance: with fewer than
8 responses the R default palette is used, otherwise evenly spaced hues
as produced by R's rainbow().
"""

from __future__ import annotations

from typing import Sequence

import numpy as np
from matplotlib import colors as mcolors
from numpy.typing import ArrayLike, NDArray

from pygllvm.core.exceptions import ValidationError


# R >= 4.0 palette() entries 1-7
ORDINAL_PALETTE: tuple[str, ...] = (
    'black',
    '#DF536B',
    '#61D04F',
    '#2297E6',
    '#28E2E5',
    '#CD0BBC',
    '#F5C710',
)


def rainbow(n: int) -> list[str]:
    """n fully saturated hues starting at red, like R rainbow(n)."""
    if n <= 0:
        return []
    hues = np.linspace(0.0, max(1, n - 1) / n, n)
    hsv = np.column_stack([hues, np.ones(n), np.ones(n)])
    return [mcolors.to_hex(rgb) for rgb in mcolors.hsv_to_rgb(hsv)]


def response_colors(
    y: ArrayLike,
    var_colors: str | Sequence[str] | None = None,
) -> list[str]:
    """
    Assign one color per response variable (column of y).

    Parameters
    ----------
    y : array-like
        Response matrix (n, p).
    var_colors : str or sequence of str, optional
        User colors, recycled to length p and used as given.

    Returns
    -------
    list of str
        p matplotlib color specifications.
    """
    y = np.asarray(y, dtype=np.float64)
    p = y.shape[1]
    csum = np.argsort(y.sum(axis=0), kind='stable')

    if var_colors is not None:
        given = [var_colors] if isinstance(var_colors, str) else list(var_colors)
        if len(given) == 0:
            raise ValidationError("var_colors: expected at least one color")
        for c in given:
            if not mcolors.is_color_like(c):
                raise ValidationError(f"var_colors: {c!r} is not a valid color")
        return [given[j % len(given)] for j in range(p)]

    if p < 8:
        return [ORDINAL_PALETTE[k] for k in csum]

    # p + 1 hues, red dropped
    hues = rainbow(p + 1)[1:]
    return [hues[k] for k in csum]


def point_colors(colors: Sequence[str], n: int) -> NDArray:
    """RGBA colors for column-major flattened (n, p) points."""
    return np.repeat(mcolors.to_rgba_array(list(colors)), n, axis=0)
