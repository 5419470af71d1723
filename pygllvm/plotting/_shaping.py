"""
Point coordinates for the index-based diagnostic panels.

Matrices are flattened column by column, so the n residuals of response
1 come first, then those of response 2, and so on.
"""

from __future__ import annotations

import numpy as np
from numpy.typing import NDArray


def flatten_responses(matrix: NDArray) -> NDArray:
    """Column-major flattening of an (n, p) matrix."""
    return np.asarray(matrix).ravel(order='F')


def row_index_points(residuals: NDArray) -> tuple[NDArray, NDArray]:
    """x = 1..n tiled p times, y = residuals."""
    n, p = residuals.shape
    return np.tile(np.arange(1, n + 1), p), flatten_responses(residuals)


def column_index_points(
    residuals: NDArray, order: NDArray
) -> tuple[NDArray, NDArray, NDArray]:
    """
    Residuals against response position, responses placed by ``order``.

    Returns
    -------
    x : NDArray
        Positions 1..p, each repeated n times.
    y : NDArray
        Residuals of response ``order[j]`` at position j + 1.
    columns : NDArray
        Original column index of each point, for coloring.
    """
    n, p = residuals.shape
    order = np.asarray(order, dtype=int)
    x = np.repeat(np.arange(1, p + 1), n)
    return x, flatten_responses(residuals[:, order]), np.repeat(order, n)


def scale_location_points(
    linpred: NDArray, residuals: NDArray
) -> tuple[NDArray, NDArray]:
    """x = linear predictors, y = sqrt(|residuals|)."""
    return flatten_responses(linpred), np.sqrt(np.abs(flatten_responses(residuals)))
