"""
Summary report for fitted GLLVMs.

SummaryReport is an immutable mapping from labeled sections
("Coefficients", "Dispersion parameters", ...) to values, with property
accessors for the always-present entries and an R-style text rendering
matching print(summary(gllvm(...))).
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Iterator

import numpy as np
from numpy.typing import NDArray


@dataclass(frozen=True)
class CoefficientTable:
    """Labeled coefficient matrix.

    Attributes:
        values: Coefficients (rows, cols).
        row_names: Row labels, one per response variable.
        col_names: Column labels, e.g. 'Intercept', 'theta.LV1', ...
    """
    values: NDArray
    row_names: tuple[str, ...]
    col_names: tuple[str, ...]

    @property
    def shape(self) -> tuple[int, int]:
        return self.values.shape

    def column(self, name: str) -> NDArray:
        """Values of one labeled column."""
        if name not in self.col_names:
            raise KeyError(
                f"Unknown column {name!r}. Available: {list(self.col_names)}"
            )
        return self.values[:, self.col_names.index(name)]

    def row(self, name: str) -> dict[str, float]:
        """One labeled row as column name → value."""
        if name not in self.row_names:
            raise KeyError(
                f"Unknown row {name!r}. Available: {list(self.row_names)}"
            )
        i = self.row_names.index(name)
        return dict(zip(self.col_names, (float(v) for v in self.values[i])))

    def format(self, digits: int = 4) -> list[str]:
        """Right-aligned text lines, header first."""
        width = max(
            [len(c) for c in self.col_names]
            + [len(f'{v:.{digits}f}') for v in self.values.ravel()]
            + [1]
        )
        label_width = max([len(r) for r in self.row_names] + [1])
        header = ' ' * label_width + ''.join(
            f' {c:>{width}s}' for c in self.col_names
        )
        lines = [header]
        for name, row in zip(self.row_names, self.values):
            cells = ''.join(f' {v:{width}.{digits}f}' for v in row)
            lines.append(f'{name:<{label_width}s}{cells}')
        return lines


class SummaryReport(Mapping):
    """Summary of a fitted GLLVM.

    Behaves as a read-only mapping from section label to value. The
    entries 'log-likelihood', 'df', 'AIC', 'AICc', 'BIC', 'Call',
    'family' and 'Coefficients' are always present; the remaining ones
    depend on the model configuration.
    """

    def __init__(self, sections: Mapping[str, Any]):
        self._sections = MappingProxyType(dict(sections))

    def __getitem__(self, key: str) -> Any:
        try:
            return self._sections[key]
        except KeyError:
            raise KeyError(
                f"{key!r} not in summary. Available: {list(self._sections)}"
            ) from None

    def __iter__(self) -> Iterator[str]:
        return iter(self._sections)

    def __len__(self) -> int:
        return len(self._sections)

    # --- Always present ---

    @property
    def log_likelihood(self) -> float:
        return self['log-likelihood']

    @property
    def df(self) -> int:
        return self['df']

    @property
    def aic(self) -> float:
        return self['AIC']

    @property
    def aicc(self) -> float:
        return self['AICc']

    @property
    def bic(self) -> float:
        return self['BIC']

    @property
    def call(self) -> str:
        return self['Call']

    @property
    def family(self) -> str:
        return self['family']

    @property
    def coefficients(self) -> CoefficientTable:
        return self['Coefficients']

    # --- Text rendering ---

    def summary(self, digits: int = 4) -> str:
        """R-style summary matching print(summary(gllvm(...)))."""
        lines = []
        lines.append("Call:")
        lines.append(self.call if self.call else "gllvm()")
        lines.append("")
        lines.append(f"Family:  {self.family}")
        lines.append("")
        lines.append(
            f"AIC:  {self.aic:.{digits}f}  AICc:  {self.aicc:.{digits}f}  "
            f"BIC:  {self.bic:.{digits}f}  "
            f"LL:  {self.log_likelihood:.{digits}f}  df:  {self.df}"
        )
        lines.append("")
        lines.append("Coefficients related to species:")
        lines.extend(self.coefficients.format(digits))

        species = self.coefficients.row_names
        for label, value in self.items():
            if label in _HEADLINE_KEYS:
                continue
            lines.append("")
            lines.append(f"{label}:")
            labels = species if label in _PER_RESPONSE_SECTIONS else None
            lines.extend(_format_value(value, labels, digits))

        return '\n'.join(lines)

    def __repr__(self) -> str:
        shape = self.coefficients.shape
        return (
            f"SummaryReport(family={self.family}, "
            f"responses={shape[0]}, "
            f"sections={list(self._sections)})"
        )


_HEADLINE_KEYS = frozenset({
    'log-likelihood', 'df', 'AIC', 'AICc', 'BIC',
    'Call', 'family', 'Coefficients',
})

# Sections holding one value per response, printed against response names.
_PER_RESPONSE_SECTIONS = frozenset({
    'Dispersion parameters', 'Zero inflation p',
})


def _format_value(
    value: Any, species: tuple[str, ...] | None, digits: int
) -> list[str]:
    """Render one optional summary section."""
    if isinstance(value, CoefficientTable):
        return value.format(digits)
    if isinstance(value, Mapping):
        return [f" {k:>10s} {float(v):10.{digits}f}" for k, v in value.items()]

    arr = np.atleast_1d(np.asarray(value, dtype=np.float64))
    if species is not None and arr.ndim == 1 and len(arr) == len(species):
        width = max(len(s) for s in species)
        return [f" {s:<{width}s} {v:10.{digits}f}" for s, v in zip(species, arr)]
    if arr.ndim == 1:
        return [' ' + ' '.join(f'{v:.{digits}f}' for v in arr)]
    return [' ' + ' '.join(f'{v:10.{digits}f}' for v in row) for row in arr]
