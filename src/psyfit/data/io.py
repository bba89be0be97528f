"""
io.py
-----

I/O utilities for loading and saving behavioral trial data.

Supports:
- CSV with a header row and the eight columns listed in dataset.COLUMNS

Notes
-----
- Data is stored in NumPy arrays (see TrialData.to_numpy()).
- Convert to jax.numpy when passing into models.
"""

from __future__ import annotations

import csv
from pathlib import Path
from typing import Union

import numpy as np

from .dataset import COLUMNS, TrialData

PathLike = Union[str, Path]


def load_trials_csv(path: PathLike) -> TrialData:
    """
    Load TrialData from a CSV file.

    The first row is treated as a header and skipped; columns are read
    positionally in the order given by COLUMNS.

    Parameters
    ----------
    path : str or Path

    Returns
    -------
    TrialData

    Raises
    ------
    FileNotFoundError
        If the file does not exist.
    ValueError
        If the file has no trials or rows with the wrong number of columns.
    """
    path = Path(path)
    if not path.is_file():
        raise FileNotFoundError(f"trial data file not found: {path}")

    rows = []
    with open(path, newline="") as f:
        reader = csv.reader(f)
        next(reader, None)  # header
        for line_no, row in enumerate(reader, start=2):
            if not row:
                continue
            if len(row) != len(COLUMNS):
                raise ValueError(
                    f"{path}:{line_no}: expected {len(COLUMNS)} columns, "
                    f"got {len(row)}"
                )
            rows.append([float(value) for value in row])

    if not rows:
        raise ValueError(f"{path}: no trials found")

    return TrialData.from_array(np.array(rows))


def save_trials_csv(data: TrialData, path: PathLike) -> None:
    """
    Save TrialData to a CSV file.

    The derived signed contrast is not written; it is recomputed on load.

    Parameters
    ----------
    data : TrialData
    path : str or Path
    """
    table = data.to_numpy()[:, : len(COLUMNS)]
    with open(path, "w", newline="") as f:
        writer = csv.writer(f)
        writer.writerow(COLUMNS)
        for row in table:
            writer.writerow([_format_value(v) for v in row])


def _format_value(value: float) -> str:
    """Write integral values without a trailing '.0'."""
    if float(value).is_integer():
        return str(int(value))
    return repr(float(value))
