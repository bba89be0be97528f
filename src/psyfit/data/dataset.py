"""
dataset.py
-----------

Core data container for psyfit.

defines:
- TrialData: container for behavioral trial records (one row per trial)
- COLUMNS: canonical column order of the trial CSV

Notes
-----
- Data is stored in standard NumPy arrays and never mutated after loading.
- Use numpy for I/O and analysis.
- Convert to jax.numpy (jnp) arrays only when passing into the
  psychometric model or inference engines.
"""

from __future__ import annotations

import numpy as np

COLUMNS = (
    "trial_num",
    "session_num",
    "stim_probability",
    "contrast",
    "position",
    "response_choice",
    "trial_correct",
    "reaction_time",
)
DERIVED_COLUMNS = ("signed_contrast",)


class TrialData:
    """
    Container for behavioral trial data.

    Each attribute is a 1-D NumPy array with one entry per trial.

    Attributes
    ----------
    trial_num : np.ndarray
        Trial index within the session.
    session_num : np.ndarray
        Session index.
    stim_probability : np.ndarray
        Probability of a right stimulus (unused in training sessions).
    contrast : np.ndarray
        Stimulus contrast, from 0 to 100.
    position : np.ndarray
        Stimulus position (-1 left, 1 right).
    response_choice : np.ndarray
        Subject choice (-1 left, 1 right).
    trial_correct : np.ndarray
        1 if the trial was correct, 0 otherwise.
    reaction_time : np.ndarray
        Reaction time in seconds.
    signed_contrast : np.ndarray
        Derived column, contrast * position (from -100 to 100).
    """

    def __init__(
        self,
        trial_num,
        session_num,
        stim_probability,
        contrast,
        position,
        response_choice,
        trial_correct,
        reaction_time,
    ) -> None:
        self.trial_num = np.asarray(trial_num, dtype=float)
        self.session_num = np.asarray(session_num, dtype=float)
        self.stim_probability = np.asarray(stim_probability, dtype=float)
        self.contrast = np.asarray(contrast, dtype=float)
        self.position = np.asarray(position, dtype=float)
        self.response_choice = np.asarray(response_choice, dtype=float)
        self.trial_correct = np.asarray(trial_correct, dtype=float)
        self.reaction_time = np.asarray(reaction_time, dtype=float)

        n = self.trial_num.shape[0]
        for name in COLUMNS:
            column = getattr(self, name)
            if column.ndim != 1 or column.shape[0] != n:
                raise ValueError(
                    f"column '{name}' must be 1-D with {n} entries, "
                    f"got shape {column.shape}"
                )

        self.signed_contrast = self.contrast * self.position

    @classmethod
    def from_array(cls, array) -> TrialData:
        """
        Construct TrialData from a 2-D array.

        Parameters
        ----------
        array : array-like, shape (n_trials, 8) or (n_trials, 9)
            Columns in the order given by COLUMNS. A ninth column, if
            present, is ignored and recomputed as contrast * position.

        Returns
        -------
        TrialData

        Raises
        ------
        ValueError
            If the array is not 2-D with 8 or 9 columns.
        """
        array = np.asarray(array, dtype=float)
        if array.ndim == 1 and array.shape[0] in (8, 9):
            array = array[None, :]
        if array.ndim != 2 or array.shape[1] not in (8, 9):
            raise ValueError(
                "array must be shape (n_trials, 8) or (n_trials, 9), "
                f"got {array.shape}"
            )
        return cls(*(array[:, i] for i in range(len(COLUMNS))))

    def to_numpy(self) -> np.ndarray:
        """
        Return the data as a (n_trials, 9) array.

        The last column is the signed contrast.
        """
        columns = [getattr(self, name) for name in COLUMNS + DERIVED_COLUMNS]
        return np.stack(columns, axis=1)

    def __len__(self) -> int:
        """Return number of trials."""
        return self.trial_num.shape[0]

    def __getitem__(self, index) -> TrialData:
        """Select trials with an index, slice or boolean mask."""
        return TrialData(*(getattr(self, name)[index] for name in COLUMNS))

    def __repr__(self) -> str:
        return f"TrialData(n_trials={len(self)}, sessions={self.sessions.tolist()})"

    @property
    def sessions(self) -> np.ndarray:
        """Sorted unique session numbers."""
        return np.unique(self.session_num).astype(int)

    def for_session(self, session_num: int) -> TrialData:
        """
        Return the trials of a single session.

        Parameters
        ----------
        session_num : int
            Session to keep.

        Returns
        -------
        TrialData
            New container; empty if the session does not exist.
        """
        return self[self.session_num == session_num]

    def head(self, n: int = 5) -> np.ndarray:
        """Return the first n rows as a (n, 9) array, for display."""
        return self.to_numpy()[:n]

    def choice_summary(self) -> tuple[np.ndarray, np.ndarray, np.ndarray, np.ndarray]:
        """
        Summarize rightward choices per signed contrast level.

        Returns
        -------
        stim : np.ndarray
            Unique signed contrasts, sorted.
        n_trials : np.ndarray
            Number of trials at each level.
        p_right : np.ndarray
            Fraction of rightward choices at each level.
        sem : np.ndarray
            Binomial standard error of p_right.
        """
        stim = np.unique(self.signed_contrast)
        n_trials = np.zeros(stim.shape[0])
        p_right = np.zeros(stim.shape[0])
        for i, s in enumerate(stim):
            choices = self.response_choice[self.signed_contrast == s]
            n_trials[i] = choices.shape[0]
            p_right[i] = np.mean(choices == 1)
        sem = np.sqrt(p_right * (1.0 - p_right) / n_trials)
        return stim, n_trials, p_right, sem
