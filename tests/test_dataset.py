"""
test_dataset.py
---------------

Tests for TrialData, CSV loading/saving and simulated sessions.
"""

import numpy as np
import pytest

from psyfit.data import COLUMNS, TrialData, load_trials_csv, save_trials_csv, simulate_trials


class TestLoadTrials:
    def test_loads_all_rows(self, csv_path):
        data = load_trials_csv(csv_path)
        assert len(data) == 8
        assert data.to_numpy().shape == (8, 9)

    def test_signed_contrast_is_contrast_times_position(self, csv_path):
        data = load_trials_csv(csv_path)
        np.testing.assert_allclose(
            data.signed_contrast, [100, -25, 0, -50, 12.5, -100, 6.25, 25]
        )
        np.testing.assert_allclose(data.to_numpy()[:, 8], data.contrast * data.position)

    def test_sessions_and_filter(self, csv_path):
        data = load_trials_csv(csv_path)
        assert data.sessions.tolist() == [1, 2]

        session = data.for_session(2)
        assert len(session) == 3
        assert np.all(session.session_num == 2)
        # Original data is not modified by filtering
        assert len(data) == 8

    def test_missing_session_is_empty(self, csv_path):
        data = load_trials_csv(csv_path)
        assert len(data.for_session(99)) == 0

    def test_head(self, csv_path):
        data = load_trials_csv(csv_path)
        assert data.head(3).shape == (3, 9)

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_trials_csv(tmp_path / "nope.csv")

    def test_wrong_number_of_columns(self, tmp_path):
        path = tmp_path / "bad.csv"
        path.write_text("a,b,c\n1,2,3\n")
        with pytest.raises(ValueError, match="expected 8 columns"):
            load_trials_csv(path)

    def test_header_only(self, tmp_path):
        path = tmp_path / "empty.csv"
        path.write_text(",".join(COLUMNS) + "\n")
        with pytest.raises(ValueError, match="no trials"):
            load_trials_csv(path)


class TestTrialData:
    def test_from_array_recomputes_signed_contrast(self):
        row = [1, 1, 0.5, 50, -1, 1, 0, 0.3, 999.0]
        data = TrialData.from_array(np.array([row]))
        assert data.signed_contrast[0] == -50

    def test_from_array_rejects_bad_shape(self):
        with pytest.raises(ValueError):
            TrialData.from_array(np.zeros((3, 5)))

    def test_choice_summary(self, csv_path):
        data = load_trials_csv(csv_path).for_session(1)
        stim, n, p_right, sem = data.choice_summary()
        np.testing.assert_allclose(stim, [-50, -25, 0, 12.5, 100])
        np.testing.assert_allclose(n, [1, 1, 1, 1, 1])
        np.testing.assert_allclose(p_right, [1, 0, 0, 1, 1])
        np.testing.assert_allclose(sem, 0.0)

    def test_save_and_load(self, csv_path, tmp_path):
        data = load_trials_csv(csv_path)
        out = tmp_path / "out.csv"
        save_trials_csv(data, out)

        header = out.read_text().splitlines()[0]
        assert header == ",".join(COLUMNS)
        np.testing.assert_allclose(load_trials_csv(out).to_numpy(), data.to_numpy())


class TestSimulation:
    def test_layout(self):
        theta = np.array([0.0, 20.0, 0.1, 0.5])
        data = simulate_trials(theta, n_sessions=3, trials_per_session=50, seed=0)
        assert len(data) == 150
        assert data.sessions.tolist() == [1, 2, 3]
        assert set(np.unique(data.response_choice)) <= {-1.0, 1.0}
        assert set(np.unique(data.position)) <= {-1.0, 1.0}

    def test_reproducible(self):
        theta = np.array([0.0, 20.0, 0.1, 0.5])
        a = simulate_trials(theta, trials_per_session=100, seed=3)
        b = simulate_trials(theta, trials_per_session=100, seed=3)
        np.testing.assert_array_equal(a.to_numpy(), b.to_numpy())

    def test_choices_follow_stimulus(self):
        # Near-deterministic observer: choice matches the side at high contrast
        theta = np.array([0.0, 1.0, 0.0, 0.5])
        data = simulate_trials(theta, trials_per_session=300, contrasts=(100.0,), seed=0)
        np.testing.assert_array_equal(data.response_choice, data.position)
        assert np.all(data.trial_correct == 1)

    def test_per_session_theta_shape_checked(self):
        with pytest.raises(ValueError):
            simulate_trials(np.zeros((2, 4)), n_sessions=3)
