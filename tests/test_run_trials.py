"""Tests for the run_trials command-line entry point."""
import importlib.util
import os

import pytest

SCRIPT = os.path.join(os.path.dirname(os.path.dirname(os.path.abspath(__file__))),
                      "scripts", "run_trials.py")


@pytest.fixture(scope="module")
def run_trials():
    spec = importlib.util.spec_from_file_location("run_trials", SCRIPT)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


class TestArguments:

    def test_figure_with_sweep_rejected(self, run_trials, tmp_path):
        out = tmp_path / "sweep.png"
        with pytest.raises(SystemExit) as exc:
            run_trials.main(["--sizes", "2", "3", "--trials", "2",
                             "--figure", str(out)])
        assert exc.value.code == 2
        assert not out.exists()

    def test_sweep_runs(self, run_trials):
        assert run_trials.main(["--sizes", "2", "3", "--trials", "2", "--seed", "0"]) == 0

    def test_single_experiment_saves_figure(self, run_trials, tmp_path):
        out = tmp_path / "last.png"
        code = run_trials.main(["--size", "4", "--trials", "3", "--report-every", "3",
                                "--seed", "1", "--figure", str(out)])
        assert code == 0
        assert out.exists()
