"""Tests for running minos_bran in a private working directory."""
import os
from pathlib import Path

import pytest

from conftest import STDOUT, TOROIDAL, result_text
from normalmodes import (
    ModeFamily,
    ModeParameters,
    SolverExecutionError,
    SolverNotFoundError,
    run_minos_bran,
)
from normalmodes import config


class TestRunMinosBran:
    def test_files_and_output(self, fake_solver, earth_model):
        with run_minos_bran(earth_model, ModeFamily.TOROIDAL, ModeParameters(),
                            executable=str(fake_solver.path)) as run:
            assert run.stdout == STDOUT
            assert run.result_path == run.workdir / config.MODEL_OUT
            assert run.result_path.read_text() == result_text(TOROIDAL)
            assert (run.workdir / config.MODEL_IN).exists()
            control = (run.workdir / config.CONTROL).read_text().splitlines()
            assert control[4] == "2"
            workdir = run.workdir
        assert not workdir.exists()

    def test_runs_in_workdir_without_chdir(self, fake_solver, earth_model):
        cwd = os.getcwd()
        with run_minos_bran(earth_model, ModeFamily.SPHEROIDAL, ModeParameters(),
                            executable=str(fake_solver.path)) as run:
            workdir = run.workdir
        assert os.getcwd() == cwd
        [(selector, solver_cwd)] = fake_solver.calls()
        assert selector == "3"
        assert Path(solver_cwd).resolve() == workdir.resolve()

    def test_fresh_directory_per_run(self, fake_solver, earth_model):
        dirs = []
        for _ in range(2):
            with run_minos_bran(earth_model, ModeFamily.RADIAL, ModeParameters(),
                                executable=str(fake_solver.path)) as run:
                dirs.append(run.workdir)
        assert dirs[0] != dirs[1]

    def test_cleanup_on_error_in_block(self, fake_solver, earth_model):
        with pytest.raises(RuntimeError):
            with run_minos_bran(earth_model, ModeFamily.TOROIDAL, ModeParameters(),
                                executable=str(fake_solver.path)) as run:
                workdir = run.workdir
                raise RuntimeError("parse failed")
        assert not workdir.exists()

    def test_non_zero_exit(self, fake_solver, earth_model):
        fake_solver.set_exit_code(3)
        fake_solver.set_stdout("error: bad model\n")
        with pytest.raises(SolverExecutionError, match="exit code 3") as info:
            with run_minos_bran(earth_model, ModeFamily.TOROIDAL, ModeParameters(),
                                executable=str(fake_solver.path)):
                pass
        assert info.value.returncode == 3
        assert "bad model" in info.value.stdout

    def test_missing_executable(self, tmp_path, earth_model):
        with pytest.raises(SolverNotFoundError):
            with run_minos_bran(earth_model, ModeFamily.TOROIDAL, ModeParameters(),
                                executable=str(tmp_path / "no_such_solver")):
                pass

    def test_relative_executable(self, fake_solver, earth_model, monkeypatch):
        monkeypatch.chdir(fake_solver.directory)
        with run_minos_bran(earth_model, ModeFamily.TOROIDAL, ModeParameters(),
                            executable="./minos_bran") as run:
            assert run.result_path.exists()
        assert [selector for selector, _ in fake_solver.calls()] == ["2"]

    def test_unlaunchable_executable(self, tmp_path, earth_model):
        bad = tmp_path / "minos_bran"
        bad.write_bytes(b"\x00\x01 not a program\n")
        bad.chmod(0o755)
        with pytest.raises(SolverExecutionError, match="cannot start") as info:
            with run_minos_bran(earth_model, ModeFamily.TOROIDAL, ModeParameters(),
                                executable=str(bad)):
                pass
        assert not isinstance(info.value, SolverNotFoundError)
        assert isinstance(info.value.__cause__, OSError)

    def test_reference_frequency_passed_to_model(self, fake_solver):
        calls = []

        class RecordingModel:
            def write_mineos(self, path, freq=1.0):
                calls.append((Path(path).name, freq))
                Path(path).write_text("model\n")

        with run_minos_bran(RecordingModel(), ModeFamily.TOROIDAL, ModeParameters(), freq=0.5,
                            executable=str(fake_solver.path)):
            pass
        assert calls == [(config.MODEL_IN, 0.5)]


class TestFindMinosBran:
    def test_explicit_path(self, fake_solver):
        assert config.find_minos_bran(str(fake_solver.path)) == str(fake_solver.path)

    def test_relative_path_made_absolute(self, fake_solver, monkeypatch):
        monkeypatch.chdir(fake_solver.directory)
        monkeypatch.setenv(config.MINOS_BRAN_ENV, "./minos_bran")
        resolved = config.find_minos_bran()
        assert os.path.isabs(resolved)
        assert Path(resolved).resolve() == fake_solver.path.resolve()

    def test_environment_variable(self, fake_solver, monkeypatch):
        monkeypatch.setenv(config.MINOS_BRAN_ENV, str(fake_solver.path))
        assert config.find_minos_bran() == str(fake_solver.path)

    def test_path_lookup(self, fake_solver, monkeypatch):
        monkeypatch.delenv(config.MINOS_BRAN_ENV, raising=False)
        monkeypatch.setenv("PATH", str(fake_solver.directory))
        assert Path(config.find_minos_bran()) == fake_solver.path

    def test_not_found(self, tmp_path, monkeypatch):
        monkeypatch.delenv(config.MINOS_BRAN_ENV, raising=False)
        monkeypatch.setenv("PATH", str(tmp_path))
        with pytest.raises(SolverNotFoundError, match=config.MINOS_BRAN_ENV):
            config.find_minos_bran()
