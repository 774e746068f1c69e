import os
import shutil
import stat
from typing import Optional

import pytest
from fastapi.testclient import TestClient

from lpcbc.main import create_app
from tests.model_scenario_factory import ModelScenarioFactory


@pytest.fixture()
def client() -> TestClient:
    """
    Creates a fresh FastAPI app and TestClient for each test.
    This avoids shared state between tests.
    """
    app = create_app()
    return TestClient(app)


@pytest.fixture()
def make_fake_cbc(tmp_path):
    """
    Returns a factory for stand-in CBC executables.

    The script records its arguments (one per line) in `args.txt` next to
    itself, writes `solution` to the path following the `solution` argument
    and exits with `exit_code`.
    """

    def _make(solution: Optional[str] = None, exit_code: int = 0) -> str:
        if solution is None:
            solution = ModelScenarioFactory.basic_solution()
        bin_dir = tmp_path / "bin"
        bin_dir.mkdir(exist_ok=True)
        (bin_dir / "solution.txt").write_text(solution)
        script = bin_dir / "cbc"
        script.write_text(
            "#!/bin/sh\n"
            f'for a in "$@"; do echo "$a"; done > "{bin_dir}/args.txt"\n'
            f'cp "$1" "{bin_dir}/model.mps"\n'
            f'cat "{bin_dir}/solution.txt" > "$9"\n'
            f"exit {exit_code}\n"
        )
        script.chmod(script.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
        return str(script)

    return _make


@pytest.fixture()
def cbc_command() -> str:
    """Path of a real CBC binary; skips the test when none is installed."""
    path = os.environ.get("CBC_PATH") or shutil.which("cbc")
    if not path:
        pytest.skip("CBC executable not available (set CBC_PATH).")
    return path
