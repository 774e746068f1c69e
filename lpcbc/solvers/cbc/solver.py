from __future__ import annotations

import logging
import os
import shutil
import subprocess
import tempfile
from typing import List, Optional

from lpcbc.core.config import cbc_path
from lpcbc.domain.model import Model, Optimization
from lpcbc.domain.schema import SolverResult
from lpcbc.solvers.cbc.mps import write_model
from lpcbc.solvers.cbc.solution import read_result

logger = logging.getLogger(__name__)

MODEL_FILE = "model.mps"
SOLUTION_FILE = "model.sol"


def cbc_arguments(model_path: str, solution_path: str, maximize: bool = False) -> List[str]:
    # The *SENSE comment in the MPS file is ignored by CBC; pass it explicitly.
    return [
        model_path,
        "max" if maximize else "min",
        "timeMode",
        "elapsed",
        "branch",
        "printingOptions",
        "normal",
        "solution",
        solution_path,
    ]


class CBCSolver:
    """
    Solves models with the CBC command line solver.

    Each call works in a private temporary directory: the model is written as
    an MPS file, CBC writes its solution next to it, the solution is read
    back, and the directory is removed whatever happened.
    """

    def __init__(self, command_path: Optional[str] = None):
        self.command_path = command_path or cbc_path()

    def solve(self, model: Model) -> Optional[SolverResult]:
        try:
            folder = tempfile.mkdtemp(prefix="lpcbc-")
        except OSError as exc:
            logger.error("Could not create temporary folder: %s", exc)
            return None

        try:
            model_path = os.path.join(folder, MODEL_FILE)
            solution_path = os.path.join(folder, SOLUTION_FILE)

            if not write_model(model, model_path):
                return None
            maximize = model.optimization == Optimization.MAXIMIZE
            if not self._execute(model_path, solution_path, maximize):
                return None

            return read_result(solution_path, model)
        finally:
            _remove_folder(folder)

    def _execute(self, model_path: str, solution_path: str, maximize: bool) -> bool:
        command = [self.command_path] + cbc_arguments(model_path, solution_path, maximize)
        logger.debug("Running %s", " ".join(command))

        try:
            completed = subprocess.run(
                command,
                stdout=subprocess.DEVNULL,
                stderr=subprocess.PIPE,
                check=False,
            )
        except OSError as exc:
            logger.error("Could not launch CBC (%s): %s", self.command_path, exc)
            return False

        if completed.returncode != 0:
            logger.error(
                "CBC exited with status: %d %s",
                completed.returncode,
                completed.stderr.decode(errors="replace").strip(),
            )
            return False
        return True


def _remove_folder(folder: str) -> None:
    try:
        shutil.rmtree(folder)
    except OSError as exc:
        logger.warning("Could not remove temporary folder %s: %s", folder, exc)


def solve_cbc(model: Model, command_path: Optional[str] = None) -> Optional[SolverResult]:
    return CBCSolver(command_path).solve(model)
