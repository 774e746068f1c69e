from __future__ import annotations

import logging
from typing import Optional

from lpcbc.domain.model import Model
from lpcbc.domain.schema import SolverResult
from lpcbc.solvers.ortools.build import build_solver
from lpcbc.solvers.ortools.extract import extract_result

logger = logging.getLogger(__name__)


def solve_ortools(model: Model) -> Optional[SolverResult]:
    """In-process alternative to the CBC command line solver."""
    try:
        built = build_solver(model)
    except RuntimeError as exc:
        logger.error("%s", exc)
        return None
    return extract_result(built)
