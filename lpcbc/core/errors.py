class DomainError(ValueError):
    """Invalid model in a domain sense (unknown variables, validation errors, etc.)."""


class SolverError(RuntimeError):
    """The solver produced no result (launch failure, non-zero exit, unreadable output)."""
