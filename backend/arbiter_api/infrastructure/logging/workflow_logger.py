"""Colored workflow logger — ANSI console trace for complaints, enquiries and reports.

Color scheme:
    Green   — Record creation (complaint init, enquiry, director)
    Yellow  — Section saves
    Magenta — Submission / reference numbers
    Blue    — Decision reports
    Red     — Rejected commands
"""

import logging
import time
from contextlib import contextmanager
from typing import Any


class _Colors:
    """ANSI escape codes for terminal colors."""

    RESET = "\033[0m"
    BOLD = "\033[1m"
    DIM = "\033[2m"

    RED = "\033[91m"
    GREEN = "\033[92m"
    YELLOW = "\033[93m"
    BLUE = "\033[94m"
    MAGENTA = "\033[95m"
    GRAY = "\033[90m"


class WorkflowStage:
    """Predefined workflow stages as (label, color) pairs."""

    CREATE = ("CREATE", _Colors.GREEN)
    SECTION = ("SECTION", _Colors.YELLOW)
    SUBMIT = ("SUBMIT", _Colors.MAGENTA)
    REFERENCE = ("REFERENCE", _Colors.MAGENTA)
    REPORT = ("REPORT", _Colors.BLUE)
    REJECTED = ("REJECTED", _Colors.RED)


def _format_details(kwargs: dict[str, Any]) -> str:
    if not kwargs:
        return ""
    details = " | ".join(f"{k}={v}" for k, v in kwargs.items())
    return f" {_Colors.GRAY}({details}){_Colors.RESET}"


class WorkflowLogger:
    """Color-coded logger for workflow steps.

    Usage:
        wlog = WorkflowLogger("ComplaintService")
        wlog.step(WorkflowStage.SECTION, "Saved section 'assistant'", complaint_id=7)
    """

    def __init__(self, component_name: str):
        self._logger = logging.getLogger(component_name)

    def step(self, stage: tuple[str, str], message: str, **kwargs: Any) -> None:
        """Log a completed workflow step in its stage color."""
        label, color = stage
        self._logger.info(
            f"{color}{_Colors.BOLD}[{label}]{_Colors.RESET} "
            f"{color}{message}{_Colors.RESET}{_format_details(kwargs)}"
        )

    def rejected(self, message: str, error: Exception | None = None, **kwargs: Any) -> None:
        """Log a command the workflow refused, at WARNING level."""
        label, color = WorkflowStage.REJECTED
        formatted = f"{color}{_Colors.BOLD}[{label}]{_Colors.RESET} {color}{message}{_Colors.RESET}"
        if error:
            formatted += f" {_Colors.DIM}→ {type(error).__name__}: {error}{_Colors.RESET}"
        self._logger.warning(formatted + _format_details(kwargs))

    @contextmanager
    def timed_step(self, stage: tuple[str, str], message: str, **kwargs: Any):
        """Context manager that logs the step with its elapsed time.

        Usage:
            with wlog.timed_step(WorkflowStage.REPORT, "Decision report") as stats:
                stats["total"] = len(rows)
        """
        stats: dict[str, Any] = dict(kwargs)
        start = time.perf_counter()
        try:
            yield stats
        except Exception as e:
            elapsed = time.perf_counter() - start
            self.rejected(f"{message} — failed after {elapsed:.3f}s", error=e)
            raise
        else:
            elapsed = time.perf_counter() - start
            self.step(stage, f"{message} — {elapsed:.3f}s", **stats)
