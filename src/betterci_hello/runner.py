# runner.py
from __future__ import annotations

import threading
from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional, TextIO

from .model import Job
from .settings import SettingsProvider
from .ui.console import Console


# ----------------------------------------------------------------------
# Build log
# ----------------------------------------------------------------------

class BuildLog:
    """
    Append-only text log of one build.

    Lines are mirrored to `stream` when given (e.g. sys.stdout for the CLI).
    A write error on the stream is raised to the caller and the line is not
    recorded.
    """

    def __init__(self, stream: Optional[TextIO] = None):
        self.stream = stream
        self._lines: List[str] = []
        self._lock = threading.Lock()

    def println(self, line: str) -> None:
        with self._lock:
            if self.stream is not None:
                self.stream.write(line + "\n")
                self.stream.flush()
            self._lines.append(line)

    def lines(self) -> List[str]:
        with self._lock:
            return list(self._lines)

    def text(self) -> str:
        return "".join(f"{line}\n" for line in self.lines())


@dataclass(frozen=True)
class BuildContext:
    """Handed to each step's perform(): the build's log and the settings lookup."""
    log: BuildLog
    settings: SettingsProvider


# ----------------------------------------------------------------------
# Errors / results
# ----------------------------------------------------------------------

@dataclass
class StepFailure(Exception):
    job: str
    step: str
    cause: BaseException

    def __str__(self) -> str:
        return f"[{self.job}] step '{self.step}' failed: {type(self.cause).__name__}: {self.cause}"


@dataclass
class BuildResult:
    job: str
    status: str  # "ok" | "failed"
    log: BuildLog
    error: Optional[StepFailure] = None

    @property
    def ok(self) -> bool:
        return self.status == "ok"


def _step_label(step) -> str:
    name = getattr(step, "name", None)
    return f"{type(step).__name__}({name!r})" if name is not None else type(step).__name__


# ----------------------------------------------------------------------
# Execution
# ----------------------------------------------------------------------

def run_job(
    job: Job,
    settings: SettingsProvider,
    *,
    log: Optional[BuildLog] = None,
    console: Optional[Console] = None,
) -> BuildResult:
    """
    Run one build of `job`: every step once, in order.

    The first failing step stops the build. Nothing is retried; the cause is
    kept on the result as a StepFailure.
    """
    log = log if log is not None else BuildLog()
    context = BuildContext(log=log, settings=settings)

    if console is not None:
        console.print_job_start(job.name)

    for step in job.steps:
        label = _step_label(step)
        if console is not None:
            console.print_step(label)
        try:
            step.perform(context)
        except Exception as e:
            failure = StepFailure(job=job.name, step=label, cause=e)
            if console is not None:
                console.print_failure(label, str(e))
            return BuildResult(job=job.name, status="failed", log=log, error=failure)

    if console is not None:
        console.print_success(job.name)
    return BuildResult(job=job.name, status="ok", log=log)


def run_jobs(
    jobs: Iterable[Job],
    settings: SettingsProvider,
    *,
    stream: Optional[TextIO] = None,
    console: Optional[Console] = None,
) -> Dict[str, str]:
    """Run each job once with its own log. Returns {job_name: status}."""
    jobs = list(jobs)
    seen: set[str] = set()
    for job in jobs:
        if job.name in seen:
            raise ValueError(f"Duplicate job name: {job.name}")
        seen.add(job.name)

    results: Dict[str, str] = {}
    for job in jobs:
        res = run_job(job, settings, log=BuildLog(stream), console=console)
        results[job.name] = res.status
    return results
