# model.py
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, List


@dataclass
class Job:
    """
    A freestyle job: a name plus its builder list, run in order once per build.

    Steps are anything with perform(context); in practice GreetingStep.
    """
    name: str
    steps: List[Any] = field(default_factory=list)
