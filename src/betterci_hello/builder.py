# builder.py
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from .runner import BuildContext


DISPLAY_NAME = "Say hello world"
SYMBOL = "helloWorld"
CLASS_NAME = "HelloWorldBuilder"


# ---------------------------------------------------------------------
# The build step
# ---------------------------------------------------------------------

@dataclass(frozen=True)
class GreetingStep:
    """
    Build step that greets `name` in the build log.

    The host creates one instance per configured use (a job's builder list
    or a pipeline invocation) and calls perform() once per build. The only
    state is the name, so the same instance can run any number of builds.
    """
    name: str

    def get_name(self) -> str:
        return self.name

    def perform(self, context: "BuildContext") -> None:
        """
        Print the greeting to the build log.

        The global settings are consulted on every call, never captured at
        construction, so toggling the language affects existing steps.
        Errors from the log sink are not caught here; they fail the build.
        """
        if context.settings.use_alternate_language():
            context.log.println(f"Bonjour, {self.name}!")
        else:
            context.log.println(f"Hello, {self.name}!")


def is_applicable(job_type: Any = None) -> bool:
    """Applicable to any kind of job."""
    return True


# ---------------------------------------------------------------------
# Advisory form validation
# ---------------------------------------------------------------------

class Kind(str, Enum):
    OK = "ok"
    WARNING = "warning"
    ERROR = "error"


@dataclass(frozen=True)
class FormValidation:
    kind: Kind
    message: str = ""

    @classmethod
    def ok(cls) -> FormValidation:
        return cls(Kind.OK)

    @classmethod
    def warning(cls, message: str) -> FormValidation:
        return cls(Kind.WARNING, message)

    @classmethod
    def error(cls, message: str) -> FormValidation:
        return cls(Kind.ERROR, message)

    def to_dict(self) -> dict[str, str]:
        return {"kind": self.kind.value, "message": self.message}


def validate_name(value: Optional[str]) -> FormValidation:
    """
    Check a name typed into the configuration form.

    Advisory only: the result is shown next to the field and never stops
    a step from being saved or run.
    """
    if not value:
        return FormValidation.error("Please set a name")
    if len(value) < 4:
        return FormValidation.warning("Isn't the name too short?")
    return FormValidation.ok()
