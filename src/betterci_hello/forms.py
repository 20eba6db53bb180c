# forms.py
from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Mapping

from .builder import CLASS_NAME, GreetingStep
from .model import Job

CLASS_KEY = "$class"

_TRUE_STRINGS = {"true", "on"}
_FALSE_STRINGS = {"false"}


@dataclass
class FormError(Exception):
    """A submitted form or stored job configuration could not be mapped to typed values."""
    field: str
    message: str

    def __str__(self) -> str:
        return f"{self.field}: {self.message}"


def _require_mapping(form: Any, what: str) -> Mapping[str, Any]:
    if not isinstance(form, Mapping):
        raise FormError(what, f"expected an object, got {type(form).__name__}")
    return form


# ---------------------------------------------------------------------
# Step configuration
# ---------------------------------------------------------------------

def step_from_form(form: Mapping[str, Any]) -> GreetingStep:
    """
    Build a GreetingStep from a configuration form or step descriptor map.

    Only `name` is read; `$class` and any other keys the host adds are
    ignored. The advisory name check is not applied here.
    """
    form = _require_mapping(form, "step")
    if "name" not in form:
        raise FormError("name", "field is required")
    name = form["name"]
    if not isinstance(name, str):
        raise FormError("name", f"expected a string, got {type(name).__name__}")
    return GreetingStep(name=name)


def step_to_form(step: GreetingStep) -> Dict[str, Any]:
    return {CLASS_KEY: CLASS_NAME, "name": step.get_name()}


# ---------------------------------------------------------------------
# Global settings form
# ---------------------------------------------------------------------

def settings_from_form(form: Mapping[str, Any]) -> bool:
    """
    Read `useAlternateLanguage` from the global configuration form.

    Accepts JSON booleans, "true"/"false" in any case, and "on" as sent by
    an HTML checkbox.
    """
    form = _require_mapping(form, "settings")
    if "useAlternateLanguage" not in form:
        raise FormError("useAlternateLanguage", "field is required")
    value = form["useAlternateLanguage"]
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in _TRUE_STRINGS:
            return True
        if lowered in _FALSE_STRINGS:
            return False
    raise FormError("useAlternateLanguage", f"expected a boolean, got {value!r}")


# ---------------------------------------------------------------------
# Job configuration persistence
# ---------------------------------------------------------------------

def job_to_dict(job: Job) -> Dict[str, Any]:
    """
    Convert a Job to the dictionary stored as its configuration.
    This is the reverse of dict_to_job().
    """
    return {
        "name": job.name,
        "builders": [step_to_form(s) for s in job.steps],
    }


def dict_to_job(data: Mapping[str, Any]) -> Job:
    data = _require_mapping(data, "job")
    if not isinstance(data.get("name"), str):
        raise FormError("name", "job name must be a string")

    builders = data.get("builders")
    if not isinstance(builders, list):
        raise FormError("builders", f"expected a list of build steps, got {type(builders).__name__}")
    if not builders:
        raise FormError("builders", f"job {data['name']!r} must have at least one step")

    steps = []
    for i, raw in enumerate(builders):
        raw = _require_mapping(raw, f"builders[{i}]")
        cls = raw.get(CLASS_KEY)
        if cls != CLASS_NAME:
            raise FormError(f"builders[{i}].{CLASS_KEY}", f"unknown build step class {cls!r}")
        steps.append(step_from_form(raw))

    return Job(name=data["name"], steps=steps)


def save_job(job: Job, path: str | Path) -> Path:
    p = Path(path)
    p.parent.mkdir(parents=True, exist_ok=True)
    tmp = p.with_suffix(p.suffix + ".tmp")
    tmp.write_text(json.dumps(job_to_dict(job), indent=2, ensure_ascii=False), encoding="utf-8")
    tmp.replace(p)
    return p


def load_job(path: str | Path) -> Job:
    p = Path(path).expanduser().resolve()
    if not p.exists():
        raise FileNotFoundError(f"Job configuration not found: {p}")
    try:
        data = json.loads(p.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise FormError("job", f"invalid JSON in {p.name}: {e}") from e
    return dict_to_job(data)
