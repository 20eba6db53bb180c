# dsl.py
from __future__ import annotations

from typing import Any, List, Mapping, Optional

from .builder import GreetingStep, SYMBOL
from .forms import CLASS_KEY, FormError
from .model import Job
from .plugin import PluginTable, default_table


# ---------------------------------------------------------------------
# Step helpers
# ---------------------------------------------------------------------

def hello_world(name: str) -> GreetingStep:
    """Symbol form: helloWorld 'name'."""
    return invoke(SYMBOL, name)


def step(descriptor: Mapping[str, Any], *, table: Optional[PluginTable] = None) -> Any:
    """
    Class-reference form: step([$class: 'HelloWorldBuilder', name: '...']).

    The `$class` entry picks the registered step type; the rest of the map
    is handed to its constructor.
    """
    if CLASS_KEY not in descriptor:
        raise FormError(CLASS_KEY, "step descriptor needs a $class entry")
    table = table or default_table()
    d = table.by_class(descriptor[CLASS_KEY])
    return d.construct(descriptor)


def invoke(symbol: str, *args: Any, table: Optional[PluginTable] = None, **kwargs: Any) -> Any:
    """
    Scripted invocation by symbol with one positional argument or `name=`.

    Example:
        invoke("helloWorld", "Alice")
        invoke("helloWorld", name="Alice")
    """
    if args and kwargs:
        raise TypeError(f"{symbol}() takes either one positional argument or keyword arguments, not both")
    if len(args) > 1:
        raise TypeError(f"{symbol}() takes 1 positional argument but {len(args)} were given")
    if not args and not kwargs:
        raise TypeError(f"{symbol}() missing required argument: 'name'")

    form = {"name": args[0]} if args else dict(kwargs)
    table = table or default_table()
    return table.by_symbol(symbol).construct(form)


# ---------------------------------------------------------------------
# Job / workflow helpers
# ---------------------------------------------------------------------

def job(name: str, *steps: Any) -> Job:
    if not steps:
        raise ValueError(f"job({name!r}) must have at least one step")
    return Job(name=name, steps=list(steps))


def wf(*jobs: Job) -> List[Job]:
    """
    Workflow definition helper:

        def workflow():
            return wf(
                job("greet", hello_world("Alice")),
            )
    """
    return list(jobs)
