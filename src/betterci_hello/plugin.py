# plugin.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Mapping

from .builder import CLASS_NAME, DISPLAY_NAME, SYMBOL, FormValidation, GreetingStep, is_applicable, validate_name
from .forms import step_from_form


@dataclass(frozen=True)
class StepDescriptor:
    """
    What a build step type advertises to the host: how to label it, how to
    check and build it from a form, and how to run an instance.
    """
    display_name: str
    symbol: str
    class_name: str
    validate: Callable[[str], FormValidation]
    construct: Callable[[Mapping[str, Any]], Any]
    execute: Callable[[Any, Any], None]
    is_applicable: Callable[[Any], bool]


def _execute(step: GreetingStep, context) -> None:
    step.perform(context)


DESCRIPTOR = StepDescriptor(
    display_name=DISPLAY_NAME,
    symbol=SYMBOL,
    class_name=CLASS_NAME,
    validate=validate_name,
    construct=step_from_form,
    execute=_execute,
    is_applicable=is_applicable,
)


class PluginTable:
    """Build step types known to the host, addressable by symbol or by $class."""

    def __init__(self):
        self._by_symbol: Dict[str, StepDescriptor] = {}
        self._by_class: Dict[str, StepDescriptor] = {}

    def register(self, descriptor: StepDescriptor) -> StepDescriptor:
        if descriptor.symbol in self._by_symbol:
            raise ValueError(f"Duplicate step symbol: {descriptor.symbol}")
        if descriptor.class_name in self._by_class:
            raise ValueError(f"Duplicate step class: {descriptor.class_name}")
        self._by_symbol[descriptor.symbol] = descriptor
        self._by_class[descriptor.class_name] = descriptor
        return descriptor

    def by_symbol(self, symbol: str) -> StepDescriptor:
        try:
            return self._by_symbol[symbol]
        except KeyError:
            known = ", ".join(sorted(self._by_symbol)) or "none"
            raise KeyError(f"No build step registered as {symbol!r} (known: {known})") from None

    def by_class(self, class_name: str) -> StepDescriptor:
        try:
            return self._by_class[class_name]
        except KeyError:
            known = ", ".join(sorted(self._by_class)) or "none"
            raise KeyError(f"No build step class {class_name!r} (known: {known})") from None

    def descriptors(self) -> List[StepDescriptor]:
        return list(self._by_symbol.values())


def register(table: PluginTable) -> StepDescriptor:
    """Entry point the host calls to add the hello-world step to its table."""
    return table.register(DESCRIPTOR)


def default_table() -> PluginTable:
    table = PluginTable()
    register(table)
    return table
