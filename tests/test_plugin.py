"""Tests for step registration and pipeline DSL invocation."""

import pytest

from betterci_hello.builder import GreetingStep, Kind
from betterci_hello.dsl import hello_world, invoke, job, step, wf
from betterci_hello.forms import FormError
from betterci_hello.plugin import DESCRIPTOR, PluginTable, default_table, register
from betterci_hello.runner import run_job


def test_descriptor_advertises_display_name():
    d = default_table().by_symbol("helloWorld")
    assert d is DESCRIPTOR
    assert d.display_name == "Say hello world"
    assert d.is_applicable("freestyle") is True


def test_descriptor_capabilities():
    assert DESCRIPTOR.validate("Al").kind is Kind.WARNING
    built = DESCRIPTOR.construct({"name": "Erin"})
    assert built == GreetingStep("Erin")


def test_register_twice_fails():
    table = PluginTable()
    register(table)
    with pytest.raises(ValueError, match="Duplicate"):
        register(table)


def test_unknown_lookup_lists_known_steps():
    with pytest.raises(KeyError, match="helloWorld"):
        default_table().by_symbol("goodbyeWorld")
    with pytest.raises(KeyError, match="HelloWorldBuilder"):
        default_table().by_class("Shell")


def test_symbol_invocation():
    assert hello_world("New name") == GreetingStep("New name")
    assert invoke("helloWorld", name="New name") == GreetingStep("New name")


def test_class_reference_invocation():
    assert step({"$class": "HelloWorldBuilder", "name": "New name"}) == GreetingStep("New name")


def test_class_reference_requires_class():
    with pytest.raises(FormError):
        step({"name": "New name"})


@pytest.mark.parametrize(
    "args,kwargs",
    [((), {}), (("a", "b"), {}), (("a",), {"name": "b"})],
)
def test_invoke_argument_errors(args, kwargs):
    with pytest.raises(TypeError):
        invoke("helloWorld", *args, **kwargs)


def test_invoke_with_custom_table():
    table = PluginTable()
    with pytest.raises(KeyError):
        invoke("helloWorld", "x", table=table)
    register(table)
    assert invoke("helloWorld", "x", table=table) == GreetingStep("x")


def test_scripted_pipeline_symbol(settings):
    result = run_job(job("test-scripted-pipeline-use-symbol", hello_world("New name")), settings)
    assert result.ok
    assert result.log.lines() == ["Hello, New name!"]


def test_scripted_pipeline_class_reference(settings):
    pipeline = job("test-perform-pipeline", step({"$class": "HelloWorldBuilder", "name": "New name"}))
    result = run_job(pipeline, settings)
    assert result.ok
    assert "Hello, New name!" in result.log.text()


def test_job_needs_steps():
    with pytest.raises(ValueError):
        job("empty")


def test_wf_collects_jobs():
    a = job("a", hello_world("Alice"))
    b = job("b", hello_world("Bob"))
    assert wf(a, b) == [a, b]
