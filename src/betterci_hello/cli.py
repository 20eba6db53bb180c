# cli.py
from __future__ import annotations

import sys

import click

from .builder import GreetingStep, Kind, validate_name
from .forms import FormError, load_job
from .model import Job
from .runner import BuildLog, run_job, run_jobs
from .settings import SettingsError, get_settings
from .ui.console import Console, get_console, set_console


@click.group()
@click.option(
    "--debug",
    is_flag=True,
    default=False,
    help="Enable debug mode (show stack traces and detailed output)",
)
@click.pass_context
def cli(ctx, debug):
    """BetterCI hello-world build step."""
    console = Console(debug=debug)
    set_console(console)
    ctx.ensure_object(dict)
    ctx.obj["debug"] = debug


def _load_settings():
    console = get_console()
    try:
        return get_settings()
    except SettingsError as e:
        console.print_error(
            "Invalid settings",
            str(e),
            suggestion="Fix or delete the settings file, then save the settings again:\n  betterci-hello settings set --no-alternate-language",
        )
        sys.exit(1)


@cli.command()
@click.argument("name")
def greet(name):
    """Run the greeting step once, printing to stdout."""
    console = get_console()
    settings = _load_settings()
    console.print_debug(f"use_alternate_language={settings.use_alternate_language()}")

    result = run_job(Job(name="greet", steps=[GreetingStep(name)]), settings, log=BuildLog(sys.stdout))
    if not result.ok:
        console.print_exception(result.error)
        sys.exit(1)


@cli.command("check-name")
@click.argument("value", default="")
def check_name(value):
    """Show the advisory check for a step name."""
    result = validate_name(value)
    get_console().print_validation(value, result.kind.value, result.message)
    if result.kind is Kind.ERROR:
        sys.exit(1)


@cli.group()
def settings():
    """Show or change the global greeting settings."""


@settings.command("show")
def settings_show():
    s = _load_settings()
    get_console().print_settings(s.use_alternate_language(), str(s.store.path))


@settings.command("set")
@click.option(
    "--alternate-language/--no-alternate-language",
    required=True,
    help="Greet with 'Bonjour' instead of 'Hello'",
)
def settings_set(alternate_language):
    console = get_console()
    s = _load_settings()
    try:
        s.configure(alternate_language)
    except OSError as e:
        console.print_error("Could not save settings", str(e))
        sys.exit(1)
    console.print_settings(s.use_alternate_language(), str(s.store.path))


@cli.command()
@click.argument("job_files", nargs=-1, required=True, type=click.Path(dir_okay=False))
def run(job_files):
    """Run one build of each JSON job configuration."""
    console = get_console()

    try:
        jobs = [load_job(p) for p in job_files]
    except (FileNotFoundError, FormError) as e:
        console.print_error(
            "Failed to load job configuration",
            str(e),
            suggestion="Job files look like:\n  {\"name\": \"greet\", \"builders\": [{\"$class\": \"HelloWorldBuilder\", \"name\": \"Alice\"}]}",
        )
        sys.exit(1)

    settings_ = _load_settings()
    try:
        results = run_jobs(jobs, settings_, stream=sys.stdout, console=console)
    except KeyboardInterrupt:
        console.print_info("\nInterrupted by user")
        sys.exit(130)
    except Exception as e:
        console.print_exception(e)
        sys.exit(1)

    console.print_results(results)
    if any(v == "failed" for v in results.values()):
        sys.exit(1)


if __name__ == "__main__":
    cli()
