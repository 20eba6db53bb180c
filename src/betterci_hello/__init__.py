from .builder import GreetingStep, FormValidation, Kind, validate_name, DISPLAY_NAME, SYMBOL, CLASS_NAME
from .settings import GreetingSettings, SettingsStore, get_settings, set_settings
from .plugin import PluginTable, StepDescriptor, register, default_table
from .dsl import hello_world, step, invoke, job, wf
from .runner import BuildLog, BuildContext, run_job, run_jobs
from .model import Job

__all__ = [
    "GreetingStep", "FormValidation", "Kind", "validate_name", "DISPLAY_NAME", "SYMBOL", "CLASS_NAME",
    "GreetingSettings", "SettingsStore", "get_settings", "set_settings",
    "PluginTable", "StepDescriptor", "register", "default_table",
    "hello_world", "step", "invoke", "job", "wf",
    "BuildLog", "BuildContext", "run_job", "run_jobs",
    "Job",
]
