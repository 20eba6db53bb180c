# api.py
from __future__ import annotations

from typing import Any, Optional

from fastapi import FastAPI, HTTPException, Request
from pydantic import BaseModel, Field

from .builder import CLASS_NAME, DISPLAY_NAME, SYMBOL, is_applicable, validate_name
from .forms import FormError, step_from_form, step_to_form
from .settings import GreetingSettings, get_settings

# -------------------- Schemas --------------------

class DescriptorResponse(BaseModel):
    display_name: str
    symbol: str
    class_name: str
    applicable: bool

class SettingsForm(BaseModel):
    use_alternate_language: bool = Field(alias="useAlternateLanguage")

    model_config = {"populate_by_name": True}

class ValidationResponse(BaseModel):
    kind: str  # ok|warning|error
    message: str

class StepForm(BaseModel):
    class_name: str = Field(default=CLASS_NAME, alias="$class")
    name: str

    model_config = {"populate_by_name": True}

# -------------------- App --------------------

def create_app(settings: Optional[GreetingSettings] = None) -> FastAPI:
    """
    Admin surface for the hello-world step.

    `settings` defaults to the process-wide instance, looked up per request.
    """
    app = FastAPI(title="BetterCI Hello World")
    app.state.settings = settings

    def current_settings(request: Request) -> GreetingSettings:
        return request.app.state.settings or get_settings()

    @app.get("/descriptor", response_model=DescriptorResponse)
    async def descriptor():
        return DescriptorResponse(
            display_name=DISPLAY_NAME,
            symbol=SYMBOL,
            class_name=CLASS_NAME,
            applicable=is_applicable(),
        )

    @app.get("/settings", response_model=SettingsForm, response_model_by_alias=True)
    async def read_settings(request: Request):
        return SettingsForm(use_alternate_language=current_settings(request).use_alternate_language())

    @app.post("/settings", response_model=SettingsForm, response_model_by_alias=True)
    async def configure(form: dict[str, Any], request: Request):
        s = current_settings(request)
        try:
            s.configure_form(form)
        except FormError as e:
            raise HTTPException(status_code=400, detail=str(e))
        return SettingsForm(use_alternate_language=s.use_alternate_language())

    @app.get("/steps/check-name", response_model=ValidationResponse)
    async def check_name(value: str = ""):
        return ValidationResponse(**validate_name(value).to_dict())

    @app.post("/steps", response_model=StepForm, response_model_by_alias=True)
    async def configure_step(form: dict[str, Any]):
        if form.get("$class", CLASS_NAME) != CLASS_NAME:
            raise HTTPException(status_code=400, detail=f"unknown build step class {form['$class']!r}")
        try:
            built = step_from_form(form)
        except FormError as e:
            raise HTTPException(status_code=400, detail=str(e))
        return StepForm(**step_to_form(built))

    return app


app = create_app()
