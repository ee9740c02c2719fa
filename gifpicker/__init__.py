"""Compatibility shim exposing the proxy FastAPI app and picker session."""

from __future__ import annotations

from app.main import app, create_app
from app.picker.session import PickerSession

__all__ = ["PickerSession", "app", "create_app"]
