# SPDX-License-Identifier: Apache-2.0
"""Bundle renderer registry and implementations."""

from __future__ import annotations

from . import choropleth as _choropleth  # noqa: F401
from .base import BundleRenderer, RenderBundle
from .registry import create, describe_all, get, help_text, register

__all__ = [
    "BundleRenderer",
    "RenderBundle",
    "create",
    "describe_all",
    "get",
    "help_text",
    "register",
]
