# SPDX-License-Identifier: Apache-2.0
"""Bundle renderers keyed by slug.

Renderer modules register themselves on import. The ``render`` command takes
its ``--renderer`` choices and help text from :func:`describe_all`, so a newly
registered renderer is selectable without touching the CLI.
"""

from __future__ import annotations

import logging
from typing import Any, TypeVar

from .base import BundleRenderer

LOGGER = logging.getLogger(__name__)

_RendererT = TypeVar("_RendererT", bound=BundleRenderer)

_RENDERERS: dict[str, type[BundleRenderer]] = {}


def register(renderer_cls: type[_RendererT]) -> type[_RendererT]:
    """Class decorator adding ``renderer_cls`` under its ``slug``."""

    if not isinstance(renderer_cls, type) or not issubclass(
        renderer_cls, BundleRenderer
    ):
        raise TypeError(f"{renderer_cls!r} is not a BundleRenderer subclass")
    slug = renderer_cls.slug
    if not slug:
        raise ValueError("renderer slug must be non-empty")
    if slug in _RENDERERS:
        raise ValueError(f"renderer slug already registered: {slug}")
    _RENDERERS[slug] = renderer_cls
    LOGGER.debug("Registered renderer %s (%s)", slug, renderer_cls.__name__)
    return renderer_cls


def get(slug: str) -> type[BundleRenderer]:
    try:
        return _RENDERERS[slug]
    except KeyError as exc:
        known = ", ".join(sorted(_RENDERERS)) or "none"
        raise KeyError(f"unknown renderer slug: {slug} (known: {known})") from exc


def create(slug: str, **options: Any) -> BundleRenderer:
    return get(slug)(**options)


def describe_all() -> list[dict[str, Any]]:
    """Metadata of every registered renderer, ordered by slug."""

    return [_RENDERERS[slug].describe() for slug in sorted(_RENDERERS)]


def help_text() -> str:
    """One ``slug: description`` entry per renderer, for ``--renderer`` help."""

    entries = []
    for info in describe_all():
        if info["description"]:
            entries.append(f"{info['slug']}: {info['description']}")
        else:
            entries.append(info["slug"])
    return "; ".join(entries)
