"""Filename normalization utilities for stored plan documents."""

from __future__ import annotations

import re

_NON_ALNUM = re.compile(r"[^A-Za-z0-9]+")

PLAN_SUFFIX = ".json"


def slugify_filename(name: str | None, *, max_length: int = 60) -> str:
    """Return a filesystem-friendly slug derived from a plan name.

    Parameters
    ----------
    name:
        Human readable plan name (may be None or empty). A trailing ``.json``
        suffix is ignored.
    max_length:
        Maximum length of the resulting slug. Must be positive.

    Returns
    -------
    str
        Lowercase slug comprised of ASCII letters, numbers, and hyphens. Empty when no
        reasonable slug can be produced.
    """

    if not name:
        return ""

    stem = name[: -len(PLAN_SUFFIX)] if name.lower().endswith(PLAN_SUFFIX) else name
    slug = _NON_ALNUM.sub("-", stem).strip("-")
    if not slug:
        return ""

    slug = slug.lower()
    if max_length > 0 and len(slug) > max_length:
        slug = slug[:max_length].rstrip("-")
    return slug


def build_plan_filename(name: str | None) -> str:
    """Construct the stored filename for a plan, e.g. ``q3-launch.json``."""

    slug = slugify_filename(name)
    if not slug:
        raise ValueError(f"Cannot derive a file name from plan name {name!r}")
    return f"{slug}{PLAN_SUFFIX}"


__all__ = ["PLAN_SUFFIX", "build_plan_filename", "slugify_filename"]
