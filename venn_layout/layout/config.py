"""Process-wide default layout options.

``solve_layout`` falls back to these when called without options. Values are
deep-copied on the way in and out so callers cannot mutate the shared default
through a returned instance.
"""

from __future__ import annotations

import copy

from .model import LayoutOptions

_LAYOUT_OPTIONS = LayoutOptions()


def get_layout_options() -> LayoutOptions:
    return copy.deepcopy(_LAYOUT_OPTIONS)


def set_layout_options(options: LayoutOptions) -> None:
    global _LAYOUT_OPTIONS
    _LAYOUT_OPTIONS = copy.deepcopy(options)


def reset_layout_options() -> LayoutOptions:
    """Restore the built-in defaults and return the options that were active."""

    global _LAYOUT_OPTIONS
    previous = _LAYOUT_OPTIONS
    _LAYOUT_OPTIONS = LayoutOptions()
    return previous
