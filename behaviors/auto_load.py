from __future__ import annotations

# Rule:
# - Every sketch in behaviors/sketches that is meant to ship MUST be registered here.
# - Registration order is selection order; index 0 is the startup default.

from behaviors.registry import REGISTRY
from behaviors.sketches.echo_circles import register_echo_circles
from behaviors.sketches.melted_text import register_melted_text
from behaviors.sketches.transparency_test import register_transparency_test


def register_all():
    if REGISTRY:
        return
    register_echo_circles()
    register_melted_text()
    register_transparency_test()
