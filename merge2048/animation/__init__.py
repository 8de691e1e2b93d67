# -*- coding: utf-8 -*-
"""
Move animation: a slide phase then a merge pop phase, driven by a frame scheduler.
"""

from .animator import AnimationPhase, MoveAnimator
from .base import FrameScheduler, Renderer
from .easing import clamp_progress, ease_out_cubic, pop_scale

__all__ = [
    "AnimationPhase",
    "FrameScheduler",
    "MoveAnimator",
    "Renderer",
    "clamp_progress",
    "ease_out_cubic",
    "pop_scale",
]
