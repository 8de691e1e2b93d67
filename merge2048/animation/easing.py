"""Progress curves of the move animation."""

from math import pi, sin


def clamp_progress(elapsed: float, duration: float) -> float:
    """
    Fraction of a phase already played, clamped to [0, 1].

    A non-positive duration is complete immediately.
    """
    if duration <= 0:
        return 1.0
    return min(1.0, max(0.0, elapsed / duration))


def ease_out_cubic(progress: float) -> float:
    """Ease-out cubic curve ``1 - (1 - t)^3``."""
    return 1.0 - (1.0 - progress) ** 3


def pop_scale(progress: float, amplitude: float) -> float:
    """
    Scale of a merged tile during the pop phase.

    Rises from 1 to ``1 + amplitude`` at mid-phase and settles back to 1.
    """
    return 1.0 + amplitude * sin(progress * pi)
