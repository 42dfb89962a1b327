"""Cubic easing curve used to shape swipe motion."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class CubicSpline:
    """The polynomial ``a*t + b*t**2 + c*t**3``."""

    a: float = 0.0
    b: float = 0.0
    c: float = 0.0

    @staticmethod
    def smooth_in_out(ease_in: float, ease_out: float) -> CubicSpline:
        """Curve from 0 to 1 with slope ``ease_in`` at 0 and ``ease_out`` at 1."""
        return CubicSpline(
            a=ease_in,
            b=-(2 * ease_in + ease_out - 3),
            c=-(-ease_in - ease_out + 2),
        )

    def __call__(self, t: float) -> float:
        t2 = t * t
        t3 = t2 * t
        return self.a * t + self.b * t2 + self.c * t3