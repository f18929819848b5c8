"""Easing functions for keyframe interpolation."""

import math
from typing import Callable, Dict, List


def _ease_out_bounce(t: float) -> float:
    if t < 1 / 2.75:
        return 7.5625 * t * t
    if t < 2 / 2.75:
        t -= 1.5 / 2.75
        return 7.5625 * t * t + 0.75
    if t < 2.5 / 2.75:
        t -= 2.25 / 2.75
        return 7.5625 * t * t + 0.9375
    t -= 2.625 / 2.75
    return 7.5625 * t * t + 0.984375


def _ease_out_elastic(t: float) -> float:
    if t == 0 or t == 1:
        return t
    p = 0.3
    s = p / 4
    return math.pow(2, -10 * t) * math.sin((t - s) * (2 * math.pi) / p) + 1


def _ease_in_out_quart(t: float) -> float:
    if t < 0.5:
        return 8 * t * t * t * t
    t -= 1
    return 1 - 8 * t * t * t * t


def _ease_in_out_quint(t: float) -> float:
    if t < 0.5:
        return 16 * t * t * t * t * t
    t -= 1
    return 1 + 16 * t * t * t * t * t


EASING_FUNCTIONS: Dict[str, Callable[[float], float]] = {
    "linear": lambda t: t,
    # Ease in
    "easeInQuad": lambda t: t * t,
    "easeInCubic": lambda t: t * t * t,
    "easeInQuart": lambda t: t * t * t * t,
    "easeInQuint": lambda t: t * t * t * t * t,
    # Ease out
    "easeOutQuad": lambda t: t * (2 - t),
    "easeOutCubic": lambda t: (t - 1) ** 3 + 1,
    "easeOutQuart": lambda t: 1 - (t - 1) ** 4,
    "easeOutQuint": lambda t: 1 + (t - 1) ** 5,
    # Ease in-out
    "easeInOutQuad": lambda t: 2 * t * t if t < 0.5 else -1 + (4 - 2 * t) * t,
    "easeInOutCubic": lambda t: 4 * t * t * t if t < 0.5 else (t - 1) * (2 * t - 2) * (2 * t - 2) + 1,
    "easeInOutQuart": _ease_in_out_quart,
    "easeInOutQuint": _ease_in_out_quint,
    # Special
    "bounce": _ease_out_bounce,
    "elastic": _ease_out_elastic,
}

EASING_LABELS: Dict[str, str] = {
    "linear": "Linear",
    "easeInQuad": "Ease In (Quad)",
    "easeOutQuad": "Ease Out (Quad)",
    "easeInOutQuad": "Ease In-Out (Quad)",
    "easeInCubic": "Ease In (Cubic)",
    "easeOutCubic": "Ease Out (Cubic)",
    "easeInOutCubic": "Ease In-Out (Cubic)",
    "easeInQuart": "Ease In (Quart)",
    "easeOutQuart": "Ease Out (Quart)",
    "easeInOutQuart": "Ease In-Out (Quart)",
    "easeInQuint": "Ease In (Quint)",
    "easeOutQuint": "Ease Out (Quint)",
    "easeInOutQuint": "Ease In-Out (Quint)",
    "bounce": "Bounce",
    "elastic": "Elastic",
}

# GSAP ease names used by exported timelines. Anything unmapped plays linear.
EXPORT_EASE_NAMES: Dict[str, str] = {
    "linear": "none",
    "easeInQuad": "power1.in",
    "easeOutQuad": "power1.out",
    "easeInOutQuad": "power1.inOut",
    "easeInCubic": "power2.in",
    "easeOutCubic": "power2.out",
    "easeInOutCubic": "power2.inOut",
    "easeInQuart": "power3.in",
    "easeOutQuart": "power3.out",
    "easeInOutQuart": "power3.inOut",
    "easeInQuint": "power4.in",
    "easeOutQuint": "power4.out",
    "easeInOutQuint": "power4.inOut",
    "bounce": "bounce.out",
    "elastic": "elastic.out",
}


def apply_easing(t: float, easing_name: str = "linear") -> float:
    """Apply named easing function. Unknown names fall back to linear."""
    func = EASING_FUNCTIONS.get(easing_name, EASING_FUNCTIONS["linear"])
    return func(max(0.0, min(1.0, t)))


def apply_easing_to_range(
    t: float,
    from_val: float,
    to_val: float,
    easing_name: str = "linear"
) -> float:
    """Apply easing to interpolate between two values."""
    eased_t = apply_easing(t, easing_name)
    return from_val + (to_val - from_val) * eased_t


def export_ease_name(easing_name: str) -> str:
    """Ease name an exported timeline uses for this easing id."""
    return EXPORT_EASE_NAMES.get(easing_name, "none")


def list_easings() -> List[str]:
    """Get list of available easing names."""
    return sorted(EASING_FUNCTIONS.keys())


__all__ = [
    "apply_easing",
    "apply_easing_to_range",
    "export_ease_name",
    "list_easings",
    "EASING_FUNCTIONS",
    "EASING_LABELS",
    "EXPORT_EASE_NAMES",
]
