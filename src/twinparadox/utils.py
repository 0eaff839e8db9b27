

def clamp(value: float, lower: float, upper: float) -> float:
    """Limit value to the closed interval [lower, upper]."""
    return max(lower, min(upper, value))

def lerp(start: float, end: float, fraction: float) -> float:
    """Linear interpolation between start and end."""
    return start + (end - start) * fraction
