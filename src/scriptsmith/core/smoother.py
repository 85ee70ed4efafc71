"""Jitter reduction for raw pen strokes."""

from scriptsmith.config import SmoothingConfig
from scriptsmith.domain import Point, Stroke


def smooth_stroke(stroke: Stroke) -> Stroke:
    """Apply a 3-point moving average to the interior of a stroke.

    The first and last points are kept exactly as drawn. Strokes with fewer
    than 3 points are returned unchanged.
    """
    points = stroke.points
    if len(points) < 3:
        return stroke

    smoothed = [points[0]]
    for i in range(1, len(points) - 1):
        p0, p1, p2 = points[i - 1], points[i], points[i + 1]
        smoothed.append(Point((p0.x + p1.x + p2.x) / 3, (p0.y + p1.y + p2.y) / 3))
    smoothed.append(points[-1])

    return Stroke(smoothed)


def decimate_stroke(stroke: Stroke, threshold: float) -> Stroke:
    """Drop interior points that crowd the last kept point.

    Bounds the number of segments fed into outline and union operations.

    Args:
        stroke: Stroke to thin out
        threshold: Squared distance below which a point is dropped

    Returns:
        Stroke whose first and last points are those of the input
    """
    points = stroke.points
    if threshold <= 0 or len(points) < 3:
        return stroke

    kept = [points[0]]
    for point in points[1:-1]:
        last = kept[-1]
        if (point.x - last.x) ** 2 + (point.y - last.y) ** 2 >= threshold:
            kept.append(point)
    kept.append(points[-1])

    return Stroke(kept)


def smooth_strokes(
    strokes: list[Stroke] | tuple[Stroke, ...],
    decimation_threshold: float = 0.0,
) -> list[Stroke]:
    """Smooth every stroke, then optionally decimate it.

    Pure and total over its input.
    """
    return [
        decimate_stroke(smooth_stroke(stroke), decimation_threshold)
        for stroke in strokes
    ]


def apply_smoothing(
    strokes: list[Stroke] | tuple[Stroke, ...],
    config: SmoothingConfig,
) -> list[Stroke]:
    """Run the smoothing stages enabled in the configuration."""
    if not config.enabled:
        return [decimate_stroke(s, config.decimation_threshold) for s in strokes]
    return smooth_strokes(strokes, config.decimation_threshold)
