"""
Flow (Chord) Layout
===================
Sankey-style chords linking the population-wide gender or ethnicity totals to
each discipline row.

Each flow diagram has:
- one total bar per group, scaled into CHORD_GLYPH_SIZE and placed at the
  group's fractional slot along TOTAL_HEIGHT,
- one chord per (group, discipline) pair whose stroke width is the joined
  value scaled against the max over ALL pairs of the diagram.

Chords pass through four points (start, two horizontal control points at 20%
and 80% of the span, end) smoothed with uniform cubic B-spline ("basis")
interpolation. The left (gender) and right (ethnicity) diagrams are mirror
images and share one algorithm; Direction only decides anchors.
"""

import logging
from dataclasses import dataclass, field

import numpy as np

from constants import (
    CHORD_CONTROL_POINTS,
    CHORD_EDGE_INSET,
    CHORD_GLYPH_SIZE,
    CHORD_MAX_STROKE,
    CHORD_SIZE,
    DISCIPLINE_HEIGHT,
    ETHNICITY_ORDER,
    ETHNICITY_PLACEMENT,
    FLOW_HOVER_HEIGHT,
    FLOW_HOVER_OFFSET,
    FLOW_LABEL_OFFSET,
    FLOW_TOTAL_BAR_HEIGHT,
    GENDER_CHORD_PLACEMENT,
    GENDER_ORDER,
    RIGHT_FLOW_OFFSET,
    TOTAL_HEIGHT,
    TOTAL_KEY,
    Direction,
    GroupDimension,
)
from bar_layout import Rect, Text
from labels import group_label
from scales import get_discipline_order, make_scale
from stats_model import ConfigurationError, as_dimension, as_metric

logger = logging.getLogger(__name__)

# =============================================================================
# BASIS INTERPOLATION
# =============================================================================

# Cubic Bezier control weights of a uniform B-spline over a 4-point window
BASIS_FIRST = np.array([0, 2 / 3, 1 / 3, 0])
BASIS_SECOND = np.array([0, 1 / 3, 2 / 3, 0])
BASIS_END = np.array([0, 1 / 6, 2 / 3, 1 / 6])


@dataclass(frozen=True)
class Point:
    x: float
    y: float


@dataclass(frozen=True)
class BezierSegment:
    control1: Point
    control2: Point
    end: Point


@dataclass(frozen=True)
class BasisCurve:
    """Basis spline through a polyline, as a lead-in line plus cubic segments."""
    start: Point
    lead_in: Point | None
    segments: tuple
    end: Point

    def to_svg_path(self, dx=0, dy=0):
        """SVG path data, optionally translated by (dx, dy)."""
        parts = [f"M{_fmt_point(self.start, dx, dy)}"]
        if self.lead_in is not None:
            parts.append(f"L{_fmt_point(self.lead_in, dx, dy)}")
        for segment in self.segments:
            parts.append("C" + " ".join(
                _fmt_point(p, dx, dy) for p in (segment.control1, segment.control2, segment.end)
            ))
        parts.append(f"L{_fmt_point(self.end, dx, dy)}")
        return "".join(parts)


def _fmt(value):
    text = f"{value:.3f}".rstrip('0').rstrip('.')
    return '0' if text == '-0' else text


def _fmt_point(point, dx=0, dy=0):
    return f"{_fmt(point.x + dx)},{_fmt(point.y + dy)}"


def _dot(weights, window):
    x, y = weights @ window
    return Point(float(x), float(y))


def basis_curve(points):
    """Uniform B-spline through points, clamped at both ends.

    Fewer than three points degrade to a straight line.
    """
    pts = np.asarray([(p.x, p.y) for p in points], dtype=float)
    if len(pts) == 0:
        raise ValueError("Cannot interpolate an empty path")
    start = Point(float(pts[0][0]), float(pts[0][1]))
    end = Point(float(pts[-1][0]), float(pts[-1][1]))
    if len(pts) < 3:
        return BasisCurve(start=start, lead_in=None, segments=(), end=end)

    padded = np.vstack([pts[0], pts[0], pts, pts[-1]])
    windows = [padded[k:k + 4] for k in range(len(pts))]

    lead_in = _dot(BASIS_END, windows[0])
    segments = tuple(
        BezierSegment(
            control1=_dot(BASIS_FIRST, window),
            control2=_dot(BASIS_SECOND, window),
            end=_dot(BASIS_END, window),
        )
        for window in windows[1:]
    )
    return BasisCurve(start=start, lead_in=lead_in, segments=segments, end=end)


# =============================================================================
# GEOMETRY
# =============================================================================


@dataclass(frozen=True)
class TotalBar:
    key: str
    value: float
    rect: Rect
    label: Text
    hover_region: Rect


@dataclass(frozen=True)
class Chord:
    group_key: str
    discipline: str
    index: int
    value: float
    points: tuple
    curve: BasisCurve
    stroke_width: float

    @property
    def path(self):
        return self.curve.to_svg_path()


@dataclass(frozen=True)
class FlowGeometry:
    direction: Direction
    dimension: GroupDimension
    offset_x: float
    totals_max: float
    chords_max: float
    totals: dict = field(default_factory=dict)
    chords: tuple = ()

    def chords_for_group(self, key):
        return [c for c in self.chords if c.group_key == key]

    def chords_for_discipline(self, discipline):
        return [c for c in self.chords if c.discipline == discipline]


@dataclass(frozen=True)
class _Anchors:
    direction: Direction
    chord_start_x: float
    chord_end_x: float
    label_x: float
    label_anchor: str
    offset_x: float

    def total_bar_x(self, width):
        if self.direction is Direction.LEFT:
            return CHORD_GLYPH_SIZE - width
        return CHORD_SIZE - CHORD_GLYPH_SIZE


def _anchors(direction):
    if direction is Direction.LEFT:
        return _Anchors(
            direction=direction,
            chord_start_x=CHORD_GLYPH_SIZE + 1,
            chord_end_x=CHORD_SIZE - CHORD_EDGE_INSET,
            label_x=CHORD_GLYPH_SIZE,
            label_anchor='end',
            offset_x=0,
        )
    return _Anchors(
        direction=direction,
        chord_start_x=CHORD_SIZE - CHORD_GLYPH_SIZE - 1,
        chord_end_x=CHORD_EDGE_INSET,
        label_x=CHORD_SIZE - CHORD_GLYPH_SIZE,
        label_anchor='start',
        offset_x=RIGHT_FLOW_OFFSET,
    )


def _placement_of(placement, key):
    if key not in placement:
        raise ConfigurationError(f"No chord placement configured for {key!r}")
    fraction = placement[key]
    if not 0 <= fraction <= 1:
        raise ConfigurationError(f"Placement for {key!r} must be within [0, 1], got {fraction}")
    return fraction


def chord_points(start_x, end_x, start_y, end_y):
    """Start, the two horizontal control points and end of a chord."""
    width = end_x - start_x
    first, second = CHORD_CONTROL_POINTS
    return (
        Point(start_x, start_y),
        Point(start_x + width * first, start_y),
        Point(start_x + width * second, end_y),
        Point(end_x, end_y),
    )


def layout_flow(dataset, metric, group_keys, dimension, placement, direction,
                discipline_order=None):
    """Total bars and chords for one flow diagram."""
    try:
        direction = Direction(direction)
    except ValueError as e:
        raise ConfigurationError(f"Unknown flow direction {direction!r}") from e
    metric = as_metric(metric)
    dimension = as_dimension(dimension)

    order = get_discipline_order(discipline_order)
    anchors = _anchors(direction)
    slots = {key: _placement_of(placement, key) for key in group_keys}

    # Totals for each group across all degrees
    total_values = {
        key: dataset.value(TOTAL_KEY, metric, dimension, key) for key in group_keys
    }
    totals_max = max(total_values.values(), default=0)
    totals_scale = make_scale(totals_max, CHORD_GLYPH_SIZE)

    totals = {}
    for key, value in total_values.items():
        source_y = slots[key] * TOTAL_HEIGHT
        width = totals_scale(value)
        totals[key] = TotalBar(
            key=key,
            value=value,
            rect=Rect(
                x=anchors.total_bar_x(width),
                y=source_y - FLOW_TOTAL_BAR_HEIGHT / 2,
                width=width,
                height=FLOW_TOTAL_BAR_HEIGHT,
            ),
            label=Text(
                x=anchors.label_x,
                y=source_y - FLOW_LABEL_OFFSET,
                text=group_label(key),
                anchor=anchors.label_anchor,
            ),
            hover_region=Rect(0, source_y - FLOW_HOVER_OFFSET, CHORD_SIZE, FLOW_HOVER_HEIGHT),
        )

    joins = [
        (key, discipline, i, dataset.value(discipline, metric, dimension, key))
        for key in group_keys
        for i, discipline in enumerate(order)
    ]
    chords_max = max((value for *_, value in joins), default=0)
    stroke_scale = make_scale(chords_max, CHORD_MAX_STROKE)

    chords = []
    for key, discipline, i, value in joins:
        points = chord_points(
            anchors.chord_start_x,
            anchors.chord_end_x,
            TOTAL_HEIGHT * slots[key],
            (i + 1) * DISCIPLINE_HEIGHT + DISCIPLINE_HEIGHT / 3,
        )
        chords.append(Chord(
            group_key=key,
            discipline=discipline,
            index=i,
            value=value,
            points=points,
            curve=basis_curve(points),
            stroke_width=stroke_scale(value),
        ))

    logger.debug("Laid out %d %s chords for %s (max %s)",
                 len(chords), dimension, metric, chords_max)

    return FlowGeometry(
        direction=direction,
        dimension=dimension,
        offset_x=anchors.offset_x,
        totals_max=totals_max,
        chords_max=chords_max,
        totals=totals,
        chords=tuple(chords),
    )


def layout_gender_flow(dataset, metric, discipline_order=None):
    return layout_flow(
        dataset,
        metric,
        GENDER_ORDER,
        GroupDimension.BY_GENDER,
        GENDER_CHORD_PLACEMENT,
        Direction.LEFT,
        discipline_order,
    )


def layout_ethnicity_flow(dataset, metric, discipline_order=None):
    return layout_flow(
        dataset,
        metric,
        ETHNICITY_ORDER,
        GroupDimension.BY_ETHNICITY,
        ETHNICITY_PLACEMENT,
        Direction.RIGHT,
        discipline_order,
    )
