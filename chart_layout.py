"""
Chart Layout
============
Runs every layout for one selection and answers which primitives to emphasise
when the user hovers a discipline row or a flow source.
"""

import logging
from dataclasses import dataclass, field

from bar_layout import (
    bottom_bars,
    discipline_rows,
    ethnicity_labels,
    header_layout,
    layout_ethnicity_bars,
    layout_gender_bars,
    row_label,
)
from flow_layout import layout_ethnicity_flow, layout_gender_flow
from labels import title_for

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ChartGeometry:
    selection: object
    title: str
    rows: list
    row_labels: dict
    bottom_bars: list
    header_texts: list
    header_rules: list
    gender_bars: dict
    gender_flow: object
    ethnicity_bars: dict = field(default_factory=dict)
    ethnicity_labels: dict = field(default_factory=dict)
    ethnicity_flow: object = None

    @property
    def flows(self):
        return [f for f in (self.gender_flow, self.ethnicity_flow) if f is not None]

    @property
    def chords(self):
        return [c for flow in self.flows for c in flow.chords]


def layout_chart(document, selection, discipline_order=None):
    """Geometry for the whole chart under one (metric, calc) selection.

    Ethnicity bars and the ethnicity flow are skipped, not zero-filled, when
    the metric has no ethnicity breakdown.
    """
    selection.require_valid()
    dataset = document.dataset(selection.calc)
    metric = selection.metric

    rows = discipline_rows(dataset, discipline_order)
    texts, rules = header_layout()

    ethnicity_bars = {}
    labels = {}
    ethnicity_flow = None
    if metric.has_ethnicity:
        ethnicity_bars = layout_ethnicity_bars(dataset, metric, discipline_order)
        labels = ethnicity_labels()
        ethnicity_flow = layout_ethnicity_flow(dataset, metric, discipline_order)

    geometry = ChartGeometry(
        selection=selection,
        title=title_for(selection),
        rows=rows,
        row_labels={row.discipline: row_label(row) for row in rows},
        bottom_bars=bottom_bars(),
        header_texts=texts,
        header_rules=rules,
        gender_bars=layout_gender_bars(dataset, metric, discipline_order),
        gender_flow=layout_gender_flow(dataset, metric, discipline_order),
        ethnicity_bars=ethnicity_bars,
        ethnicity_labels=labels,
        ethnicity_flow=ethnicity_flow,
    )
    logger.debug("Laid out %d rows and %d chords for %s / %s",
                 len(rows), len(geometry.chords), selection.metric, selection.calc)
    return geometry


# =============================================================================
# HIGHLIGHTING
# =============================================================================


@dataclass(frozen=True)
class Highlight:
    """Primitives to draw emphasised; everything else keeps its resting style."""
    disciplines: frozenset = frozenset()
    group_keys: frozenset = frozenset()
    chords: frozenset = frozenset()

    @property
    def is_empty(self):
        return not (self.disciplines or self.group_keys or self.chords)


NO_HIGHLIGHT = Highlight()


def highlight_for_discipline(geometry, discipline):
    """Hovering a row emphasises its bars, labels and every chord into it."""
    if discipline not in geometry.row_labels:
        return NO_HIGHLIGHT
    chords = frozenset(
        (c.group_key, c.discipline) for c in geometry.chords if c.discipline == discipline
    )
    return Highlight(disciplines=frozenset({discipline}), chords=chords)


def highlight_for_group(geometry, group_key):
    """Hovering a flow source emphasises its total bar, label and chords."""
    if not any(group_key in flow.totals for flow in geometry.flows):
        return NO_HIGHLIGHT
    chords = frozenset(
        (c.group_key, c.discipline) for c in geometry.chords if c.group_key == group_key
    )
    return Highlight(group_keys=frozenset({group_key}), chords=chords)
