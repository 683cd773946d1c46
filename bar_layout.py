"""
Bar Layout
==========
Row, header and bar geometry for the table in the middle of the chart.

Bars are expressed in row-local coordinates: each discipline row is translated
by (CHORD_SIZE, (i + 1) * DISCIPLINE_HEIGHT), the same offset DisciplineRow
carries. Men's bars grow leftward from a shared centerline and women's bars
grow rightward from it, so the two gender columns meet in the middle.
"""

import logging
from dataclasses import dataclass

from constants import (
    BAR_HEIGHT,
    CHORD_GLYPH_HEADER_RECT_OFFSET,
    CHORD_SIZE,
    DISCIPLINE_HEIGHT,
    ETHNICITY_BAR_OFFSETS,
    ETHNICITY_BAR_PADDING,
    ETHNICITY_LABEL_GAP,
    ETHNICITY_LABEL_OFFSETS,
    ETHNICITY_ORDER,
    HEADER_TEXT_OFFSET,
    NUM_SECTIONS,
    SECTION_PADDING,
    SECTION_WIDTH,
    Gender,
    GroupDimension,
)
from labels import ETHNICITY_LABELS
from scales import get_discipline_order, make_scale, max_by_ethnicity, max_by_gender
from stats_model import as_metric

logger = logging.getLogger(__name__)

# Men's bars end here; women's bars start at WOMEN_BAR_ANCHOR
MEN_BAR_ANCHOR = SECTION_WIDTH * 2 - SECTION_PADDING
WOMEN_BAR_ANCHOR = SECTION_WIDTH * 2

ETHNICITY_BAR_X = SECTION_WIDTH * 3 + ETHNICITY_BAR_PADDING

GENDER_BAR_WIDTH = SECTION_WIDTH - SECTION_PADDING
ETHNICITY_BAR_WIDTH = SECTION_WIDTH - SECTION_PADDING - ETHNICITY_BAR_PADDING


@dataclass(frozen=True)
class Rect:
    x: float
    y: float
    width: float
    height: float


@dataclass(frozen=True)
class Text:
    x: float
    y: float
    text: str
    anchor: str = 'start'


@dataclass(frozen=True)
class DisciplineRow:
    discipline: str
    index: int
    offset_x: float
    offset_y: float
    hover_region: Rect


def discipline_rows(dataset, discipline_order=None):
    """Rows for the disciplines present in both the dataset and the order.

    Disciplines outside the order (including "Total") are dropped.
    """
    order = get_discipline_order(discipline_order)
    present = [d for d in order if d in dataset]
    hover_region = Rect(0, 0, SECTION_WIDTH * NUM_SECTIONS, DISCIPLINE_HEIGHT - SECTION_PADDING)
    return [
        DisciplineRow(
            discipline=discipline,
            index=i,
            offset_x=CHORD_SIZE,
            offset_y=(i + 1) * DISCIPLINE_HEIGHT,
            hover_region=hover_region,
        )
        for i, discipline in enumerate(present)
    ]


def bottom_bar(section_num):
    """1px rule under a section of a discipline row."""
    return Rect(
        x=SECTION_WIDTH * section_num,
        y=DISCIPLINE_HEIGHT - SECTION_PADDING,
        width=SECTION_WIDTH - SECTION_PADDING,
        height=1,
    )


def bottom_bars():
    return [bottom_bar(i) for i in range(NUM_SECTIONS)]


def row_label(row):
    return Text(x=0, y=DISCIPLINE_HEIGHT / 2 - 5, text=row.discipline)


def header_layout():
    """Column headers across the top of the chart.

    Returns (texts, rules) in absolute coordinates.
    """
    text_y = DISCIPLINE_HEIGHT / 2 + HEADER_TEXT_OFFSET
    rule_y = DISCIPLINE_HEIGHT / 2 + CHORD_GLYPH_HEADER_RECT_OFFSET

    def section_rule(section_num):
        return Rect(CHORD_SIZE + SECTION_WIDTH * section_num, rule_y,
                    SECTION_WIDTH - SECTION_PADDING, 1)

    texts = [
        Text(0, text_y, 'Gender'),
        Text(CHORD_SIZE + SECTION_WIDTH * NUM_SECTIONS, text_y, 'Ethnicity'),
        Text(CHORD_SIZE, text_y, 'Degree'),
        Text(CHORD_SIZE + SECTION_WIDTH * 2 - SECTION_PADDING - 10, text_y,
             'Men with Degree', anchor='end'),
        Text(CHORD_SIZE + SECTION_WIDTH * 2 + 10, text_y, 'Women with Degree'),
        Text(CHORD_SIZE + SECTION_WIDTH * 3, text_y, 'Degree by Ethnicity'),
    ]
    rules = [
        Rect(0, rule_y, CHORD_SIZE - SECTION_PADDING, 1),
        Rect(CHORD_SIZE + SECTION_WIDTH * NUM_SECTIONS, rule_y, CHORD_SIZE - SECTION_PADDING, 1),
    ] + [section_rule(i) for i in range(NUM_SECTIONS)]
    return texts, rules


def _gender_bar_y():
    return DISCIPLINE_HEIGHT / 2 - BAR_HEIGHT / 2


def layout_men_bar(value, scale):
    width = scale(value)
    return Rect(x=MEN_BAR_ANCHOR - width, y=_gender_bar_y(), width=width, height=BAR_HEIGHT)


def layout_women_bar(value, scale):
    return Rect(x=WOMEN_BAR_ANCHOR, y=_gender_bar_y(), width=scale(value), height=BAR_HEIGHT)


def layout_gender_bars(dataset, metric, discipline_order=None):
    """Men / women bars for each ordered discipline.

    Returns {discipline: {Gender.MEN: Rect, Gender.WOMEN: Rect}}.
    """
    metric = as_metric(metric)
    order = get_discipline_order(discipline_order)
    scale = make_scale(max_by_gender(metric, dataset, order), GENDER_BAR_WIDTH)

    bars = {}
    for row in discipline_rows(dataset, order):
        record = dataset.record(row.discipline, metric)
        bars[row.discipline] = {
            Gender.MEN: layout_men_bar(record.value(GroupDimension.BY_GENDER, Gender.MEN), scale),
            Gender.WOMEN: layout_women_bar(record.value(GroupDimension.BY_GENDER, Gender.WOMEN), scale),
        }
    return bars


def layout_ethnicity_bars(dataset, metric, discipline_order=None):
    """Four stacked, left-anchored bars per ordered discipline.

    Returns {discipline: {Ethnicity: Rect}}, or {} for a metric without an
    ethnicity breakdown.
    """
    metric = as_metric(metric)
    if not metric.has_ethnicity:
        logger.debug("No ethnicity bars for %s", metric)
        return {}

    order = get_discipline_order(discipline_order)
    scale = make_scale(max_by_ethnicity(metric, dataset, order), ETHNICITY_BAR_WIDTH)

    bars = {}
    for row in discipline_rows(dataset, order):
        record = dataset.record(row.discipline, metric)
        bars[row.discipline] = {
            key: Rect(
                x=ETHNICITY_BAR_X,
                y=y,
                width=scale(record.value(GroupDimension.BY_ETHNICITY, key)),
                height=BAR_HEIGHT,
            )
            for key, y in zip(ETHNICITY_ORDER, ETHNICITY_BAR_OFFSETS)
        }
    return bars


def ethnicity_labels():
    """Row-local labels sitting in the space reserved left of the bars."""
    return {
        key: Text(
            x=ETHNICITY_BAR_X - ETHNICITY_LABEL_GAP,
            y=y,
            text=ETHNICITY_LABELS[key],
            anchor='end',
        )
        for key, y in zip(ETHNICITY_ORDER, ETHNICITY_LABEL_OFFSETS)
    }
