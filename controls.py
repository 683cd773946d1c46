"""
Dashboard Controls
==================
Radio options, selection fallback and hover parsing for the dashboard
callbacks. Nothing here touches the data document.
"""

from constants import ETHNICITY_ORDER, GENDER_ORDER, Calc, Metric
from figures import parse_hover
from labels import available_calcs, available_metrics
from stats_model import DisciplinesError, Selection, as_calc, as_metric

METRIC_LABELS = {
    Metric.SIZE: 'Size',
    Metric.UNEMPLOYMENT: 'Unemployment',
    Metric.EARNINGS: 'Income',
}

CALC_LABELS = {
    Calc.POPULATION: 'Population',
    Calc.PERCENT: '% of degree holders',
    Calc.PERCENT_BY_POP_GROUP: '% of overall population',
}

INSTRUCTIONS = ("Hover over a degree to see its numbers, or over a gender or "
                "ethnicity on either side to follow it across degrees.")


def read_selection(metric, calc):
    """Selection from radio values, falling back to the default when invalid."""
    try:
        selection = Selection.parse(metric, calc)
    except DisciplinesError:
        return Selection()
    return selection if selection.is_valid else Selection(selection.metric, Calc.POPULATION)


def hovered(hover_data):
    """(kind, key) of the hovered row or flow source, if any."""
    if not hover_data or not hover_data.get('points'):
        return None, None
    kind, key = parse_hover(hover_data['points'][0].get('customdata'))
    if kind == 'group':
        key = next((k for k in GENDER_ORDER + ETHNICITY_ORDER if k == key), None)
        if key is None:
            return None, None
    return kind, key


def metric_options(calc):
    try:
        allowed = set(available_metrics(as_calc(calc)))
    except DisciplinesError:
        allowed = set(Metric)
    return [{'label': METRIC_LABELS[m], 'value': m.value, 'disabled': m not in allowed}
            for m in Metric]


def calc_options(metric):
    try:
        allowed = set(available_calcs(as_metric(metric)))
    except DisciplinesError:
        allowed = set(Calc)
    return [{'label': CALC_LABELS[c], 'value': c.value, 'disabled': c not in allowed}
            for c in Calc]
