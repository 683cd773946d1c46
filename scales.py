"""
Maxima and linear scales.

Every bar and chord width is a linear scale from [0, max] onto a pixel range.
The max is found across the groups of each ordered discipline, so it changes
whenever the metric or calculation method changes.
"""

import logging

from constants import DISCIPLINE_ORDER, GroupDimension
from stats_model import as_dimension, as_metric

logger = logging.getLogger(__name__)


def get_discipline_order(discipline_order=None):
    """Default to DISCIPLINE_ORDER when no order is given."""
    if discipline_order is None:
        return DISCIPLINE_ORDER
    return discipline_order


def max_across_groups(metric, dataset, dimension, discipline_order=None):
    """Largest group value of metric across the ordered disciplines.

    Returns None when the metric carries no breakdown for dimension (earnings
    by ethnicity) and 0 for an empty order.
    """
    metric = as_metric(metric)
    dimension = as_dimension(dimension)
    if dimension is GroupDimension.BY_ETHNICITY and not metric.has_ethnicity:
        return None

    discipline_maxima = []
    for discipline in get_discipline_order(discipline_order):
        discipline_maxima.append(max(
            dataset.value(discipline, metric, dimension, key)
            for key in dimension.keys
        ))

    if not discipline_maxima:
        return 0
    return max(discipline_maxima)


def max_by_gender(metric, dataset, discipline_order=None):
    return max_across_groups(metric, dataset, GroupDimension.BY_GENDER, discipline_order)


def max_by_ethnicity(metric, dataset, discipline_order=None):
    return max_across_groups(metric, dataset, GroupDimension.BY_ETHNICITY, discipline_order)


class LinearScale:
    """Maps [0, domain_max] onto [0, range_max], extrapolating outside."""

    def __init__(self, domain_max, range_max):
        if domain_max < 0:
            raise ValueError(f"Scale domain max must be >= 0, got {domain_max}")
        self.domain_max = domain_max
        self.range_max = range_max

    def __call__(self, value):
        if self.domain_max == 0:
            return 0.0
        return value / self.domain_max * self.range_max

    def __repr__(self):
        return f"LinearScale([0, {self.domain_max}] -> [0, {self.range_max}])"


def make_scale(domain_max, range_max):
    if domain_max == 0:
        logger.debug("Zero scale domain; all widths collapse to 0")
    return LinearScale(domain_max, range_max)
