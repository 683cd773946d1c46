"""
Tests for the dashboard control helpers.
"""

from constants import Calc, Ethnicity, Gender, Metric
from controls import (
    CALC_LABELS,
    INSTRUCTIONS,
    METRIC_LABELS,
    calc_options,
    hovered,
    metric_options,
    read_selection,
)
from stats_model import Selection


def hover(customdata):
    return {'points': [{'x': 10, 'y': 20, 'customdata': customdata}]}


class TestReadSelection:
    """Tests for read_selection."""

    def test_valid_radio_values(self):
        assert read_selection('earnings', 'percent') == Selection(Metric.EARNINGS, Calc.PERCENT)

    def test_invalid_pair_falls_back_to_population(self):
        selection = read_selection('unemployment', 'percent_by_pop_group')
        assert selection == Selection(Metric.UNEMPLOYMENT, Calc.POPULATION)

    def test_unknown_values_give_default(self):
        assert read_selection('height', 'population') == Selection()
        assert read_selection(None, None) == Selection()


class TestHovered:
    """Tests for hovered."""

    def test_nothing_hovered(self):
        assert hovered(None) == (None, None)
        assert hovered({}) == (None, None)
        assert hovered({'points': []}) == (None, None)

    def test_discipline_row(self):
        assert hovered(hover('discipline:Engineering')) == ('discipline', 'Engineering')

    def test_group_keys_resolve_to_members(self):
        kind, key = hovered(hover('group:men'))
        assert kind == 'group'
        assert key is Gender.MEN
        assert hovered(hover('group:hispanic_or_latino'))[1] is Ethnicity.HISPANIC

    def test_unknown_group_ignored(self):
        assert hovered(hover('group:other')) == (None, None)

    def test_point_without_customdata(self):
        assert hovered({'points': [{'x': 1, 'y': 2}]}) == (None, None)


class TestOptions:
    """Tests for the radio option builders."""

    def test_metric_options_by_pop_group(self):
        options = {o['value']: o for o in metric_options('percent_by_pop_group')}
        assert options['unemployment']['disabled']
        assert not options['size']['disabled']
        assert not options['earnings']['disabled']
        assert options['earnings']['label'] == 'Income'

    def test_calc_options_unemployment(self):
        options = {o['value']: o for o in calc_options('unemployment')}
        assert options['percent_by_pop_group']['disabled']
        assert not options['population']['disabled']
        assert not options['percent']['disabled']

    def test_everything_enabled_for_size(self):
        assert not any(o['disabled'] for o in calc_options(Metric.SIZE))
        assert not any(o['disabled'] for o in metric_options(Calc.POPULATION))

    def test_unknown_value_disables_nothing(self):
        assert not any(o['disabled'] for o in metric_options('median'))
        assert not any(o['disabled'] for o in calc_options('height'))

    def test_labels_cover_every_option(self):
        assert set(METRIC_LABELS) == set(Metric)
        assert set(CALC_LABELS) == set(Calc)
        assert [o['label'] for o in calc_options('size')] == [CALC_LABELS[c] for c in Calc]
        assert INSTRUCTIONS.startswith("Hover over a degree")
