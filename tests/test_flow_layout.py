"""
Tests for the flow (chord) diagrams and basis interpolation.
"""

import pytest

from constants import (
    GENDER_CHORD_PLACEMENT,
    GENDER_ORDER,
    Direction,
    Ethnicity,
    Gender,
    GroupDimension,
    Metric,
)
from flow_layout import (
    Point,
    basis_curve,
    chord_points,
    layout_ethnicity_flow,
    layout_flow,
    layout_gender_flow,
)
from stats_model import ConfigurationError, DataShapeError


class TestBasisCurve:
    """Tests for basis_curve."""

    POINTS = (Point(71, 226.6667), Point(94, 226.6667), Point(163, 53.3333), Point(186, 53.3333))

    def test_endpoints(self):
        curve = basis_curve(self.POINTS)
        assert curve.start == self.POINTS[0]
        assert curve.end == self.POINTS[-1]

    def test_one_segment_per_following_point(self):
        curve = basis_curve(self.POINTS)
        assert len(curve.segments) == 3

    def test_lead_in(self):
        """First knot averages the clamped start with its neighbour."""
        curve = basis_curve(self.POINTS)
        assert curve.lead_in.x == pytest.approx(71 * 5 / 6 + 94 / 6)
        assert curve.lead_in.y == pytest.approx(226.6667)

    def test_segments_stay_inside_hull(self):
        curve = basis_curve(self.POINTS)
        for segment in curve.segments:
            for p in (segment.control1, segment.control2, segment.end):
                assert 71 - 1e-9 <= p.x <= 186 + 1e-9
                assert 53.3333 - 1e-9 <= p.y <= 226.6667 + 1e-9

    def test_last_knot_before_closing_line(self):
        curve = basis_curve(self.POINTS)
        assert curve.segments[-1].end.x == pytest.approx(163 / 6 + 186 * 5 / 6)
        assert curve.segments[-1].end.y == pytest.approx(53.3333)

    def test_two_points_are_a_line(self):
        curve = basis_curve((Point(0, 0), Point(1, 1)))
        assert curve.lead_in is None
        assert curve.to_svg_path() == 'M0,0L1,1'

    def test_empty_raises(self):
        with pytest.raises(ValueError):
            basis_curve(())

    def test_svg_path(self):
        path = basis_curve(self.POINTS).to_svg_path()
        assert path.startswith('M71,226.667L')
        assert path.count('C') == 3
        assert path.endswith('L186,53.333')

    def test_svg_path_translated(self):
        path = basis_curve(self.POINTS).to_svg_path(dx=10, dy=-1)
        assert path.startswith('M81,225.667L')
        assert path.endswith('L196,52.333')


class TestChordPoints:

    def test_controls_hold_start_and_end_y(self):
        points = chord_points(71, 186, 200, 50)
        assert [p.x for p in points] == pytest.approx([71, 94, 163, 186])
        assert [p.y for p in points] == [200, 200, 50, 50]


class TestGenderFlow:
    """Tests for the left (gender) flow."""

    def test_total_bars(self, dataset, order):
        flow = layout_gender_flow(dataset, Metric.SIZE, order)
        men = flow.totals[Gender.MEN]
        assert men.value == 50
        assert men.rect.width == pytest.approx(70)
        assert men.rect.x == pytest.approx(0)
        assert men.rect.y == pytest.approx(680 / 3 - 5)
        assert men.rect.height == 10

    def test_smaller_total_right_aligned(self, dataset, order):
        flow = layout_gender_flow(dataset, Metric.EARNINGS, order)
        women = flow.totals[Gender.WOMEN].rect
        assert women.width == pytest.approx(56)
        assert women.x + women.width == pytest.approx(70)

    def test_labels_and_hover_regions(self, dataset, order):
        flow = layout_gender_flow(dataset, Metric.SIZE, order)
        women = flow.totals[Gender.WOMEN]
        assert women.label.text == 'Women'
        assert women.label.anchor == 'end'
        assert women.label.x == 70
        assert women.label.y == pytest.approx(680 * 2 / 3 - 10)
        region = women.hover_region
        assert (region.x, region.width, region.height) == (0, 190, 50)
        assert region.y == pytest.approx(680 * 2 / 3 - 35)

    def test_one_chord_per_pair(self, dataset, order):
        flow = layout_gender_flow(dataset, Metric.SIZE, order)
        assert len(flow.chords) == 4
        assert {(c.group_key, c.discipline) for c in flow.chords} == {
            (g, d) for g in GENDER_ORDER for d in order
        }

    def test_chord_anchors(self, dataset, order):
        flow = layout_gender_flow(dataset, Metric.SIZE, order)
        chord = flow.chords_for_group(Gender.MEN)[1]
        assert chord.points[0].x == 71
        assert chord.points[0].y == pytest.approx(680 / 3)
        assert chord.points[-1].x == 186
        assert chord.points[-1].y == pytest.approx(80 + 40 / 3)

    def test_stroke_uses_max_over_all_pairs(self, dataset, order):
        flow = layout_gender_flow(dataset, Metric.UNEMPLOYMENT, order)
        assert flow.chords_max == 105
        strokes = {(c.group_key, c.discipline): c.stroke_width for c in flow.chords}
        assert strokes[(Gender.WOMEN, 'Art / humanities other')] == pytest.approx(10)
        assert strokes[(Gender.MEN, 'Art / humanities other')] == pytest.approx(89 / 105 * 10)
        assert strokes[(Gender.MEN, 'Bio, agricult, and enviro sci')] == pytest.approx(100 / 105 * 10)

    def test_path_matches_curve(self, dataset, order):
        chord = layout_gender_flow(dataset, Metric.SIZE, order).chords[0]
        assert chord.path == chord.curve.to_svg_path()
        assert chord.path.startswith('M71,226.667')

    def test_no_offset(self, dataset, order):
        assert layout_gender_flow(dataset, Metric.SIZE, order).offset_x == 0


class TestEthnicityFlow:
    """Tests for the right (ethnicity) flow."""

    def test_offset(self, dataset, order):
        flow = layout_ethnicity_flow(dataset, Metric.SIZE, order)
        assert flow.offset_x == 910
        assert flow.direction is Direction.RIGHT

    def test_total_bars_left_aligned(self, dataset, order):
        flow = layout_ethnicity_flow(dataset, Metric.SIZE, order)
        white = flow.totals[Ethnicity.WHITE].rect
        asian = flow.totals[Ethnicity.ASIAN].rect
        assert white.x == asian.x == 120
        assert white.width == pytest.approx(70)
        assert asian.width == pytest.approx(10)

    def test_labels_start_anchored(self, dataset, order):
        label = layout_ethnicity_flow(dataset, Metric.SIZE, order).totals[Ethnicity.BLACK].label
        assert label.anchor == 'start'
        assert label.x == 120
        assert label.text == 'Black, Af Am.'

    def test_mirrored_chords(self, dataset, order):
        left = layout_gender_flow(dataset, Metric.SIZE, order).chords[0]
        right = layout_ethnicity_flow(dataset, Metric.SIZE, order).chords[0]
        assert right.points[0].x == 119
        assert right.points[-1].x == 4
        assert right.points[1].x == pytest.approx(119 - 0.2 * 115)
        assert left.points[1].x == pytest.approx(71 + 0.2 * 115)
        assert right.points[-1].y == left.points[-1].y

    def test_chord_count(self, dataset, order):
        assert len(layout_ethnicity_flow(dataset, Metric.UNEMPLOYMENT, order).chords) == 8

    def test_stroke_max(self, dataset, order):
        flow = layout_ethnicity_flow(dataset, Metric.UNEMPLOYMENT, order)
        assert flow.chords_max == 185
        chord = flow.chords_for_discipline('Bio, agricult, and enviro sci')
        black = [c for c in chord if c.group_key == Ethnicity.BLACK][0]
        assert black.stroke_width == pytest.approx(10)


class TestFlowErrors:
    """Tests for layout_flow configuration and data errors."""

    def test_missing_placement_raises(self, dataset, order):
        with pytest.raises(ConfigurationError, match='women'):
            layout_flow(dataset, Metric.SIZE, GENDER_ORDER, GroupDimension.BY_GENDER,
                        {Gender.MEN: 0.5}, Direction.LEFT, order)

    def test_placement_out_of_range_raises(self, dataset, order):
        with pytest.raises(ConfigurationError):
            layout_flow(dataset, Metric.SIZE, GENDER_ORDER, GroupDimension.BY_GENDER,
                        {Gender.MEN: 0.5, Gender.WOMEN: 1.5}, Direction.LEFT, order)

    def test_unknown_direction_raises(self, dataset, order):
        with pytest.raises(ConfigurationError):
            layout_flow(dataset, Metric.SIZE, GENDER_ORDER, GroupDimension.BY_GENDER,
                        GENDER_CHORD_PLACEMENT, 'up', order)

    def test_direction_string_accepted(self, dataset, order):
        flow = layout_flow(dataset, Metric.SIZE, GENDER_ORDER, GroupDimension.BY_GENDER,
                           GENDER_CHORD_PLACEMENT, 'left', order)
        assert flow.direction is Direction.LEFT

    def test_metric_and_dimension_names_accepted(self, dataset, order):
        flow = layout_flow(dataset, 'unemployment', GENDER_ORDER, 'by_gender',
                           GENDER_CHORD_PLACEMENT, Direction.LEFT, order)
        assert flow == layout_gender_flow(dataset, Metric.UNEMPLOYMENT, order)

    def test_unknown_metric_raises(self, dataset, order):
        with pytest.raises(ConfigurationError, match='height'):
            layout_gender_flow(dataset, 'height', order)

    def test_missing_discipline_raises(self, dataset, order):
        with pytest.raises(DataShapeError):
            layout_gender_flow(dataset, Metric.SIZE, order + ('Engineering',))

    def test_earnings_ethnicity_flow_raises(self, dataset, order):
        with pytest.raises(DataShapeError):
            layout_ethnicity_flow(dataset, Metric.EARNINGS, order)
