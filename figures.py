"""
Chart Figures
=============
Binds chart geometry to a plotly figure. The figure is drawn in pixel space:
the x axis spans the chart width and the y axis is reversed so that y grows
downward as in the layout modules.
"""

import plotly.graph_objects as go

from chart_layout import NO_HIGHLIGHT
from constants import (
    CHART_WIDTH,
    CHORD_HIGHLIGHT_OPACITY,
    CHORD_OPACITY,
    COLORS,
    TOTAL_HEIGHT,
)

TEXT_ANCHORS = {'start': 'left', 'middle': 'center', 'end': 'right'}

ROW_HOVER_PREFIX = 'discipline:'
GROUP_HOVER_PREFIX = 'group:'


def _rect_shape(rect, color, dx=0, dy=0):
    return dict(
        type='rect',
        x0=rect.x + dx, x1=rect.x + rect.width + dx,
        y0=rect.y + dy, y1=rect.y + rect.height + dy,
        fillcolor=color, line=dict(width=0), layer='above',
    )


def _text_annotation(text, color, dx=0, dy=0, size=11):
    return dict(
        x=text.x + dx, y=text.y + dy, text=text.text,
        xanchor=TEXT_ANCHORS.get(text.anchor, 'left'), yanchor='bottom',
        showarrow=False, font=dict(family='Hanken Grotesk', size=size, color=color),
    )


def _chord_shape(chord, dx, highlighted):
    return dict(
        type='path',
        path=chord.curve.to_svg_path(dx=dx),
        line=dict(
            color=COLORS['black'] if highlighted else COLORS['chord_gray'],
            width=chord.stroke_width,
        ),
        opacity=CHORD_HIGHLIGHT_OPACITY if highlighted else CHORD_OPACITY,
        layer='below',
    )


def parse_hover(customdata):
    """Split hover customdata into ('discipline' | 'group', key)."""
    if isinstance(customdata, str):
        if customdata.startswith(ROW_HOVER_PREFIX):
            return 'discipline', customdata[len(ROW_HOVER_PREFIX):]
        if customdata.startswith(GROUP_HOVER_PREFIX):
            return 'group', customdata[len(GROUP_HOVER_PREFIX):]
    return None, None


def _hover_trace(regions, name):
    """Invisible markers covering hover regions; customdata names the target."""
    return go.Scatter(
        x=[x for x, _, _, _ in regions],
        y=[y for _, y, _, _ in regions],
        mode='markers',
        marker=dict(size=[s for _, _, s, _ in regions], opacity=0, symbol='square'),
        customdata=[c for _, _, _, c in regions],
        hoverinfo='none',
        name=name,
        showlegend=False,
    )


def build_chart_figure(geometry, highlight=NO_HIGHLIGHT):
    """Create the bars + flows figure for one selection."""
    if highlight is None:
        highlight = NO_HIGHLIGHT
    shapes = []
    annotations = []

    def bar_color(active):
        return COLORS['black'] if active else COLORS['gray']

    for text in geometry.header_texts:
        annotations.append(_text_annotation(text, COLORS['gray'], size=12))
    for rule in geometry.header_rules:
        shapes.append(_rect_shape(rule, COLORS['rule_gray']))

    row_regions = []
    for row in geometry.rows:
        dx, dy = row.offset_x, row.offset_y
        active = row.discipline in highlight.disciplines

        annotations.append(_text_annotation(
            geometry.row_labels[row.discipline], bar_color(active), dx, dy))
        for rule in geometry.bottom_bars:
            shapes.append(_rect_shape(rule, COLORS['rule_gray'], dx, dy))
        for rect in geometry.gender_bars.get(row.discipline, {}).values():
            shapes.append(_rect_shape(rect, bar_color(active), dx, dy))
        for rect in geometry.ethnicity_bars.get(row.discipline, {}).values():
            shapes.append(_rect_shape(rect, bar_color(active), dx, dy))
        if row.discipline in geometry.ethnicity_bars:
            for text in geometry.ethnicity_labels.values():
                annotations.append(_text_annotation(
                    text, COLORS['black'] if active else COLORS['light_gray'], dx, dy, size=9))

        region = row.hover_region
        row_regions.append((
            dx + region.x + region.width / 2,
            dy + region.y + region.height / 2,
            region.height,
            ROW_HOVER_PREFIX + row.discipline,
        ))

    group_regions = []
    for flow in geometry.flows:
        dx = flow.offset_x
        for chord in flow.chords:
            highlighted = (chord.group_key, chord.discipline) in highlight.chords
            shapes.append(_chord_shape(chord, dx, highlighted))
        for total in flow.totals.values():
            active = total.key in highlight.group_keys
            shapes.append(_rect_shape(total.rect, bar_color(active), dx))
            annotations.append(_text_annotation(total.label, bar_color(active), dx))
            region = total.hover_region
            group_regions.append((
                dx + region.x + region.width / 2,
                region.y + region.height / 2,
                region.height,
                GROUP_HOVER_PREFIX + str(total.key),
            ))

    fig = go.Figure()
    if row_regions:
        fig.add_trace(_hover_trace(row_regions, 'disciplines'))
    if group_regions:
        fig.add_trace(_hover_trace(group_regions, 'flow sources'))

    fig.update_layout(
        shapes=shapes,
        annotations=annotations,
        xaxis=dict(range=[0, CHART_WIDTH], visible=False, fixedrange=True),
        yaxis=dict(range=[TOTAL_HEIGHT, 0], visible=False, fixedrange=True),
        width=CHART_WIDTH,
        height=TOTAL_HEIGHT,
        margin=dict(l=0, r=0, t=0, b=0),
        paper_bgcolor='rgba(0,0,0,0)', plot_bgcolor='rgba(0,0,0,0)',
        hovermode='closest',
        hoverdistance=-1,
        showlegend=False,
    )
    return fig


def message_figure(message):
    """Annotation-only figure used when there is nothing to draw."""
    fig = go.Figure()
    fig.add_annotation(text=message, x=0.5, y=0.5, xref='paper', yref='paper', showarrow=False,
                       font=dict(size=16, color=COLORS['gray']))
    fig.update_layout(
        xaxis=dict(visible=False), yaxis=dict(visible=False),
        paper_bgcolor='rgba(0,0,0,0)', plot_bgcolor='rgba(0,0,0,0)', height=300,
    )
    return fig
