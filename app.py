"""
College Majors by Gender and Ethnicity Dashboard
================================================
Bars and flow diagrams comparing the size, unemployment and earnings of
fifteen bachelor's degree disciplines across gender and ethnicity groups.
Validate data: python validate_data.py
Local dev: python app.py
Production: gunicorn app:server --workers 2 --bind 0.0.0.0:$PORT
"""

import logging
import os
from functools import lru_cache
from pathlib import Path

import dash
from dash import dcc, html, callback, Input, Output, State, no_update
import dash_bootstrap_components as dbc

from chart_layout import highlight_for_discipline, highlight_for_group, layout_chart
from constants import COLORS
from controls import INSTRUCTIONS, calc_options, hovered, metric_options, read_selection
from figures import build_chart_figure, message_figure
from labels import (
    BY_GROUP_NOTE,
    INCOME_NOTE,
    group_label,
    middle_panel,
    notes_for,
    side_panel,
    title_for,
)
from logging_config import setup_logging
from stats_model import DisciplinesError, Selection, load_document

setup_logging(os.environ.get('LOG_LEVEL', 'INFO'))
logger = logging.getLogger(__name__)

# =============================================================================
# DATA LOADING
# =============================================================================

DATA_PATH = Path(os.environ.get('DISCIPLINES_DATA', 'data/processed/disciplines.json'))


def load_data():
    """Load the degree statistics document."""
    try:
        return load_document(DATA_PATH)
    except FileNotFoundError as e:
        print(f"Error loading data: {e}")
        print("Set DISCIPLINES_DATA to the statistics JSON, then run 'python validate_data.py'.")
        return None
    except DisciplinesError as e:
        print(f"Error reading {DATA_PATH}: {e}")
        return None


print("Loading degree statistics...")
DOCUMENT = load_data()

if DOCUMENT is None:
    print("ERROR: no usable data document")
    exit(1)


@lru_cache(maxsize=16)
def get_geometry(metric, calc):
    """Geometry for a selection; every selection is laid out at most once."""
    return layout_chart(DOCUMENT, Selection(metric, calc))


# =============================================================================
# CUSTOM CSS
# =============================================================================

CUSTOM_CSS = """
/* Base */
body {
    background: #ffffff;
    font-family: 'Hanken Grotesk', -apple-system, BlinkMacSystemFont, sans-serif;
    color: #000000;
    min-height: 100vh;
}

/* Header */
.header-section {
    padding: 2rem 0 1rem 0;
}

.main-title {
    font-family: 'Neuton', Georgia, serif;
    font-size: 1.8rem;
    font-weight: 700;
    margin-bottom: 0.5rem;
}

/* Controls */
.filter-section {
    border-top: 1px solid #d0dbdd;
    border-bottom: 1px solid #d0dbdd;
    padding: 1rem 0;
    margin-bottom: 1rem;
}

.filter-label {
    color: #838383;
    font-size: 0.8rem;
    font-weight: 600;
    text-transform: uppercase;
    letter-spacing: 0.05em;
}

.data-note {
    font-size: 0.8rem;
    margin: 0;
}

/* Details panel */
.details-panel {
    min-height: 9rem;
    padding: 0.75rem 0;
}

.display-panel-caption {
    color: #838383;
    font-size: 0.8rem;
}

.display-panel-label {
    font-size: 1.2rem;
    font-weight: 600;
}

/* Buttons */
.brand-btn {
    background: #ffffff;
    border: 1px solid #838383;
    border-radius: 4px;
    color: #000000;
    font-size: 0.85rem;
    padding: 0.35rem 0.9rem;
}

.brand-btn:hover {
    background: #edf1f2;
}
"""

# =============================================================================
# DASH APP
# =============================================================================

app = dash.Dash(
    __name__,
    external_stylesheets=[dbc.themes.BOOTSTRAP],
    meta_tags=[{"name": "viewport", "content": "width=device-width, initial-scale=1"}],
    suppress_callback_exceptions=True
)
app.title = "College Majors by Gender and Ethnicity"

# Expose server for Gunicorn
server = app.server

app.index_string = f'''
<!DOCTYPE html>
<html>
    <head>
        {{%metas%}}
        <title>{{%title%}}</title>
        {{%favicon%}}
        <link rel="preconnect" href="https://fonts.googleapis.com">
        <link rel="preconnect" href="https://fonts.gstatic.com" crossorigin>
        <link href="https://fonts.googleapis.com/css2?family=Neuton:wght@400;700&family=Hanken+Grotesk:wght@300;400;600&display=swap" rel="stylesheet">
        {{%css%}}
        <style>{CUSTOM_CSS}</style>
    </head>
    <body>
        {{%app_entry%}}
        <footer>
            {{%config%}}
            {{%scripts%}}
            {{%renderer%}}
        </footer>
    </body>
</html>
'''

# =============================================================================
# LAYOUT
# =============================================================================

DEFAULT = Selection()

app.layout = html.Div([
    dbc.Container([
        # Header
        html.Div([
            html.H1(id='title', className='main-title'),
        ], className='header-section'),

        # Controls
        html.Div([
            dbc.Row([
                dbc.Col([
                    html.Label("Show", className='filter-label'),
                    dcc.RadioItems(id='metric-radio', options=metric_options(DEFAULT.calc),
                                   value=DEFAULT.metric.value, inline=True,
                                   inputStyle={'marginRight': '4px'}, labelStyle={'marginRight': '16px'}),
                ], md=4, xs=12, className='mb-2'),
                dbc.Col([
                    html.Label("As", className='filter-label'),
                    dcc.RadioItems(id='calc-radio', options=calc_options(DEFAULT.metric),
                                   value=DEFAULT.calc.value, inline=True,
                                   inputStyle={'marginRight': '4px'}, labelStyle={'marginRight': '16px'}),
                ], md=5, xs=12, className='mb-2'),
                dbc.Col([
                    html.Button("Download CSV", id='download-csv-btn', className='brand-btn'),
                    dcc.Download(id='download-csv'),
                ], md=3, xs=12, className='text-end mb-2'),
            ]),
            html.P(INCOME_NOTE, id='income-note', className='data-note'),
            html.P(BY_GROUP_NOTE, id='by-group-note', className='data-note'),
        ], className='filter-section'),

        # Details
        html.Div(id='details-panel', className='details-panel'),

        # Chart
        dcc.Loading(type='circle', color=COLORS['gray'], children=[
            dcc.Graph(id='disciplines-chart', clear_on_unhover=True,
                      config={'displayModeBar': False}),
        ]),
    ], fluid=True, style={'maxWidth': '1200px'})
], style={'minHeight': '100vh', 'padding': '1rem'})

# =============================================================================
# CALLBACKS
# =============================================================================


@callback([Output('metric-radio', 'options'), Output('calc-radio', 'options')],
          [Input('metric-radio', 'value'), Input('calc-radio', 'value')])
def update_options(metric, calc):
    """Disable the radio options that would form an invalid selection."""
    return metric_options(calc), calc_options(metric)


@callback([Output('title', 'children'),
           Output('income-note', 'style'), Output('by-group-note', 'style')],
          [Input('metric-radio', 'value'), Input('calc-radio', 'value')])
def update_title(metric, calc):
    selection = read_selection(metric, calc)
    income, by_group = notes_for(selection)

    def note_style(active):
        return {'color': COLORS['note_active'] if active else COLORS['note_inactive']}

    return title_for(selection), note_style(income), note_style(by_group)


@callback(Output('disciplines-chart', 'figure'),
          [Input('metric-radio', 'value'), Input('calc-radio', 'value'),
           Input('disciplines-chart', 'hoverData')])
def update_chart(metric, calc, hover_data):
    selection = read_selection(metric, calc)
    try:
        geometry = get_geometry(selection.metric, selection.calc)
    except DisciplinesError as e:
        logger.error("Layout failed for %s / %s: %s", selection.metric, selection.calc, e)
        return message_figure("Data for this selection could not be laid out")

    kind, key = hovered(hover_data)
    if kind == 'discipline':
        highlight = highlight_for_discipline(geometry, key)
    elif kind == 'group':
        highlight = highlight_for_group(geometry, key)
    else:
        highlight = None
    return build_chart_figure(geometry, highlight)


@callback(Output('details-panel', 'children'),
          [Input('disciplines-chart', 'hoverData')],
          [State('metric-radio', 'value'), State('calc-radio', 'value')])
def update_details(hover_data, metric, calc):
    kind, key = hovered(hover_data)
    if kind is None:
        return html.P(INSTRUCTIONS, className='display-panel-caption')

    selection = read_selection(metric, calc)
    try:
        dataset = DOCUMENT.dataset(selection.calc)
        if kind == 'discipline':
            rows = middle_panel(dataset, selection, key)
        else:
            caption, value = side_panel(dataset, selection, key)
    except DisciplinesError as e:
        logger.error("No details for %s under %s / %s: %s", key, selection.metric, selection.calc, e)
        return html.P("No details available for this selection", className='display-panel-caption')

    if kind == 'discipline':
        return html.Div([
            html.H5(key),
            dbc.Row([
                dbc.Col([
                    html.Div(caption, className='display-panel-caption'),
                    html.Div(value, className='display-panel-label'),
                ], xs=4, md=2)
                for _, caption, value in rows
            ]),
        ])
    return html.Div([
        html.H5(group_label(key)),
        html.Div(caption, className='display-panel-caption'),
        html.Div(value, className='display-panel-label'),
    ])


@callback(Output('download-csv', 'data'),
          [Input('download-csv-btn', 'n_clicks')],
          [State('metric-radio', 'value'), State('calc-radio', 'value')],
          prevent_initial_call=True)
def download_csv(n_clicks, metric, calc):
    if n_clicks:
        selection = read_selection(metric, calc)
        try:
            frame = DOCUMENT.dataset(selection.calc).to_frame(selection.metric)
        except DisciplinesError as e:
            logger.error("CSV export failed for %s / %s: %s", selection.metric, selection.calc, e)
            return no_update
        filename = f"college_majors_{selection.metric}_{selection.calc}.csv"
        return dcc.send_data_frame(frame.to_csv, filename, index=False)
    return no_update


# =============================================================================
# RUN
# =============================================================================

if __name__ == '__main__':
    port = int(os.environ.get('PORT', 8050))
    debug = os.environ.get('DEBUG', 'False').lower() == 'true'
    print(f"\nStarting dashboard on port {port}...")
    print(f"Debug mode: {debug}")
    print(f"Open: http://127.0.0.1:{port}\n")
    app.run(debug=debug, host='0.0.0.0', port=port)
