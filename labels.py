"""
Labels, Titles and Captions
===========================
Human readable text for the chart: group names, the title for the current
selection, and the caption + number format shown in the details panels.
"""

from constants import (
    ETHNICITY_ORDER,
    GENDER_ORDER,
    TOTAL_KEY,
    Calc,
    Ethnicity,
    Gender,
    GroupDimension,
    Metric,
)
from stats_model import INVALID_SELECTIONS, ConfigurationError

# =============================================================================
# GROUP NAMES
# =============================================================================

GENDER_LABELS = {
    Gender.MEN: 'Men',
    Gender.WOMEN: 'Women',
}

ETHNICITY_LABELS = {
    Ethnicity.WHITE: 'White',
    Ethnicity.ASIAN: 'Asian',
    Ethnicity.BLACK: 'Black, Af Am.',
    Ethnicity.HISPANIC: 'Hispanic, Latino',
}


def group_label(key):
    if key in GENDER_LABELS:
        return GENDER_LABELS[key]
    if key in ETHNICITY_LABELS:
        return ETHNICITY_LABELS[key]
    raise ConfigurationError(f"No label configured for group {key!r}")


# =============================================================================
# FORMATTERS
# =============================================================================


def comma_formatter(value):
    """Thousands separators, keeping any fractional part."""
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    return f"{value:,}"


def decimal_formatter(value):
    return f"{value:.2f}"


# =============================================================================
# TITLES
# =============================================================================

TITLE_COMPONENTS = {
    Metric.SIZE: "Employed working age population by bachelor's degree held",
    Metric.UNEMPLOYMENT: "Unemployment rate by bachelor's degree held",
    Metric.EARNINGS: "Median income by bachelor's degree held",
    Calc.POPULATION: '.',
    Calc.PERCENT: ' as % of all degree holders.',
    Calc.PERCENT_BY_POP_GROUP: ' as % of overall population.',
}


def title_for(selection):
    return TITLE_COMPONENTS[selection.metric] + TITLE_COMPONENTS[selection.calc]


# =============================================================================
# SELECTION RULES
# =============================================================================

INCOME_NOTE = "Ethnicity data are not available for income."
BY_GROUP_NOTE = "Unemployment is not available as a % of overall population."


def available_calcs(metric):
    return [c for c in Calc if (metric, c) not in INVALID_SELECTIONS]


def available_metrics(calc):
    return [m for m in Metric if (m, calc) not in INVALID_SELECTIONS]


def notes_for(selection):
    """Which footnotes apply to the selection: (income_note, by_group_note)."""
    return (
        selection.metric is Metric.EARNINGS,
        selection.calc is Calc.PERCENT_BY_POP_GROUP,
    )


# =============================================================================
# CAPTIONS
# =============================================================================

MIDDLE_PANEL = 'middle'
CHORD_PANEL = 'chord'

_BLANK_ETHNICITY = {key: '' for key in ETHNICITY_ORDER}

MIDDLE_LABELS_SET = {
    Metric.SIZE: {
        Calc.POPULATION: ({
            Gender.MEN: 'Men with selected degree',
            Gender.WOMEN: 'Women with selected degree',
            Ethnicity.WHITE: 'White persons with selected degree',
            Ethnicity.ASIAN: 'Asian persons with selected degree',
            Ethnicity.BLACK: 'Black persons with selected degree',
            Ethnicity.HISPANIC: 'Hisp / Lat persons with selected degree',
        }, comma_formatter),
        Calc.PERCENT: ({
            Gender.MEN: '% with selected degree are Men',
            Gender.WOMEN: '% with selected degree are Women',
            Ethnicity.WHITE: '% with selected degree are White',
            Ethnicity.ASIAN: '% with selected degree are Asian',
            Ethnicity.BLACK: '% with selected degree are Black',
            Ethnicity.HISPANIC: '% with selected degree are Hisp / Lat',
        }, decimal_formatter),
        Calc.PERCENT_BY_POP_GROUP: ({
            Gender.MEN: '% of Men have selected degree',
            Gender.WOMEN: '% of Women have selected degree',
            Ethnicity.WHITE: '% of White pop have selected degree',
            Ethnicity.ASIAN: '% of Asian pop have selected degree',
            Ethnicity.BLACK: '% of Black pop have selected degree',
            Ethnicity.HISPANIC: '% of Hisp / Lat pop have selected degree',
        }, decimal_formatter),
    },
    Metric.UNEMPLOYMENT: {
        Calc.POPULATION: ({
            Gender.MEN: '% Men unemployment rate',
            Gender.WOMEN: '% Women unemployment rate',
            Ethnicity.WHITE: '% White unemployment rate',
            Ethnicity.ASIAN: '% Asian unemployment rate',
            Ethnicity.BLACK: '% Black unemployment rate',
            Ethnicity.HISPANIC: '% Hisp / Lat unemployment rate',
        }, decimal_formatter),
        Calc.PERCENT: ({
            Gender.MEN: 'Men % compared to overall degree unempl.',
            Gender.WOMEN: 'Women % compared to overall degree unempl.',
            Ethnicity.WHITE: 'White % compared to overall degree unempl.',
            Ethnicity.ASIAN: 'Asian % compared to overall degree unempl.',
            Ethnicity.BLACK: 'Black % compared to overall degree unempl.',
            Ethnicity.HISPANIC: 'Hisp / Lat % compared to overall degree unempl.',
        }, decimal_formatter),
    },
    Metric.EARNINGS: {
        Calc.POPULATION: ({
            Gender.MEN: 'USD for Men with selected degree',
            Gender.WOMEN: 'USD for Women with selected degree',
            **_BLANK_ETHNICITY,
        }, comma_formatter),
        Calc.PERCENT: ({
            Gender.MEN: '% compared to overall degree Men',
            Gender.WOMEN: '% compared to overall degree Women',
            **_BLANK_ETHNICITY,
        }, decimal_formatter),
        Calc.PERCENT_BY_POP_GROUP: ({
            Gender.MEN: '% compared to overall US Men',
            Gender.WOMEN: '% compared to overall US Women',
            **_BLANK_ETHNICITY,
        }, decimal_formatter),
    },
}

CHORD_LABELS_SET = {
    Metric.SIZE: {
        Calc.POPULATION: ({
            Gender.MEN: "Men with bachelor's degree",
            Gender.WOMEN: "Women with bachelor's degree",
            Ethnicity.WHITE: "White persons with bachelor's degree",
            Ethnicity.ASIAN: "Asian persons with bachelor's degree",
            Ethnicity.BLACK: "Black persons with bachelor's degree",
            Ethnicity.HISPANIC: "Hisp / Lat persons with bachelor's degree",
        }, comma_formatter),
        Calc.PERCENT: ({
            Gender.MEN: "% with a bachelor's degree are Men",
            Gender.WOMEN: "% with a bachelor's degree are Women",
            Ethnicity.WHITE: "% with a bachelor's degree are White",
            Ethnicity.ASIAN: "% with a bachelor's degree are Asian",
            Ethnicity.BLACK: "% with a bachelor's degree are Black",
            Ethnicity.HISPANIC: "% with a bachelor's degree are Hisp / Lat",
        }, decimal_formatter),
        Calc.PERCENT_BY_POP_GROUP: ({
            Gender.MEN: "% of Men have a bachelor's degree",
            Gender.WOMEN: "% of Women have a bachelor's degree",
            Ethnicity.WHITE: "% of White pop have a bachelor's degree",
            Ethnicity.ASIAN: "% of Asian pop have a bachelor's degree",
            Ethnicity.BLACK: "% of Black pop have a bachelor's degree",
            Ethnicity.HISPANIC: "% of Hisp / Lat pop have a bachelor's degree",
        }, decimal_formatter),
    },
    Metric.UNEMPLOYMENT: {
        Calc.POPULATION: ({
            Gender.MEN: '% Men unemployment rate',
            Gender.WOMEN: '% Women unemployment rate',
            Ethnicity.WHITE: '% White unemployment rate',
            Ethnicity.ASIAN: '% Asian unemployment rate',
            Ethnicity.BLACK: '% Black unemployment rate',
            Ethnicity.HISPANIC: '% Hisp / Lat unemployment rate',
        }, decimal_formatter),
        Calc.PERCENT: ({
            Gender.MEN: "Men % compared to all with bachelor's degree",
            Gender.WOMEN: "Women % compared to all with bachelor's degree",
            Ethnicity.WHITE: "White % compared to all with bachelor's degree",
            Ethnicity.ASIAN: "Asian % compared to all with bachelor's degree",
            Ethnicity.BLACK: "Black % comp. to all with bachelor's",
            Ethnicity.HISPANIC: "Hisp / Lat % compared to all with bachelor's",
        }, decimal_formatter),
    },
    Metric.EARNINGS: {
        Calc.POPULATION: ({
            Gender.MEN: 'USD for Men',
            Gender.WOMEN: 'USD for Women',
            **_BLANK_ETHNICITY,
        }, comma_formatter),
        Calc.PERCENT: ({
            Gender.MEN: "% compared to overall US persons with a bachelor's",
            Gender.WOMEN: "% compared to overall US persons with a bachelor's",
            **_BLANK_ETHNICITY,
        }, decimal_formatter),
        Calc.PERCENT_BY_POP_GROUP: ({
            Gender.MEN: '% compared to overall US Men',
            Gender.WOMEN: '% compared to overall US Women',
            **_BLANK_ETHNICITY,
        }, decimal_formatter),
    },
}

_PANELS = {
    MIDDLE_PANEL: MIDDLE_LABELS_SET,
    CHORD_PANEL: CHORD_LABELS_SET,
}


def caption_set(panel, selection):
    """(captions by group, formatter) for a details panel."""
    try:
        return _PANELS[panel][selection.metric][selection.calc]
    except KeyError as e:
        raise ConfigurationError(
            f"No {panel} captions for {selection.metric} / {selection.calc}"
        ) from e


def middle_panel(dataset, selection, discipline):
    """Caption / value rows shown while hovering a discipline row.

    Ethnicity values are blank when the metric has no ethnicity breakdown.
    """
    captions, formatter = caption_set(MIDDLE_PANEL, selection)
    record = dataset.record(discipline, selection.metric)

    rows = []
    for key in GENDER_ORDER:
        value = record.value(GroupDimension.BY_GENDER, key)
        rows.append((key, captions[key], formatter(value)))
    for key in ETHNICITY_ORDER:
        if record.by_ethnicity is None:
            rows.append((key, captions[key], ''))
        else:
            value = record.value(GroupDimension.BY_ETHNICITY, key)
            rows.append((key, captions[key], formatter(value)))
    return rows


def side_panel(dataset, selection, group_key):
    """Caption and formatted population-wide value for a flow source."""
    captions, formatter = caption_set(CHORD_PANEL, selection)
    if group_key in GENDER_LABELS:
        dimension = GroupDimension.BY_GENDER
    else:
        dimension = GroupDimension.BY_ETHNICITY
    value = dataset.value(TOTAL_KEY, selection.metric, dimension, group_key)
    return captions[group_key], formatter(value)
