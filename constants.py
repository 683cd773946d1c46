"""
Layout Constants, Orderings and Placements
==========================================
Pixel budget, display orderings and chord placements for the college majors
visualization. Everything here is configuration: it is read by the layout
modules and never mutated.
"""

from enum import StrEnum
from types import MappingProxyType

# =============================================================================
# GROUP KEYS
# =============================================================================


class Gender(StrEnum):
    MEN = 'men'
    WOMEN = 'women'


class Ethnicity(StrEnum):
    WHITE = 'white_not_hispanic'
    ASIAN = 'asian'
    BLACK = 'black_or_african_american'
    HISPANIC = 'hispanic_or_latino'


class Metric(StrEnum):
    SIZE = 'size'
    UNEMPLOYMENT = 'unemployment'
    EARNINGS = 'earnings'

    @property
    def has_ethnicity(self):
        """Ethnicity breakdowns are not published for earnings."""
        return self is not Metric.EARNINGS


class Calc(StrEnum):
    POPULATION = 'population'
    PERCENT = 'percent'
    PERCENT_BY_POP_GROUP = 'percent_by_pop_group'


class GroupDimension(StrEnum):
    BY_GENDER = 'by_gender'
    BY_ETHNICITY = 'by_ethnicity'

    @property
    def keys(self):
        if self is GroupDimension.BY_GENDER:
            return GENDER_ORDER
        return ETHNICITY_ORDER


class Direction(StrEnum):
    LEFT = 'left'
    RIGHT = 'right'


# =============================================================================
# PIXEL BUDGET
# =============================================================================

# Width of one "column" (a single metric display) in a discipline row
SECTION_WIDTH = 180

# Width allocated to each chord / flow diagram
CHORD_SIZE = 190

# Width of the summarizing total bars of a flow diagram
CHORD_GLYPH_SIZE = 70

DISCIPLINE_HEIGHT = 40

# Y offset of the header rule below the header text
CHORD_GLYPH_HEADER_RECT_OFFSET = 10

# Space reserved for the scale tick and label at the top
SCALE_PADDING = 7

# X separation between sections of a discipline row
SECTION_PADDING = 4

HEADER_TEXT_OFFSET = 5

# X offset of the ethnicity bars, reserved for their labels
ETHNICITY_BAR_PADDING = 60

TOTAL_HEIGHT = 680

NUM_SECTIONS = 4

BAR_HEIGHT = 5

ETHNICITY_BAR_OFFSETS = (3, 11, 19, 27)
ETHNICITY_LABEL_OFFSETS = (6, 14, 22, 30)
ETHNICITY_LABEL_GAP = 2

FLOW_TOTAL_BAR_HEIGHT = 10
FLOW_LABEL_OFFSET = 10
FLOW_HOVER_HEIGHT = 50
FLOW_HOVER_OFFSET = 35

CHORD_MAX_STROKE = 10
CHORD_EDGE_INSET = 4

# Horizontal position of the two inner chord control points
CHORD_CONTROL_POINTS = (0.2, 0.8)

# Left edge of the right flow group
RIGHT_FLOW_OFFSET = CHORD_SIZE + SECTION_WIDTH * NUM_SECTIONS

CHART_WIDTH = CHORD_SIZE * 2 + SECTION_WIDTH * NUM_SECTIONS

# =============================================================================
# ORDERINGS
# =============================================================================

DISCIPLINE_ORDER = (
    'Computers, maths, and stats',
    'Engineering',
    'Physical and related sci',
    'Bio, agricult, and enviro sci',
    'Psychology',
    'Social sciences',
    'Multidisciplinary studies',
    'Sci / eng related',
    'Business',
    'Education',
    'Literature / languages',
    'Liberal arts / history',
    'Visual / performing arts',
    'Communications',
    'Art / humanities other',
)

# Synthetic entry holding population-wide aggregates
TOTAL_KEY = 'Total'

GENDER_ORDER = (Gender.MEN, Gender.WOMEN)

ETHNICITY_ORDER = (
    Ethnicity.WHITE,
    Ethnicity.ASIAN,
    Ethnicity.BLACK,
    Ethnicity.HISPANIC,
)

# =============================================================================
# PLACEMENTS (fraction of TOTAL_HEIGHT from the top)
# =============================================================================

GENDER_CHORD_PLACEMENT = MappingProxyType({
    Gender.MEN: 1 / 3,
    Gender.WOMEN: 2 / 3,
})

ETHNICITY_PLACEMENT = MappingProxyType({
    Ethnicity.WHITE: 0.2,
    Ethnicity.ASIAN: 0.4,
    Ethnicity.BLACK: 0.6,
    Ethnicity.HISPANIC: 0.8,
})

# =============================================================================
# COLORS
# =============================================================================

COLORS = {
    'black': '#000000',
    'white': '#ffffff',
    'gray': '#838383',
    'light_gray': '#B1B1B1',
    'chord_gray': '#C1C1C1',
    'very_light_gray': '#edf1f2',
    'rule_gray': '#d0dbdd',
    'note_active': '#000000',
    'note_inactive': '#838383',
}

CHORD_OPACITY = 0.3
CHORD_HIGHLIGHT_OPACITY = 1.0
