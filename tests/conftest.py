"""
Shared fixtures: a two-discipline statistics document plus a full document
covering every discipline in display order.
"""

import copy
import json

import pytest

from constants import DISCIPLINE_ORDER, TOTAL_KEY, Calc
from stats_model import Dataset, Document

TEST_DISCIPLINE_ORDER = (
    'Art / humanities other',
    'Bio, agricult, and enviro sci',
)

TEST_DATA = {
    'Art / humanities other': {
        'earnings': {
            'by_gender': {'men': 118, 'women': 88},
            'by_ethnicity': {
                'asian': 69,
                'black_or_african_american': 100,
                'hispanic_or_latino': 90,
                'white_not_hispanic': 87,
            },
            'total': 100,
        },
        'size': {
            'by_ethnicity': {
                'asian': 3.9,
                'black_or_african_american': 12.8,
                'hispanic_or_latino': 8.8,
                'white_not_hispanic': 72.5,
            },
            'by_gender': {'men': 44.9, 'women': 55.1},
            'total': 100,
        },
        'unemployment': {
            'by_ethnicity': {
                'asian': 69,
                'black_or_african_american': 156,
                'hispanic_or_latino': 117,
                'white_not_hispanic': 87,
            },
            'by_gender': {'men': 89, 'women': 105},
            'total': 100,
        },
    },
    'Bio, agricult, and enviro sci': {
        'earnings': {
            'by_gender': {'men': 110, 'women': 85},
            'by_ethnicity': {
                'asian': 69,
                'black_or_african_american': 100,
                'hispanic_or_latino': 90,
                'white_not_hispanic': 87,
            },
            'total': 100,
        },
        'size': {
            'by_ethnicity': {
                'asian': 11.4,
                'black_or_african_american': 5.4,
                'hispanic_or_latino': 5.6,
                'white_not_hispanic': 75.6,
            },
            'by_gender': {'men': 55.9, 'women': 44.1},
            'total': 100,
        },
        'unemployment': {
            'by_ethnicity': {
                'asian': 107,
                'black_or_african_american': 185,
                'hispanic_or_latino': 146,
                'white_not_hispanic': 89,
            },
            'by_gender': {'men': 100.0, 'women': 103},
            'total': 100,
        },
    },
}

TOTAL_DATA = {
    'earnings': {
        'by_gender': {'men': 100, 'women': 80},
        'by_ethnicity': {
            'asian': 100,
            'black_or_african_american': 100,
            'hispanic_or_latino': 100,
            'white_not_hispanic': 100,
        },
        'total': 100,
    },
    'size': {
        'by_gender': {'men': 50, 'women': 50},
        'by_ethnicity': {
            'asian': 10,
            'black_or_african_american': 10,
            'hispanic_or_latino': 10,
            'white_not_hispanic': 70,
        },
        'total': 100,
    },
    'unemployment': {
        'by_gender': {'men': 100, 'women': 100},
        'by_ethnicity': {
            'asian': 100,
            'black_or_african_american': 100,
            'hispanic_or_latino': 100,
            'white_not_hispanic': 100,
        },
        'total': 100,
    },
}


@pytest.fixture
def raw_dataset():
    """Raw two-discipline dataset including the Total entry."""
    raw = copy.deepcopy(TEST_DATA)
    raw[TOTAL_KEY] = copy.deepcopy(TOTAL_DATA)
    return raw


@pytest.fixture
def dataset(raw_dataset):
    return Dataset.from_mapping(raw_dataset)


@pytest.fixture
def order():
    return TEST_DISCIPLINE_ORDER


@pytest.fixture
def raw_document(raw_dataset):
    """The same dataset under every calculation method."""
    return {calc.value: copy.deepcopy(raw_dataset) for calc in Calc}


@pytest.fixture
def document(raw_document):
    return Document.from_mapping(raw_document)


@pytest.fixture
def full_raw_document():
    """Every ordered discipline, each with the Art / humanities values."""
    template = TEST_DATA['Art / humanities other']
    raw = {discipline: copy.deepcopy(template) for discipline in DISCIPLINE_ORDER}
    raw[TOTAL_KEY] = copy.deepcopy(TOTAL_DATA)
    return {calc.value: copy.deepcopy(raw) for calc in Calc}


@pytest.fixture
def write_document(tmp_path):
    """Write a raw document to disk and return its path."""
    def _write(raw, name='disciplines.json'):
        path = tmp_path / name
        path.write_text(json.dumps(raw))
        return path
    return _write
