"""
Statistics Data Model
=====================
Typed records for the degree statistics document and the errors raised when
the document does not have the shape the chart needs.

The document maps a calculation method ("population", "percent",
"percent_by_pop_group") to disciplines, each discipline to metrics, and each
metric to a record:

    {"by_gender": {"men": 44.9, "women": 55.1},
     "by_ethnicity": {"asian": 3.9, ...},
     "total": 100}

A synthetic "Total" discipline holds the population-wide aggregates.
"""

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from types import MappingProxyType

import pandas as pd

from constants import (
    DISCIPLINE_ORDER,
    ETHNICITY_ORDER,
    GENDER_ORDER,
    TOTAL_KEY,
    Calc,
    Ethnicity,
    Gender,
    GroupDimension,
    Metric,
)

logger = logging.getLogger(__name__)

# =============================================================================
# ERRORS
# =============================================================================


class DisciplinesError(Exception):
    """Base class for errors raised while laying out the chart."""


class DataShapeError(DisciplinesError):
    """The dataset is missing a discipline, metric, sub-grouping or value."""


class ConfigurationError(DisciplinesError):
    """An ordering, placement or label table is missing an entry."""


# =============================================================================
# SELECTION
# =============================================================================

INVALID_SELECTIONS = frozenset({
    (Metric.UNEMPLOYMENT, Calc.PERCENT_BY_POP_GROUP),
})


def as_metric(metric):
    """Metric from a member or its name; unknown names are a ConfigurationError."""
    try:
        return Metric(metric)
    except ValueError as e:
        raise ConfigurationError(f"Unknown metric {metric!r}") from e


def as_calc(calc):
    try:
        return Calc(calc)
    except ValueError as e:
        raise ConfigurationError(f"Unknown calculation method {calc!r}") from e


def as_dimension(dimension):
    try:
        return GroupDimension(dimension)
    except ValueError as e:
        raise ConfigurationError(f"Unknown group dimension {dimension!r}") from e


@dataclass(frozen=True)
class Selection:
    """The metric and calculation method the user has chosen."""
    metric: Metric = Metric.SIZE
    calc: Calc = Calc.POPULATION

    def __post_init__(self):
        object.__setattr__(self, 'metric', as_metric(self.metric))
        object.__setattr__(self, 'calc', as_calc(self.calc))

    @classmethod
    def parse(cls, metric, calc):
        return cls(metric, calc)

    @property
    def is_valid(self):
        return (self.metric, self.calc) not in INVALID_SELECTIONS

    def require_valid(self):
        if not self.is_valid:
            raise ConfigurationError(
                f"{self.metric} cannot be shown as {self.calc}"
            )
        return self


# =============================================================================
# RECORDS
# =============================================================================


@dataclass(frozen=True)
class StatRecord:
    """One discipline's values for one metric."""
    by_gender: MappingProxyType
    by_ethnicity: MappingProxyType | None
    total: float

    def group(self, dimension):
        if dimension == GroupDimension.BY_GENDER:
            return self.by_gender
        return self.by_ethnicity

    def value(self, dimension, key):
        values = self.group(dimension)
        if values is None:
            raise DataShapeError(f"No {dimension} breakdown in record")
        if key not in values:
            raise DataShapeError(f"No {dimension} value for {key}")
        return values[key]


def _parse_group(raw, key_type, where):
    if not isinstance(raw, dict):
        raise DataShapeError(f"{where}: expected an object, got {type(raw).__name__}")
    values = {}
    for name, value in raw.items():
        try:
            key = key_type(name)
        except ValueError:
            logger.debug("%s: ignoring unknown group %r", where, name)
            continue
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise DataShapeError(f"{where}.{name}: expected a number, got {value!r}")
        values[key] = value
    return MappingProxyType(values)


def parse_record(raw, metric, where='record'):
    """Build a StatRecord from its JSON object.

    An ethnicity breakdown listed under earnings is dropped: those values
    exist in the published tables but are not comparable and stay unused.
    """
    if not isinstance(raw, dict):
        raise DataShapeError(f"{where}: expected an object")
    if 'by_gender' not in raw:
        raise DataShapeError(f"{where}: missing by_gender")

    by_gender = _parse_group(raw['by_gender'], Gender, f"{where}.by_gender")

    by_ethnicity = None
    if 'by_ethnicity' in raw:
        if metric.has_ethnicity:
            by_ethnicity = _parse_group(
                raw['by_ethnicity'], Ethnicity, f"{where}.by_ethnicity"
            )
        else:
            logger.debug("%s: ignoring ethnicity breakdown for %s", where, metric)

    total = raw.get('total')
    if total is not None and (isinstance(total, bool) or not isinstance(total, (int, float))):
        raise DataShapeError(f"{where}.total: expected a number, got {total!r}")

    return StatRecord(by_gender=by_gender, by_ethnicity=by_ethnicity, total=total)


# =============================================================================
# DATASET
# =============================================================================


class Dataset:
    """Per-discipline records for one calculation method."""

    def __init__(self, records):
        self._records = {
            discipline: MappingProxyType(dict(metrics))
            for discipline, metrics in records.items()
        }

    @classmethod
    def from_mapping(cls, raw, where='dataset'):
        if not isinstance(raw, dict):
            raise DataShapeError(f"{where}: expected an object")
        records = {}
        for discipline, metrics in raw.items():
            if not isinstance(metrics, dict):
                raise DataShapeError(f"{where}[{discipline!r}]: expected an object")
            parsed = {}
            for name, record in metrics.items():
                try:
                    metric = Metric(name)
                except ValueError:
                    logger.debug("%s[%r]: ignoring unknown metric %r", where, discipline, name)
                    continue
                parsed[metric] = parse_record(record, metric, f"{where}[{discipline!r}].{name}")
            records[discipline] = parsed
        return cls(records)

    def __contains__(self, discipline):
        return discipline in self._records

    def __len__(self):
        return len(self._records)

    @property
    def disciplines(self):
        return [d for d in self._records if d != TOTAL_KEY]

    def record(self, discipline, metric):
        if discipline not in self._records:
            raise DataShapeError(f"Discipline {discipline!r} missing from dataset")
        metrics = self._records[discipline]
        if metric not in metrics:
            raise DataShapeError(f"Metric {metric} missing for {discipline!r}")
        return metrics[metric]

    def value(self, discipline, metric, dimension, key):
        record = self.record(discipline, metric)
        try:
            return record.value(dimension, key)
        except DataShapeError as e:
            raise DataShapeError(f"{discipline!r} / {metric}: {e}") from e

    def total(self, metric):
        """Population-wide record used by the flow diagrams."""
        return self.record(TOTAL_KEY, metric)

    def to_frame(self, metric, discipline_order=None):
        """One row per ordered discipline with every group value for metric."""
        order = DISCIPLINE_ORDER if discipline_order is None else discipline_order
        rows = []
        for discipline in [d for d in order if d in self._records]:
            record = self.record(discipline, metric)
            row = {'Discipline': discipline}
            for key in GENDER_ORDER:
                row[key.value] = record.by_gender.get(key)
            if record.by_ethnicity is not None:
                for key in ETHNICITY_ORDER:
                    row[key.value] = record.by_ethnicity.get(key)
            row['total'] = record.total
            rows.append(row)
        return pd.DataFrame(rows)


class Document:
    """The parsed data document: calculation method -> Dataset."""

    def __init__(self, datasets):
        self._datasets = dict(datasets)

    @classmethod
    def from_mapping(cls, raw):
        if not isinstance(raw, dict):
            raise DataShapeError("Document: expected an object")
        datasets = {}
        for name, dataset in raw.items():
            try:
                calc = Calc(name)
            except ValueError:
                logger.debug("Ignoring unknown calculation method %r", name)
                continue
            datasets[calc] = Dataset.from_mapping(dataset, where=name)
        return cls(datasets)

    @property
    def calcs(self):
        return list(self._datasets)

    def dataset(self, calc):
        if calc not in self._datasets:
            raise DataShapeError(f"Calculation method {calc} missing from document")
        return self._datasets[calc]


def load_document(path):
    """Read and parse the JSON data document."""
    path = Path(path)
    with open(path, 'r') as f:
        raw = json.load(f)
    document = Document.from_mapping(raw)
    logger.info("Loaded %s (%d calculation methods)", path, len(document.calcs))
    return document
