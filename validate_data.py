"""
Data Validation Script - Check the degree statistics document before serving it
Usage: python validate_data.py [path/to/disciplines.json]
"""

import json
import os
import sys
from pathlib import Path

import pandas as pd

from chart_layout import layout_chart
from constants import DISCIPLINE_ORDER, GENDER_ORDER, TOTAL_KEY, Calc, Metric
from stats_model import DisciplinesError, Document, Selection

DEFAULT_PATH = Path(os.environ.get('DISCIPLINES_DATA', 'data/processed/disciplines.json'))

# Allowed drift of the men + women shares from 100%
SHARE_TOLERANCE = 1.0


def banner(title):
    print("\n" + "="*70)
    print(title)
    print("="*70)


def check_calcs(document):
    """Calculation methods missing from the document."""
    return [c for c in Calc if c not in document.calcs]


def check_coverage(document):
    """(calc, discipline, metric) triples the chart needs but cannot find."""
    missing = []
    for calc in document.calcs:
        dataset = document.dataset(calc)
        for discipline in DISCIPLINE_ORDER + (TOTAL_KEY,):
            for metric in Metric:
                try:
                    dataset.record(discipline, metric)
                except DisciplinesError:
                    missing.append((calc, discipline, metric))
    return missing


def value_frame(document):
    """Every ordered discipline and metric as one long table."""
    frames = []
    for calc in document.calcs:
        dataset = document.dataset(calc)
        for metric in Metric:
            try:
                frame = dataset.to_frame(metric, DISCIPLINE_ORDER + (TOTAL_KEY,))
            except DisciplinesError:
                continue
            frame.insert(0, 'metric', metric.value)
            frame.insert(0, 'calc', calc.value)
            frames.append(frame)
    if not frames:
        return pd.DataFrame(columns=['calc', 'metric', 'Discipline'])
    return pd.concat(frames, ignore_index=True)


def check_negative(frame):
    """Rows holding a negative value."""
    values = frame.select_dtypes('number')
    return frame[(values < 0).any(axis=1)]


def check_gender_shares(frame):
    """Size-as-percent rows whose men + women share is not ~100%."""
    shares = frame[(frame['calc'] == Calc.PERCENT.value) & (frame['metric'] == Metric.SIZE.value)]
    if shares.empty:
        return shares
    total = shares[[g.value for g in GENDER_ORDER]].sum(axis=1)
    return shares.assign(share_total=total)[(total - 100).abs() > SHARE_TOLERANCE]


def count_ignored_ethnicity(raw):
    """Earnings records whose ethnicity block will be ignored."""
    count = 0
    for disciplines in raw.values():
        if not isinstance(disciplines, dict):
            continue
        for metrics in disciplines.values():
            earnings = metrics.get(Metric.EARNINGS.value, {}) if isinstance(metrics, dict) else {}
            if isinstance(earnings, dict) and 'by_ethnicity' in earnings:
                count += 1
    return count


def check_layouts(document):
    """Lay out every valid selection; returns (selection, error) failures."""
    failures = []
    for metric in Metric:
        for calc in Calc:
            selection = Selection(metric, calc)
            if not selection.is_valid or calc not in document.calcs:
                continue
            try:
                layout_chart(document, selection)
            except DisciplinesError as e:
                failures.append((selection, e))
    return failures


def main(argv=None):
    argv = sys.argv[1:] if argv is None else argv
    path = Path(argv[0]) if argv else DEFAULT_PATH

    print("="*70)
    print("DATA VALIDATION REPORT")
    print("="*70)
    print(f"\nDocument: {path}")

    try:
        with open(path, 'r') as f:
            raw = json.load(f)
        document = Document.from_mapping(raw)
    except (OSError, ValueError, DisciplinesError) as e:
        print(f"\n❌ Could not read document: {e}")
        return False

    ok = True

    # =========================================================================
    # CHECK 1: Calculation methods
    # =========================================================================
    banner("CHECK 1: Are all calculation methods present?")
    missing_calcs = check_calcs(document)
    if missing_calcs:
        print(f"\n❌ Missing calculation methods: {[c.value for c in missing_calcs]}")
        ok = False
    else:
        print("\n✓ population, percent and percent_by_pop_group present")

    # =========================================================================
    # CHECK 2: Discipline and metric coverage
    # =========================================================================
    banner("CHECK 2: Does every discipline carry every metric?")
    missing = check_coverage(document)
    if missing:
        print(f"\n❌ {len(missing)} missing records:")
        for calc, discipline, metric in missing[:20]:
            print(f"  - {calc} / {discipline} / {metric}")
        ok = False
    else:
        print(f"\n✓ {len(DISCIPLINE_ORDER)} disciplines and {TOTAL_KEY} complete in every method")

    extra = sorted({
        d for calc in document.calcs for d in document.dataset(calc).disciplines
        if d not in DISCIPLINE_ORDER
    })
    if extra:
        print(f"\n⚠️  Disciplines outside the display order (not drawn): {extra}")

    # =========================================================================
    # CHECK 3: Suspicious values
    # =========================================================================
    banner("CHECK 3: Checking for negative values")
    frame = value_frame(document)
    negative = check_negative(frame)
    if len(negative) > 0:
        print("\n❌ Negative values found:")
        print(negative.to_string(index=False))
        ok = False
    else:
        print("\n✓ No negative values found")

    # =========================================================================
    # CHECK 4: Gender shares
    # =========================================================================
    banner("CHECK 4: Do men + women shares sum to 100%?")
    off_by = check_gender_shares(frame)
    if len(off_by) > 0:
        print("\n⚠️  WARNING: These disciplines don't sum to ~100%:")
        print(off_by[['Discipline', 'share_total']].to_string(index=False))
    else:
        print("\n✓ All shares sum to 100% (within rounding)")

    # =========================================================================
    # CHECK 5: Earnings by ethnicity
    # =========================================================================
    banner("CHECK 5: Earnings ethnicity breakdowns")
    ignored = count_ignored_ethnicity(raw)
    print(f"\n{ignored} earnings records carry by_ethnicity; these are not drawn.")

    # =========================================================================
    # CHECK 6: Layout dry run
    # =========================================================================
    banner("CHECK 6: Can every selection be laid out?")
    failures = check_layouts(document)
    if failures:
        for selection, error in failures:
            print(f"\n❌ {selection.metric} / {selection.calc}: {error}")
        ok = False
    else:
        print("\n✓ Every valid selection lays out")

    banner("VALIDATION PASSED" if ok else "VALIDATION FAILED")
    return ok


if __name__ == "__main__":
    success = main()
    exit(0 if success else 1)
