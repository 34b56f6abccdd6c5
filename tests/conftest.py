import os
import sys

# Ensure the `src/` directory is on sys.path so we can import `nyaya_lite` package
PROJECT_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), os.pardir))
SRC_DIR = os.path.join(PROJECT_ROOT, "src")
if SRC_DIR not in sys.path:
    sys.path.insert(0, SRC_DIR)

# Tests hammer the same endpoints; keep the rate limiter out of the way.
os.environ.setdefault("RATELIMIT_ENABLED", "0")
os.environ.setdefault("API_KEY", "")

import pytest

from nyaya_lite.models import LawRecord, Severity


def make_law(title, category, keywords=(), description="", severity=Severity.MEDIUM, **extra):
    return LawRecord(
        title=title,
        category=category,
        keywords=list(keywords),
        description=description,
        severity=severity,
        **extra,
    )


@pytest.fixture
def theft_law():
    return make_law("Theft", "Property Crime", ["theft", "stolen", "phone stolen"],
                    description="Taking movable property without consent.", id="theft")


@pytest.fixture
def workplace_law():
    return make_law("Workplace Harassment", "Harassment", ["harassment", "boss", "intimidation"],
                    description="Intimidation by an employer or colleague.", severity=Severity.MEDIUM,
                    id="workplace")


@pytest.fixture
def small_corpus(theft_law, workplace_law):
    return [
        theft_law,
        workplace_law,
        make_law("Ragging in College", "Education", ["ragging", "seniors"], severity=Severity.MEDIUM, id="ragging"),
        make_law("Salary Not Paid", "Employment", ["salary", "wages"], severity=Severity.LOW, id="salary"),
        make_law("Missing Child", "Child Protection", ["missing", "kidnapping"], severity=Severity.HIGH, id="missing"),
    ]


@pytest.fixture
def law_factory():
    return make_law
