"""Pytest configuration and fixtures for export parsing tests."""

import shutil
import tempfile

import pytest

CANONICAL_EXPORT = """\
metadata:
  format_version: "1.0"
  created_at: "2025-01-16T17:17:03Z"
  source: "1177.se Journal"
  patient:
    name: "Test Person"
    birth_date: "1990-01-01"
    personal_number: "19900101-1234"
  export_info:
    total_entries: 2
    date_range:
      start: "2025-02-10"
      end: "2025-03-17"
    healthcare_providers:
      - "Test Clinic"
      - "Test Lab"
entries:
  - id: "entry_001"
    date: "2025-03-17"
    time: "10:30"
    category: "Vårdkontakter"
    type: "Besök"
    provider:
      name: "Test Clinic"
      region: "Region Test"
      location: "Stockholm"
    status: "Signerad"
    responsible_person:
      name: "Anna Läkare"
      role: "Läkare"
    content:
      summary: "Test visit 1"
      details: "Details for visit 1"
      notes:
        - "First note"
        - "Second note"
    attachments: []
    tags:
      - "visit"
  - id: "entry_002"
    date: "2025-02-10"
    category: "Provsvar"
    provider:
      name: "Test Lab"
    content:
      summary: "Test lab result"
      details:
        - "Hb 140"
        - "CRP <5"
      notes: ""
"""

# Dash at indent 0 with extra spaces, fields at indent 2.
PATTERN_A_EXPORT = """\
metadata:
  format_version: "1.0"
entries:
-     id: "e1"
  date: "2025-03-17"
  category: "Vårdkontakter"
  provider:
    name: "Test Clinic"
    region: "Region Test"
  responsible_person:
    name: "Anna Läkare"
    role: "Läkare"
  content:
    summary: "Visit"
    notes:
      - "First note"
  tags:
    - "visit"
-     id: "e2"
  date: "2025-02-10"
  category: "Provsvar"
"""

# The same values as PATTERN_A_EXPORT, written correctly.
PATTERN_A_CANONICAL = """\
metadata:
  format_version: "1.0"
entries:
  - id: "e1"
    date: "2025-03-17"
    category: "Vårdkontakter"
    provider:
      name: "Test Clinic"
      region: "Region Test"
    responsible_person:
      name: "Anna Läkare"
      role: "Läkare"
    content:
      summary: "Visit"
      notes:
        - "First note"
    tags:
      - "visit"
  - id: "e2"
    date: "2025-02-10"
    category: "Provsvar"
"""

# Dash at indent 2 with extra spaces, empty lists on their own line.
PATTERN_B_EXPORT = """\
metadata:
  source: "1177.se Journal"
entries:
  -     id: "b1"
    date: "2025-01-05"
    category: "Anteckningar"
    attachments:
[]
    tags:
[]
    content:
      summary: "Note"
  -     id: "b2"
    date: "2025-01-06"
    attachments:
[]
"""

EMBEDDED_QUOTES_EXPORT = """\
entries:
  - id: "q1"
    content:
      summary: "Patient said "ok" today"
      notes:
        - "Uses "Alvedon" daily"
"""

FAULTY_ENTRIES_EXPORT = """\
entries:
  - id: "ok1"
    date: "2025-01-01"
  - id: "bad1"
    provider: "Region Test"
  - "just a string"
  - id: "ok2"
    tags:
      - "a"
  - id: "bad2"
    responsible_person:
      - "Anna"
  - id: "ok3"
    content:
      details:
        - "a"
        - "b"
"""


@pytest.fixture
def canonical_export():
    return CANONICAL_EXPORT


@pytest.fixture
def pattern_a_export():
    return PATTERN_A_EXPORT


@pytest.fixture
def pattern_a_canonical():
    return PATTERN_A_CANONICAL


@pytest.fixture
def pattern_b_export():
    return PATTERN_B_EXPORT


@pytest.fixture
def embedded_quotes_export():
    return EMBEDDED_QUOTES_EXPORT


@pytest.fixture
def faulty_entries_export():
    return FAULTY_ENTRIES_EXPORT


@pytest.fixture(scope="function")
def export_dir():
    """Create a temporary directory for export files."""
    temp_dir = tempfile.mkdtemp(prefix="test_eir_export_")
    yield temp_dir
    shutil.rmtree(temp_dir, ignore_errors=True)
