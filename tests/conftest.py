"""
conftest.py
-----------
Shared pytest fixtures for Timeless tests.

Provides fixtures for:
- Temporary directories
- Sample diary documents
- Sample calendar data
"""
import pytest
from pathlib import Path
from tempfile import TemporaryDirectory


# ----- Path Fixtures -----

@pytest.fixture
def test_data_dir():
    """Path to test fixtures directory."""
    return Path(__file__).parent / "fixtures"


@pytest.fixture
def sample_diary_path(test_data_dir):
    """Path to a hand-edited diary with prose between entries."""
    return test_data_dir / "sample_diary.md"


@pytest.fixture
def tmp_dir():
    """Create a temporary directory for test file operations."""
    with TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


# ----- Sample Diary Content Fixtures -----

@pytest.fixture
def realistic_diary_content():
    """Diary with headers, a misplaced timestamp comment and tagged events."""
    return """
# 2024
## October 2024
10/15/2024
  - A regular event
  - A completed event [✓]
  - An event with tags #tags #multiple-tags

<!-- lastSavedTimestamp: 1678886400000 -->

## November 2024
11/1/2024
  - Another event #project-alpha
"""


@pytest.fixture
def sample_calendar():
    """Calendar map spanning two years, in reverse chronological order."""
    return {
        "11_24_2024": [
            {"text": "Christmas Eve dinner", "completed": False, "tags": ["family"]},
        ],
        "2_14_2024": [
            {"text": "Pick up dry cleaning", "completed": False, "tags": []},
            {"text": "Finish report", "completed": True, "tags": ["work", "urgent"]},
        ],
        "11_31_2023": [
            {"text": "New Year's Eve", "completed": True, "tags": []},
        ],
    }
