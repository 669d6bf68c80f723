"""Unit tests for bundle overview counters."""

from __future__ import annotations

import pytest

from repopacker.pack.fetch import BinaryContent, FetchFailure, FetchSuccess, TextContent
from repopacker.pack.overview import build_bundle_overview

pytestmark = pytest.mark.unit


class TestBuildBundleOverview:
    """Tests for build_bundle_overview function."""

    def test_counts(self) -> None:
        """Test text, binary and failed items are counted separately."""
        outcomes = [
            FetchSuccess(TextContent(path="a.py", text="x")),
            FetchSuccess(BinaryContent(path="b.png", encoded_data="data:", mime_type="image/png")),
            FetchFailure(path="z.py", cause="404"),
            FetchFailure(path="c.py", cause="timeout"),
        ]
        overview = build_bundle_overview(outcomes=outcomes, bundle_text="12345")
        assert overview == {
            "selected": {"files": 4, "text_files": 1, "binary_files": 1, "failed_files": 2},
            "failed": ["c.py", "z.py"],
            "total_chars": 5,
        }

    def test_empty(self) -> None:
        """Test an empty outcome list."""
        overview = build_bundle_overview(outcomes=[], bundle_text="")
        assert overview["selected"]["files"] == 0
        assert overview["failed"] == []
