"""Tests for the submission helpers.

Tests verify:
- experience_years sums only "<N> year" phrasing
- A failing upload is dropped without failing the others
- Kept remote URLs come before new uploads
"""

import logging

import pytest

from nexus.wizard.compiler import experience_years, recombine_urls, upload_pending
from nexus.wizard.fields import ExperienceEntry
from tests.conftest import TEST_USER_ID, FakeObjectStore, make_upload


def _durations(*values: str) -> list[ExperienceEntry]:
    return [ExperienceEntry(title="Role", duration=value) for value in values]


class TestExperienceYears:
    """Experience years derived from duration text."""

    def test_only_year_phrasing_counts(self) -> None:
        assert experience_years(_durations("2021 - Present", "3 years")) == 3

    def test_month_year_date_is_not_a_duration(self) -> None:
        assert experience_years(_durations("Jan 2020")) == 0

    def test_sums_across_entries(self) -> None:
        assert experience_years(_durations("2 years", "1 Year", "5 years")) == 8

    def test_first_figure_per_entry(self) -> None:
        assert experience_years(_durations("2 years 6 months")) == 2

    def test_months_only(self) -> None:
        assert experience_years(_durations("6 months")) == 0

    def test_no_entries(self) -> None:
        assert experience_years([]) == 0


class TestUploadPending:
    """Per-file upload isolation."""

    @pytest.mark.asyncio
    async def test_all_succeed_in_order(self) -> None:
        store = FakeObjectStore()
        uploads = [make_upload("a.jpg"), make_upload("b.jpg")]

        urls = await upload_pending(store, "avatars", TEST_USER_ID, uploads)

        assert urls == [
            f"https://cdn.test/avatars/{TEST_USER_ID}/a.jpg",
            f"https://cdn.test/avatars/{TEST_USER_ID}/b.jpg",
        ]

    @pytest.mark.asyncio
    async def test_failed_upload_is_dropped(self, caplog) -> None:
        store = FakeObjectStore(fail_on={2})
        uploads = [make_upload("a.jpg"), make_upload("b.jpg"), make_upload("c.jpg")]

        with caplog.at_level(logging.WARNING, logger="nexus.wizard.compiler"):
            urls = await upload_pending(store, "avatars", TEST_USER_ID, uploads)

        assert len(store.calls) == 3
        assert urls == [
            f"https://cdn.test/avatars/{TEST_USER_ID}/a.jpg",
            f"https://cdn.test/avatars/{TEST_USER_ID}/c.jpg",
        ]
        assert "b.jpg" in caplog.text

    @pytest.mark.asyncio
    async def test_nothing_pending(self) -> None:
        store = FakeObjectStore()

        assert await upload_pending(store, "avatars", TEST_USER_ID, []) == []
        assert store.calls == []


class TestRecombineUrls:
    """Merging kept and uploaded URLs."""

    def test_existing_first(self) -> None:
        assert recombine_urls(["https://x/1.jpg"], ["https://x/2.jpg"]) == [
            "https://x/1.jpg",
            "https://x/2.jpg",
        ]

    def test_local_previews_are_discarded(self) -> None:
        assert recombine_urls(["blob:preview", "https://x/1.jpg"], []) == [
            "https://x/1.jpg"
        ]
