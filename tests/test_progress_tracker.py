"""Tests for job state bookkeeping and pacing."""

import asyncio

from listing_scraper.models import FailureRecord, JobState, MediaRecord
from listing_scraper.resilience import CancellationToken, ProgressTracker, RateLimiter


def _record(i: int) -> MediaRecord:
    return MediaRecord(title=f"m{i}", year="", source_url=f"http://h/m{i}.mkv")


def test_percent_is_capped_until_complete() -> None:
    tracker = ProgressTracker(progress_estimate=10)
    tracker.reset("http://h/", "movies", 0)
    for i in range(20):
        tracker.record_result(_record(i))

    assert tracker.snapshot()["progress"]["percent"] == 95

    tracker.mark_complete()
    progress = tracker.snapshot()["progress"]
    assert progress["percent"] == 100
    assert progress["total"] == progress["processed"] == 20


def test_reset_clears_previous_job() -> None:
    tracker = ProgressTracker()
    tracker.reset("http://h/", "movies", 0)
    tracker.record_failure(FailureRecord(title="", year="", url="http://h/x.mkv", error="bad"))
    tracker.record_fetch_error("Failed to fetch: http://h/a/")
    tracker.visited.add("http://h/")
    tracker.mark_error("boom")

    tracker.reset("http://h2/", "series", 250)
    snapshot = tracker.snapshot()

    assert tracker.state == JobState.SCANNING
    assert snapshot["failures"] == [] and snapshot["fetch_errors"] == []
    assert snapshot["error_message"] is None
    assert snapshot["mode"] == "series" and snapshot["delay_ms"] == 250
    assert tracker.visited == set()


def test_state_transitions() -> None:
    tracker = ProgressTracker()
    assert not tracker.is_running

    tracker.reset("http://h/", "movies", 0)
    assert tracker.is_running
    tracker.begin_scraping()
    assert tracker.state == JobState.SCRAPING
    tracker.mark_complete()
    assert not tracker.is_running
    assert tracker.snapshot()["finished_at"] is not None


def test_cancellation_token() -> None:
    token = CancellationToken()
    assert not token.cancelled
    token.cancel()
    assert token.cancelled


def test_rate_limiter_counts_waits() -> None:
    limiter = RateLimiter(delay_ms=-5)

    async def scenario():
        await limiter.wait()
        await limiter.wait()

    asyncio.run(scenario())
    stats = limiter.get_stats()
    assert stats["delay_ms"] == 0
    assert stats["waits"] == 2
