"""
In-memory state for the process-wide crawl job.
Single writer (the crawl task), any number of readers via snapshot().
"""

import threading
from datetime import datetime
from typing import List, Optional, Set, Union

from listing_scraper.models import (
    EpisodeRecord,
    FailureRecord,
    JobState,
    MediaRecord,
    Progress,
    record_to_dict,
)

Record = Union[MediaRecord, EpisodeRecord]


class ProgressTracker:
    """Owns visited URLs, results, failures and progress for one job at a time."""

    def __init__(self, progress_estimate: int = 100):
        """
        Initialize an idle tracker.

        Args:
            progress_estimate: Initial guess of the file count used for percent
        """
        self.progress_estimate = max(1, progress_estimate)
        self._lock = threading.Lock()
        self.state = JobState.IDLE
        self.mode = ""
        self.root_url = ""
        self.delay_ms = 0
        self.visited: Set[str] = set()
        self.results: List[Record] = []
        self.failures: List[FailureRecord] = []
        self.fetch_errors: List[str] = []
        self.progress = Progress()
        self.stopped = False
        self.error_message: Optional[str] = None
        self.started_at: Optional[str] = None
        self.finished_at: Optional[str] = None

    def reset(self, root_url: str, mode: str, delay_ms: int):
        """
        Clear everything from the previous job and enter the scanning state.

        Args:
            root_url: Normalized root listing URL
            mode: "movies" or "series"
            delay_ms: Pacing delay for this job
        """
        with self._lock:
            self.state = JobState.SCANNING
            self.mode = mode
            self.root_url = root_url
            self.delay_ms = delay_ms
            self.visited = set()
            self.results = []
            self.failures = []
            self.fetch_errors = []
            self.progress = Progress()
            self.stopped = False
            self.error_message = None
            self.started_at = datetime.now().isoformat()
            self.finished_at = None

    @property
    def is_running(self) -> bool:
        return self.state.is_running

    def begin_scraping(self):
        """Move from scanning to scraping once the root listing is known."""
        with self._lock:
            if self.state == JobState.SCANNING:
                self.state = JobState.SCRAPING

    def set_current_directory(self, label: str):
        with self._lock:
            self.progress.current_directory = label

    def set_current_item(self, label: str):
        with self._lock:
            self.progress.current_item = label

    def add_discovered(self, count: int):
        """Grow the best-effort total by the media files seen in a listing."""
        if count <= 0:
            return
        with self._lock:
            self.progress.total += count

    def record_result(self, record: Record):
        """Append a classified record and advance progress."""
        with self._lock:
            self.results.append(record)
            self._advance()

    def record_failure(self, failure: FailureRecord):
        """Append an unclassifiable file and advance progress."""
        with self._lock:
            self.failures.append(failure)
            self._advance()

    def record_fetch_error(self, message: str):
        with self._lock:
            self.fetch_errors.append(message)

    def _advance(self):
        progress = self.progress
        progress.processed += 1
        if progress.total < progress.processed:
            progress.total = progress.processed
        # Cap below 100 until the job has really finished
        progress.percent = min(
            95,
            round(progress.processed * 100 / self.progress_estimate)
        )

    def mark_stopped(self):
        with self._lock:
            self.stopped = True

    def mark_complete(self):
        """Finish the job successfully (also used after an operator stop)."""
        with self._lock:
            self.state = JobState.COMPLETE
            self.progress.percent = 100
            self.progress.total = self.progress.processed
            self._finish()

    def mark_error(self, message: str):
        """Finish the job with a job-level error, keeping partial results."""
        with self._lock:
            self.state = JobState.ERROR
            self.error_message = message
            self._finish()

    def _finish(self):
        self.progress.current_directory = ""
        self.progress.current_item = ""
        self.finished_at = datetime.now().isoformat()

    def get_results(self) -> List[Record]:
        with self._lock:
            return list(self.results)

    def get_failures(self) -> List[FailureRecord]:
        with self._lock:
            return list(self.failures)

    def get_stats(self) -> dict:
        """
        Get current progress statistics.

        Returns:
            Dict with progress stats
        """
        with self._lock:
            return {
                'processed': self.progress.processed,
                'total': self.progress.total,
                'percent': self.progress.percent,
                'current_directory': self.progress.current_directory,
                'current_item': self.progress.current_item,
            }

    def snapshot(self) -> dict:
        """
        Consistent copy of the whole job state for status queries.

        Returns:
            JSON-ready dict
        """
        with self._lock:
            return {
                'state': self.state.value,
                'is_running': self.state.is_running,
                'mode': self.mode,
                'root_url': self.root_url,
                'delay_ms': self.delay_ms,
                'stopped': self.stopped,
                'progress': {
                    'processed': self.progress.processed,
                    'total': self.progress.total,
                    'percent': self.progress.percent,
                    'current_directory': self.progress.current_directory,
                    'current_item': self.progress.current_item,
                },
                'results_count': len(self.results),
                'failures_count': len(self.failures),
                'results': [record_to_dict(r) for r in self.results],
                'failures': [record_to_dict(f) for f in self.failures],
                'fetch_errors': list(self.fetch_errors),
                'error_message': self.error_message,
                'started_at': self.started_at,
                'finished_at': self.finished_at,
            }
