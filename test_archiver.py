# type: ignore
"""
Tests for the background Archiver: state machine, progress reporting,
idempotent start, cooperative cancellation and the reset/complete race.
"""

import random
import time
from unittest.mock import patch

import pytest

from contacts_app.services.archiver import Archiver, ArchiveStatus

FAST = 0.01


def _wait_for(predicate, timeout=5.0):
    deadline = time.monotonic() + timeout
    while time.monotonic() < deadline:
        if predicate():
            return True
        time.sleep(0.001)
    return False


@pytest.fixture
def archiver(tmp_path):
    arch = Archiver(tmp_path / "contacts.json", steps=10, time_unit=FAST, rng=random.Random(7))
    yield arch
    arch.reset()
    arch.join(timeout=5)


class TestInitialState:
    def test_starts_waiting(self, archiver):
        assert archiver.status() is ArchiveStatus.WAITING
        assert archiver.progress() == 0.0
        assert archiver.progress_percentage() == 0.0

    def test_archive_file_is_contacts_file_name(self, archiver, tmp_path):
        assert archiver.archive_file() == "contacts.json"
        assert archiver.archive_path() == tmp_path / "contacts.json"

    def test_join_without_run_returns_true(self, archiver):
        assert archiver.join(timeout=0) is True

    def test_rejects_zero_steps(self, tmp_path):
        with pytest.raises(ValueError):
            Archiver(tmp_path / "contacts.json", steps=0)

    def test_status_values_render_as_text(self):
        assert ArchiveStatus.WAITING.value == "Waiting"
        assert ArchiveStatus.RUNNING.value == "Running"
        assert ArchiveStatus.COMPLETE.value == "Complete"


class TestRun:
    def test_start_moves_to_running_immediately(self, tmp_path):
        arch = Archiver(tmp_path / "contacts.json", time_unit=1.0)
        arch.start()
        try:
            assert arch.status() is ArchiveStatus.RUNNING
            assert arch.progress() == 0.0
        finally:
            arch.reset()
            assert arch.join(timeout=2)

    def test_run_completes(self, archiver):
        archiver.start()
        assert archiver.join(timeout=5)
        assert archiver.status() is ArchiveStatus.COMPLETE
        assert archiver.progress() == pytest.approx(1.0)
        assert archiver.progress_percentage() == pytest.approx(100.0)

    def test_progress_reports_each_tenth_in_order(self, archiver):
        with patch("contacts_app.services.archiver.ARCHIVE_PROGRESS") as gauge:
            archiver.start()
            assert archiver.join(timeout=5)
        reported = [c.args[0] for c in gauge.set.call_args_list]
        assert reported == pytest.approx([0.0] + [i / 10 for i in range(1, 11)])

    def test_progress_never_decreases(self, tmp_path):
        arch = Archiver(tmp_path / "contacts.json", time_unit=0.02)
        arch.start()
        seen = []
        while arch.status() is ArchiveStatus.RUNNING:
            seen.append(arch.progress())
            time.sleep(0.002)
        assert arch.join(timeout=5)
        assert seen == sorted(seen)
        assert arch.status() is ArchiveStatus.COMPLETE

    def test_snapshot_reflects_state(self, archiver):
        archiver.start()
        archiver.join(timeout=5)
        snap = archiver.snapshot()
        assert snap.status == "Complete"
        assert snap.progress == pytest.approx(1.0)
        assert snap.progress_percentage == pytest.approx(100.0)
        assert snap.archive_file == "contacts.json"


class TestIdempotentStart:
    def test_start_while_running_is_noop(self, tmp_path):
        arch = Archiver(tmp_path / "contacts.json", time_unit=0.5)
        arch.start()
        first_thread = arch._thread
        arch.start()
        try:
            assert arch._thread is first_thread
            assert arch.status() is ArchiveStatus.RUNNING
        finally:
            arch.reset()
            arch.join(timeout=2)

    def test_start_while_complete_is_noop(self, archiver):
        archiver.start()
        archiver.join(timeout=5)
        archiver.start()
        assert archiver.status() is ArchiveStatus.COMPLETE
        assert archiver.progress() == pytest.approx(1.0)
        assert archiver.join(timeout=0)


class TestReset:
    def test_reset_when_waiting_stays_waiting(self, archiver):
        archiver.reset()
        assert archiver.status() is ArchiveStatus.WAITING

    def test_reset_after_complete_returns_to_waiting(self, archiver):
        archiver.start()
        archiver.join(timeout=5)
        archiver.reset()
        assert archiver.status() is ArchiveStatus.WAITING
        # progress is not touched by reset
        assert archiver.progress() == pytest.approx(1.0)

    def test_reset_during_run_never_completes(self, tmp_path):
        arch = Archiver(tmp_path / "contacts.json", time_unit=0.05)
        arch.start()
        assert _wait_for(lambda: arch.progress() >= 0.2)
        arch.reset()
        assert arch.join(timeout=2)
        time.sleep(0.1)
        assert arch.status() is ArchiveStatus.WAITING

    def test_reset_wakes_sleeping_worker(self, tmp_path):
        arch = Archiver(tmp_path / "contacts.json", time_unit=5.0)
        arch.start()
        started = time.monotonic()
        arch.reset()
        assert arch.join(timeout=2)
        assert time.monotonic() - started < 2

    def test_reset_during_settle_delay_wins(self, tmp_path):
        arch = Archiver(tmp_path / "contacts.json", time_unit=0.1, rng=random.Random(1))
        arch.start()
        assert _wait_for(lambda: arch.progress() == pytest.approx(1.0))
        assert arch.status() is ArchiveStatus.RUNNING
        arch.reset()
        assert arch.join(timeout=2)
        assert arch.status() is ArchiveStatus.WAITING

    def test_restart_after_reset_is_not_disturbed_by_old_worker(self, tmp_path):
        arch = Archiver(tmp_path / "contacts.json", time_unit=0.02)
        arch.start()
        old_thread = arch._thread
        arch.reset()
        arch.start()
        assert arch._thread is not old_thread
        old_thread.join(timeout=2)
        assert not old_thread.is_alive()
        assert arch.status() is ArchiveStatus.RUNNING
        assert arch.join(timeout=5)
        assert arch.status() is ArchiveStatus.COMPLETE
        assert arch.progress() == pytest.approx(1.0)

    def test_cancelled_worker_stops_reporting_progress(self, tmp_path):
        arch = Archiver(tmp_path / "contacts.json", time_unit=0.02)
        with patch("contacts_app.services.archiver.ARCHIVE_PROGRESS") as gauge:
            arch.start()
            assert _wait_for(lambda: arch.progress() >= 0.3)
            arch.reset()
            gauge.reset_mock()
            arch.start()
            assert arch.join(timeout=5)
        reported = [c.args[0] for c in gauge.set.call_args_list]
        assert reported == pytest.approx([0.0] + [i / 10 for i in range(1, 11)])
