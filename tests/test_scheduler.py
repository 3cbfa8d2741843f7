import threading
from datetime import datetime
from unittest.mock import patch

from cashlog.scheduler import (
    DailyJob,
    default_jobs,
    run_scheduler,
    send_reminder,
    start_reminder_scheduler,
)


class _Clock:
    """Hands out fixed times, then sets the stop event and repeats the last one."""

    def __init__(self, times, stop):
        self._times = list(times)
        self._stop = stop
        self._last = None

    def __call__(self):
        if self._times:
            self._last = self._times.pop(0)
        else:
            self._stop.set()
        return self._last


def test_next_run_later_today():
    job = DailyJob(15, 0, "m")
    assert job.next_run(datetime(2025, 3, 5, 14, 0)) == datetime(2025, 3, 5, 15, 0)


def test_next_run_exactly_due_moves_to_tomorrow():
    job = DailyJob(15, 0, "m")
    assert job.next_run(datetime(2025, 3, 5, 15, 0)) == datetime(2025, 3, 6, 15, 0)


def test_next_run_after_time_moves_to_tomorrow():
    job = DailyJob(21, 0, "m")
    assert job.next_run(datetime(2025, 12, 31, 22, 30)) == datetime(2026, 1, 1, 21, 0)


def test_default_jobs_times():
    assert [(job.hour, job.minute) for job in default_jobs()] == [(15, 0), (21, 0)]
    assert all("Reminder" in job.message for job in default_jobs())


@patch("cashlog.scheduler.subprocess.run")
def test_send_reminder_linux(run, capsys):
    send_reminder("log it", platform="linux")
    run.assert_called_once()
    assert run.call_args.args[0] == ["notify-send", "Cash Log", "log it"]
    assert "- log it" in capsys.readouterr().out


@patch("cashlog.scheduler.subprocess.run")
def test_send_reminder_darwin(run, capsys):
    send_reminder("log it", platform="darwin")
    assert run.call_count == 1
    command = run.call_args.args[0]
    assert command == [
        "osascript",
        "-e",
        'display notification "log it" with title "Cash Log"',
    ]
    assert "- log it" in capsys.readouterr().out


@patch("cashlog.scheduler.subprocess.run")
def test_send_reminder_windows_prints(run, capsys):
    send_reminder("log it", platform="windows")
    assert run.call_count == 0
    assert "🔔 (Reminder - Windows): log it" in capsys.readouterr().out


@patch("cashlog.scheduler.subprocess.run")
def test_send_reminder_unknown_platform(run, capsys):
    send_reminder("log it", platform="plan9")
    assert run.call_count == 0
    assert "Unsupported OS notification" in capsys.readouterr().out


@patch("cashlog.scheduler.subprocess.run", side_effect=FileNotFoundError)
def test_missing_notifier_is_ignored(run, capsys):
    send_reminder("log it", platform="linux")
    assert run.call_count == 1
    assert "log it" in capsys.readouterr().out


@patch("cashlog.scheduler.subprocess.run")
def test_run_scheduler_fires_due_job_once(run, capsys):
    stop = threading.Event()
    clock = _Clock([datetime(2025, 3, 5, 14, 0), datetime(2025, 3, 5, 15, 0)], stop)
    run_scheduler([DailyJob(15, 0, "hello")], stop, clock)
    assert capsys.readouterr().out.count("hello") == 1
    assert stop.is_set()


@patch("cashlog.scheduler.subprocess.run")
def test_run_scheduler_does_not_fire_early(run, capsys):
    stop = threading.Event()
    clock = _Clock([datetime(2025, 3, 5, 14, 0)], stop)
    run_scheduler([DailyJob(15, 0, "hello")], stop, clock)
    assert "hello" not in capsys.readouterr().out
    assert run.call_count == 0


def test_run_scheduler_without_jobs_returns_when_stopped():
    stop = threading.Event()
    stop.set()
    run_scheduler([], stop)
    assert stop.is_set()


def test_start_reminder_scheduler_can_be_stopped():
    thread, stop = start_reminder_scheduler()
    assert thread.is_alive()
    stop.set()
    thread.join(timeout=5)
    assert not thread.is_alive()