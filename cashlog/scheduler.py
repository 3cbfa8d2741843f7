"""Daily reminders to keep the ledger up to date."""

import subprocess
import sys
import threading
from dataclasses import dataclass
from datetime import datetime, timedelta

_TITLE = "Cash Log"
_MAX_SLEEP = 60.0


@dataclass(frozen=True)
class DailyJob:
    """A reminder shown every day at a fixed local time."""

    hour: int
    minute: int
    message: str

    def next_run(self, now):
        """The first time strictly after now at which the job is due."""
        candidate = now.replace(hour=self.hour, minute=self.minute, second=0, microsecond=0)
        return candidate if candidate > now else candidate + timedelta(days=1)


def _current_platform():
    if sys.platform.startswith("linux"):
        return "linux"
    return "windows" if sys.platform in ("win32", "cygwin") else sys.platform


def send_reminder(message, platform=None):
    """Print the reminder and show a desktop notification where possible."""
    print(datetime.now().strftime("%H:%M"), "-", message)
    platform = platform or _current_platform()
    commands = {
        "darwin": ["osascript", "-e", f'display notification "{message}" with title "{_TITLE}"'],
        "linux": ["notify-send", _TITLE, message],
    }
    if platform in commands:
        try:
            subprocess.run(commands[platform], check=False)
        except OSError:
            pass
    elif platform == "windows":
        print("🔔 (Reminder - Windows):", message)
    else:
        print("Unsupported OS notification. Just printing the message.")


def default_jobs():
    """The afternoon and evening reminders."""
    return [
        DailyJob(15, 0, "💰 Reminder: Don't forget to log your expenses!"),
        DailyJob(21, 0, "💰 Reminder: Don't forget to log your income/expenses!"),
    ]


def run_scheduler(jobs, stop_event=None, clock=None):
    """Send each job's reminder when due until stop_event is set."""
    clock = clock or datetime.now
    stop = stop_event or threading.Event()
    pending = [(job.next_run(clock()), job) for job in jobs]
    if not pending:
        stop.wait()
        return
    while not stop.is_set():
        now = clock()
        delay = (min(due for due, _ in pending) - now).total_seconds()
        if delay > 0:
            stop.wait(min(delay, _MAX_SLEEP))
            continue
        for index, (due, job) in enumerate(pending):
            if due <= now:
                send_reminder(job.message)
                pending[index] = (job.next_run(now), job)


def start_reminder_scheduler():
    """Run the default reminders in a daemon thread; return it and its stop event."""
    stop = threading.Event()
    thread = threading.Thread(target=run_scheduler, args=(default_jobs(), stop), daemon=True)
    thread.start()
    return thread, stop