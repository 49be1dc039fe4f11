"""
Progress and error lines for the search.

Every line goes to one rich console, prefixed with a timestamp and, for
warnings and errors, a tag. A trace level filters out anything below it.
"""

import threading
import time

from rich.console import Console
from rich.text import Text

ALL = 0
VERBOSE = 1
INFO = 2
WARNING = 3
ERROR = 4
FATAL = 5
NONE = 6

LEVELS = {
    "all": ALL,
    "verbose": VERBOSE,
    "info": INFO,
    "warning": WARNING,
    "error": ERROR,
    "fatal": FATAL,
    "none": NONE,
}

TIMESTAMP_FORMAT = "%m/%d/%Y %H:%M:%S"

_TAGS = {
    WARNING: ("WARNING: ", "bold yellow"),
    ERROR: ("ERROR: ", "bold red"),
    FATAL: ("ERROR: ", "bold red"),
}


class Reporter:
    def __init__(self, console=None, trace_level=ALL):
        self.console = console or Console()
        self.trace_level = trace_level
        self._lock = threading.Lock()

    def enabled(self, level):
        return level >= self.trace_level

    def emit(self, level, message, style=None):
        if not self.enabled(level):
            return
        line = Text(time.strftime(TIMESTAMP_FORMAT) + " ", style="dim")
        if level in _TAGS:
            tag, tag_style = _TAGS[level]
            line.append(tag, style=tag_style)
        line.append(message, style=style)
        # one writer at a time so lines from different workers never interleave
        with self._lock:
            self.console.print(line, soft_wrap=True, highlight=False)

    def verbose(self, message):
        self.emit(VERBOSE, message)

    def info(self, message, style=None):
        self.emit(INFO, message, style)

    def warning(self, message):
        self.emit(WARNING, message)

    def error(self, message):
        self.emit(ERROR, message)

    def fatal(self, message):
        self.emit(FATAL, message)

    # search events

    def testing(self, worker_id, p):
        self.verbose(f"worker {worker_id} began testing exponent {p}")

    def exhausted(self, worker_id):
        self.verbose(f"worker {worker_id}'s assignment exhausted")

    def found(self, worker_id, p, digits):
        self.info(
            f"worker {worker_id} found a Mersenne prime at exponent {p} "
            f"with decimal value {digits}",
            style="bold green",
        )
