"""Debug output helpers for the NHN Cloud CLI.

Debug lines go to stderr so they never mix with rendered output on stdout.
"""

import datetime
import sys
from contextlib import contextmanager

TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"


class DebugContext:
    """Switchable sink for timestamped "[DEBUG]" lines."""

    def __init__(self, enabled=False, stream=None):
        self.enabled = enabled
        self.stream = stream

    def print(self, *args, **kwargs):
        """Write a debug line when enabled; args are joined like print()."""
        if not self.enabled:
            return

        stamp = datetime.datetime.now().strftime(TIMESTAMP_FORMAT)
        message = " ".join(str(arg) for arg in args)
        # Resolve stderr per call so redirection after import is honoured
        stream = self.stream if self.stream is not None else sys.stderr
        print(f"[DEBUG] {stamp} {message}".rstrip(), file=stream, **kwargs)

    def enable(self):
        self.enabled = True

    def disable(self):
        self.enabled = False

    @contextmanager
    def enabled_for(self):
        """Temporarily enable debug output, restoring the previous state on exit."""
        previous = self.enabled
        self.enabled = True
        try:
            yield self
        finally:
            self.enabled = previous


_debug_context = DebugContext()


def debug_print(*args, **kwargs):
    """Print a debug line through the global context when --debug is on."""
    _debug_context.print(*args, **kwargs)


def set_debug_enabled(value):
    if value:
        _debug_context.enable()
    else:
        _debug_context.disable()


def get_debug_enabled():
    return _debug_context.enabled
