"""
Observer module (Observers)

One-way channel from the row driver to the console.
- QueueObserver: driver side, never blocks
- ConsoleRenderer: foreground side, prints log lines and a progress line
"""

import queue

MSG_PROGRESS = "progress"
MSG_LOG = "log"
MSG_DONE = "done"

PROGRESS_BAR_WIDTH = 30


class QueueObserver:
    """Observer port that forwards every notification to a queue."""

    def __init__(self, messages=None):
        self.messages = messages if messages is not None else queue.Queue()

    def on_progress(self, fraction):
        self.messages.put_nowait((MSG_PROGRESS, fraction))

    def on_log(self, message):
        self.messages.put_nowait((MSG_LOG, message))

    def on_done(self, result):
        self.messages.put_nowait((MSG_DONE, result))


def format_progress(fraction, width=PROGRESS_BAR_WIDTH):
    """
    Renders a progress bar line.

    Examples:
        >>> format_progress(0.5, width=10)
        '   [#####-----]  50.0%'
    """
    fraction = min(max(fraction, 0.0), 1.0)
    filled = int(round(fraction * width))
    return f"   [{'#' * filled}{'-' * (width - filled)}] {fraction * 100:5.1f}%"


class ConsoleRenderer:
    """
    Drains the message queue and prints it until the done message arrives.

    Ctrl+C sets the stop event; the renderer keeps draining so the driver's
    last messages and the done message are still shown.

    Args:
        messages (queue.Queue): Queue filled by a QueueObserver
        stop_event (threading.Event): Cancellation signal for the driver
        printer (callable): Output function
    """

    def __init__(self, messages, stop_event, printer=print):
        self.messages = messages
        self.stop_event = stop_event
        self.printer = printer
        self._progress_shown = False

    def render(self, poll_interval=0.1):
        """
        Returns:
            The payload of the done message (RunSummary or exception)
        """
        while True:
            # Ctrl+C may land while printing too, not only while waiting
            try:
                kind, payload = self.messages.get(timeout=poll_interval)
                if kind == MSG_DONE:
                    break
                self._show(kind, payload)
            except queue.Empty:
                continue
            except KeyboardInterrupt:
                self._request_stop()

        try:
            self._end_progress_line()
        except KeyboardInterrupt:
            self.stop_event.set()
        return payload

    def _show(self, kind, payload):
        if kind == MSG_PROGRESS:
            self.printer(format_progress(payload), end="\r")
            self._progress_shown = True
        elif kind == MSG_LOG:
            self._end_progress_line()
            self.printer(payload)

    def _request_stop(self):
        if self.stop_event.is_set():
            return
        self.stop_event.set()
        try:
            self._end_progress_line()
            self.printer("\n⚠️ Interrupted by user. Finishing the current row...")
        except KeyboardInterrupt:
            pass  # already stopping

    def _end_progress_line(self):
        if self._progress_shown:
            self.printer()
            self._progress_shown = False
