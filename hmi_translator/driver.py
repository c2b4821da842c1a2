"""
Row driver module (Row Driver)

Walks the source column in row order, asks the reuse engine what to do with
each row, writes the result to the target column and reports progress.
- One sequential worker; reuse depends on the previous row
- Progress/log/done notifications are fire-and-forget
- A stop event ends the loop between rows, keeping what was written
"""

import threading
import time
from dataclasses import dataclass, field

from .config import ROW_DELAY_SECONDS
from .engine import OutcomeKind


@dataclass
class RunSummary:
    """Counters reported at the end of a run."""
    total_rows: int = 0
    processed_rows: int = 0
    counts: dict = field(default_factory=lambda: {
        OutcomeKind.COPY: 0,
        OutcomeKind.REUSE: 0,
        OutcomeKind.TRANSLATED: 0,
        OutcomeKind.FAILED: 0,
        OutcomeKind.SKIPPED: 0,
        OutcomeKind.QUICK_SKIPPED: 0,
    })
    translation_calls: int = 0
    cancelled: bool = False
    output_path: str = ""
    error: str = ""

    def count(self, kind):
        return self.counts.get(kind, 0)


def _cell(row, index):
    if index < len(row):
        return row[index]
    return ""


class RowDriver:
    """
    Applies the reuse engine to every data row of a sheet.

    Args:
        sheet: Sheet port (get_rows / set_cell / save)
        engine (ReuseEngine): Per-row decision maker
        observer: Observer port (on_progress / on_log / on_done)
        source_col (int): 0-based source column
        target_col (int): 0-based target column
        row_delay (float): Pause after every row, in seconds
        stop_event (threading.Event, optional): Set to stop before the next row
    """

    def __init__(self, sheet, engine, observer, source_col, target_col,
                 row_delay=ROW_DELAY_SECONDS, stop_event=None):
        self.sheet = sheet
        self.engine = engine
        self.observer = observer
        self.source_col = source_col
        self.target_col = target_col
        self.row_delay = row_delay
        self.stop_event = stop_event or threading.Event()

    def run(self):
        """
        Processes all rows.

        Returns:
            RunSummary: Per-kind counts; cancelled is set if the stop event fired
        """
        rows = self.sheet.get_rows()
        summary = RunSummary(total_rows=max(len(rows) - 1, 0))

        for row_index, row in enumerate(rows):
            if row_index == 0:
                continue
            if self.stop_event.is_set():
                summary.cancelled = True
                self.observer.on_log(f"Stopped before row {row_index + 1}; rows written so far are kept.")
                break

            outcome = self.engine.process_row(
                row_index,
                _cell(row, self.source_col),
                _cell(row, self.target_col),
            )
            self._apply(row_index, outcome)

            summary.counts[outcome.kind] = summary.count(outcome.kind) + 1
            summary.translation_calls += outcome.calls
            summary.processed_rows += 1
            if summary.total_rows:
                self.observer.on_progress(summary.processed_rows / summary.total_rows)

            if self.row_delay and outcome.kind != OutcomeKind.SKIPPED:
                time.sleep(self.row_delay)

        return summary

    def _apply(self, row_index, outcome):
        """Writes the outcome (if any) and logs one line for the row."""
        row_number = row_index + 1
        if outcome.should_write:
            self.sheet.set_cell(row_index, self.target_col, outcome.text)

        if outcome.kind == OutcomeKind.COPY:
            self.observer.on_log(f"Row {row_number}: Copying {outcome.reason} '{outcome.text}'")
        elif outcome.kind == OutcomeKind.REUSE:
            self.observer.on_log(f"Row {row_number}: Reused ({outcome.reason}). Result: '{outcome.text}'")
        elif outcome.kind == OutcomeKind.TRANSLATED:
            self.observer.on_log(f"Row {row_number}: Translated. Result: '{outcome.text}'")
        elif outcome.kind == OutcomeKind.FAILED:
            detail = f" ({outcome.reason})" if outcome.reason else ""
            self.observer.on_log(f"Row {row_number}: Error{detail}: {outcome.error}")
        elif outcome.kind == OutcomeKind.QUICK_SKIPPED:
            self.observer.on_log(f"Row {row_number}: Skipped, target already translated")


def run_in_background(driver, on_finish):
    """
    Starts the driver in a daemon thread.

    Args:
        driver (RowDriver): Driver to run
        on_finish (callable): Called with the RunSummary, or with an exception
                              if the driver crashed

    Returns:
        threading.Thread: The started thread
    """
    def _target():
        try:
            summary = driver.run()
        except Exception as e:
            on_finish(e)
            return
        on_finish(summary)

    thread = threading.Thread(target=_target, name="row-driver", daemon=True)
    thread.start()
    return thread
