import json
import os
from datetime import datetime, timezone

from simulator.turing_machine import render_symbol


def run_entry(program, machine, steps, halted, trim_blanks=True, error=None):
    """Build a JSON-serialisable record of a finished (or failed) run. machine is None if parsing failed."""
    if machine is None:
        tape = []
    elif trim_blanks:
        tape = machine.tape.contents_trim_blanks()
    else:
        tape = machine.tape.contents()
    entry = {
        "program": str(program),
        "steps_taken": steps,
        "halted": halted,
        "final_state": machine.current_state if machine is not None else None,
        "tape": [None if symbol is None else render_symbol(symbol) for symbol in tape],
        "timestamp": datetime.now(timezone.utc).isoformat()
    }
    if error is not None:
        entry["error"] = str(error)
    return entry


class JSONLogger:
    def __init__(self, output_directory="logs/", log_file_prefix="turing_"):
        self.output_directory = output_directory
        self.log_file_prefix = log_file_prefix
        os.makedirs(self.output_directory, exist_ok=True)
        self.today = datetime.now(timezone.utc).strftime("%Y-%m-%d")
        self.current_log = self._get_log_filename()

    def _get_log_filename(self):
        filename = f"{self.log_file_prefix}{self.today}.jsonl"  # JSON lines format
        return os.path.join(self.output_directory, filename)

    def _log_to_file(self, filename, entries):
        path = os.path.join(self.output_directory, filename)
        with open(path, "a", encoding="utf-8") as f:
            for entry in entries:
                f.write(json.dumps(entry) + "\n")

    def log(self, entry: dict):
        """Log a single run summary to the main log."""
        self.log_batch([entry])

    def log_batch(self, entries: list):
        """Log a batch of run summaries to the main log."""
        with open(self.current_log, "a", encoding="utf-8") as f:
            for entry in entries:
                f.write(json.dumps(entry) + "\n")

    def rotate(self):
        """Start a new main log file if the UTC date has changed."""
        self.today = datetime.now(timezone.utc).strftime("%Y-%m-%d")
        self.current_log = self._get_log_filename()

    def log_halting(self, entries: list):
        """Runs that reached a halting fixed point."""
        self._log_to_file(f"halting_{self.today}.jsonl", entries)

    def log_non_halting(self, entries: list):
        """Runs stopped by the step limit."""
        self._log_to_file(f"non_halting_{self.today}.jsonl", entries)

    def log_failed(self, entries: list):
        """Programs that did not parse or hit a missing transition."""
        self._log_to_file(f"failed_{self.today}.jsonl", entries)

    def log_run(self, entry: dict):
        """Log to the main log and to the file matching the run's outcome."""
        self.log(entry)
        if "error" in entry:
            self.log_failed([entry])
        elif entry["halted"]:
            self.log_halting([entry])
        else:
            self.log_non_halting([entry])
