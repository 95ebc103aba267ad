# tools/simulate_programs.py

import argparse
import os
from pathlib import Path

from rich.progress import Progress, SpinnerColumn, BarColumn, TextColumn, TimeElapsedColumn

from config.config_loader import DEFAULT_CONFIG, load_config
from logger.logger import JSONLogger, run_entry
from simulator.parser import ParseError, load_program, parse_tape
from simulator.turing_machine import TransitionNotFound

def console_message(msg):
    print(f"[{Path(os.getcwd()).name}] {msg}")

# === Single Program ===
def run_machine(machine, max_steps=1000000, log_frequency=10000, name="machine", verbose=False):
    """
    Step a machine until it halts or max_steps is reached. Returns (steps, halted).

    A TransitionNotFound is re-raised with steps_taken set to the number of
    steps completed before the lookup failed.
    """
    steps = 0
    try:
        while steps < max_steps:
            if not machine.step():
                return steps, True
            steps += 1
            if verbose and steps % log_frequency == 0 and steps < max_steps:
                console_message(f"[INFO] {name}: {steps:,} steps so far...")
    except TransitionNotFound as e:
        e.steps_taken = steps
        raise
    return steps, False

def simulate_program(program_path, tape_text="", symbol_type="bool", max_steps=1000000,
                     log_frequency=10000, trim_blanks=True, verbose=False):
    """
    Parse a program, load the input tape and run to halt or step limit.

    Parse errors propagate. A missing transition ends the run and is
    recorded in the returned entry under "error".
    """
    machine = load_program(program_path, symbol_type)
    machine.insert_tape(parse_tape(tape_text, symbol_type))

    try:
        steps, halted = run_machine(machine, max_steps=max_steps, log_frequency=log_frequency,
                                    name=Path(program_path).name, verbose=verbose)
    except TransitionNotFound as e:
        return run_entry(program_path, machine, e.steps_taken, False, trim_blanks=trim_blanks, error=e)

    return run_entry(program_path, machine, steps, halted, trim_blanks=trim_blanks)

# === Batch Runner ===
def simulate_programs(program_paths, tape_text="", symbol_type="bool", max_steps=1000000,
                      log_frequency=10000, trim_blanks=True, logger=None):
    results = []
    console_message(f"Loaded {len(program_paths):,} programs.")
    if logger is not None:
        # A long-lived logger may still point at a previous day's file
        logger.rotate()

    with Progress(
            SpinnerColumn(),
            BarColumn(),
            "[progress.percentage]{task.percentage:>3.0f}%",
            TextColumn("[progress.completed]/[progress.total] Programs"),
            TimeElapsedColumn()
    ) as progress:

        task = progress.add_task("[cyan]Simulating...", total=len(program_paths))

        for program_path in program_paths:
            try:
                entry = simulate_program(program_path, tape_text, symbol_type=symbol_type,
                                         max_steps=max_steps, log_frequency=log_frequency,
                                         trim_blanks=trim_blanks)
            except (ParseError, OSError) as e:
                entry = run_entry(program_path, None, None, False, error=e)

            if "error" in entry:
                console_message(f"[WARNING] {program_path}: {entry['error']}")
            elif not entry["halted"]:
                console_message(f"[INFO] {program_path} did not halt within {max_steps:,} steps.")

            results.append(entry)
            if logger is not None:
                logger.log_run(entry)

            progress.update(task, advance=1)

    console_message("[SUCCESS] All programs simulated.")
    return results


# === CLI ===
def main():
    parser = argparse.ArgumentParser(description="Run transition table programs against an input tape.")
    parser.add_argument("--programs", nargs="+", required=True, help="Paths to transition table sources")
    parser.add_argument("--tape", default="", help="Input tape, comma separated (None = blank)")
    parser.add_argument("--config", default=None, help="Path to runtime config JSON")
    parser.add_argument("--max_steps", type=int, default=None, help="Maximum steps before giving up")
    parser.add_argument("--symbol_type", default=None, help="Symbol type: bool, int or str")
    args = parser.parse_args()

    config = load_config(args.config) if args.config else DEFAULT_CONFIG.copy()
    logger = JSONLogger(config["output_directory"], config["log_file_prefix"])

    results = simulate_programs(
        args.programs,
        args.tape,
        symbol_type=args.symbol_type or config["symbol_type"],
        max_steps=args.max_steps or config["max_steps"],
        log_frequency=config["log_frequency"],
        trim_blanks=config["trim_blanks"],
        logger=logger
    )

    for entry in results:
        tape = ", ".join("None" if symbol is None else symbol for symbol in entry["tape"])
        print(f"{entry['program']}: halted={entry['halted']} steps={entry['steps_taken']} tape=[{tape}]")

if __name__ == "__main__":
    main()
