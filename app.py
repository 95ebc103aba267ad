# app.py

import argparse
from pathlib import Path

from rich.console import Console
from rich.prompt import Prompt, IntPrompt, Confirm
from rich.table import Table

from config.config_loader import load_config, save_config
from logger.logger import JSONLogger, run_entry
from simulator.parser import ParseError, load_program, parse_tape
from simulator.turing_machine import TransitionNotFound, render_symbol
from tools.simulate_programs import run_machine
from tools.table_inspect import render_table

console = Console()

CONFIG_PATH = "config/runtime_config.json"

# === Utilities ===
def load_runtime_config():
    try:
        return load_config(CONFIG_PATH, verbose=False)
    except FileNotFoundError:
        console.print(f"[red]Error: {CONFIG_PATH} not found![/red]")
        raise SystemExit(1)

def render_tape_window(machine, radius):
    """One row table of the cells around the head, head cell highlighted."""
    tape = machine.tape
    table = Table(show_header=True, header_style="bold cyan")
    cells = tape.contents_around_head(radius)
    for offset in range(-radius, radius + 1):
        table.add_column(str(tape.head + offset), justify="center")
    table.add_row(*[
        f"[reverse]{render_symbol(cell)}[/reverse]" if offset == 0 else render_symbol(cell)
        for offset, cell in zip(range(-radius, radius + 1), cells)
    ])
    return table

def show_machine(session, config):
    machine = session["machine"]
    if machine is None:
        console.print("[yellow]No program loaded.[/yellow]")
        return
    console.print(f"\n[bold]{session['program']}[/bold]  state: {machine.current_state}  head: {machine.tape.head}")
    console.print(render_tape_window(machine, config["window_radius"]))

def show_main_menu():
    console.print("\n[bold cyan]Turing Machine Simulator[/bold cyan]")
    console.print("[1] Load Program")
    console.print("[2] Load Input Tape")
    console.print("[3] Step")
    console.print("[4] Run to Halt")
    console.print("[5] Reset")
    console.print("[6] Show Transition Table")
    console.print("[7] Edit Config")
    console.print("[8] Exit")


def handle_load_program(session, config):
    programs_dir = Path(config["programs_directory"])
    default = ""
    if programs_dir.exists():
        available = sorted(programs_dir.glob("*.tm"))
        for path in available:
            console.print(f"  {path}")
        if available:
            default = str(available[0])

    path = Prompt.ask("Program file", default=default)
    try:
        machine = load_program(path, config["symbol_type"])
    except (ParseError, OSError) as e:
        console.print(f"[red]Could not load {path}: {e}[/red]")
        return

    if session["machine"] is not None:
        machine.insert_tape(session["machine"].tape)
    session["machine"] = machine
    session["program"] = path
    console.print(f"[green]Loaded {len(machine.transitions)} transitions, starting state {machine.starting_state}.[/green]")
    show_machine(session, config)

def handle_load_tape(session, config):
    if session["machine"] is None:
        console.print("[yellow]Load a program first.[/yellow]")
        return
    text = Prompt.ask("Input tape (comma separated, None = blank)", default="")
    try:
        session["machine"].insert_tape(parse_tape(text, config["symbol_type"]))
    except ParseError as e:
        console.print(f"[red]Invalid tape: {e}[/red]")
        return
    show_machine(session, config)

def handle_step(session, config):
    machine = session["machine"]
    if machine is None:
        console.print("[yellow]Load a program first.[/yellow]")
        return
    try:
        running = machine.step()
    except TransitionNotFound as e:
        console.print(f"[red]{e}[/red]")
        return
    if not running:
        console.print("[bold green]Reached halting state.[/bold green]")
    show_machine(session, config)

def handle_run(session, config, logger):
    machine = session["machine"]
    if machine is None:
        console.print("[yellow]Load a program first.[/yellow]")
        return
    max_steps = IntPrompt.ask("Max Steps", default=config["max_steps"])

    try:
        steps, halted = run_machine(machine, max_steps=max_steps, log_frequency=config["log_frequency"],
                                    name=session["program"])
    except TransitionNotFound as e:
        console.print(f"[red]{e}[/red]")
        logger.log_run(run_entry(session["program"], machine, e.steps_taken, False,
                                 trim_blanks=config["trim_blanks"], error=e))
        return

    logger.log_run(run_entry(session["program"], machine, steps, halted, trim_blanks=config["trim_blanks"]))
    if halted:
        console.print(f"[green]Halted after {steps:,} steps.[/green]")
    else:
        console.print(f"[yellow]Still running after {steps:,} steps.[/yellow]")
    show_machine(session, config)

def handle_reset(session, config):
    if session["machine"] is None:
        console.print("[yellow]Load a program first.[/yellow]")
        return
    session["machine"].reset()
    console.print(f"[cyan]State reset to {session['machine'].starting_state}.[/cyan]")
    show_machine(session, config)

def handle_show_table(session):
    if session["machine"] is None:
        console.print("[yellow]Load a program first.[/yellow]")
        return
    console.print(render_table(session["machine"]))

def handle_edit_config(config):
    console.print("\n[bold]Edit Configuration[/bold]")

    max_steps = IntPrompt.ask("Max Steps", default=config["max_steps"])
    symbol_type = Prompt.ask("Symbol Type", choices=["bool", "int", "str"], default=config["symbol_type"])
    window_radius = IntPrompt.ask("Window Radius", default=config["window_radius"])
    log_frequency = IntPrompt.ask("Log Frequency", default=config["log_frequency"])
    trim_blanks = Confirm.ask("Trim blanks in run logs?", default=config["trim_blanks"])

    config.update({
        "max_steps": max_steps,
        "symbol_type": symbol_type,
        "window_radius": window_radius,
        "log_frequency": log_frequency,
        "trim_blanks": trim_blanks
    })

    try:
        save_config(config, CONFIG_PATH)
    except (TypeError, ValueError) as e:
        console.print(f"[red]Configuration not saved: {e}[/red]")
        return
    console.print("[green]Configuration updated successfully.[/green]")


def interactive_main():
    config = load_runtime_config()
    logger = JSONLogger(config["output_directory"], config["log_file_prefix"])
    session = {"machine": None, "program": None}

    while True:
        show_main_menu()
        choice = Prompt.ask("\nChoose an option", choices=["1", "2", "3", "4", "5", "6", "7", "8"], default="3")

        if choice == "1":
            handle_load_program(session, config)
        elif choice == "2":
            handle_load_tape(session, config)
        elif choice == "3":
            handle_step(session, config)
        elif choice == "4":
            handle_run(session, config, logger)
        elif choice == "5":
            handle_reset(session, config)
        elif choice == "6":
            handle_show_table(session)
        elif choice == "7":
            handle_edit_config(config)
            config = load_runtime_config()
        elif choice == "8":
            console.print("[bold green]Goodbye![/bold green]")
            break

# === CLI Mode for Automation ===
def cli_main(args):
    config = load_runtime_config()
    symbol_type = args.symbol_type or config["symbol_type"]

    try:
        machine = load_program(args.program, symbol_type)
        machine.insert_tape(parse_tape(args.tape, symbol_type))
    except (ParseError, OSError) as e:
        console.print(f"[red]{e}[/red]")
        raise SystemExit(1)

    if args.run:
        max_steps = args.max_steps or config["max_steps"]
        try:
            steps, halted = run_machine(machine, max_steps=max_steps, log_frequency=config["log_frequency"],
                                        name=args.program, verbose=True)
        except TransitionNotFound as e:
            console.print(f"[red]{e}[/red]")
            raise SystemExit(1)
        console.print(f"halted={halted} steps={steps}")

    console.print(machine.dump(), markup=False)

def main():
    parser = argparse.ArgumentParser(description="Single Tape Turing Machine Simulator")
    parser.add_argument("--program", help="Transition table source to load")
    parser.add_argument("--tape", default="", help="Input tape, comma separated (None = blank)")
    parser.add_argument("--run", action="store_true", help="Run the program to halt immediately")
    parser.add_argument("--max_steps", type=int, default=None, help="Step limit for --run")
    parser.add_argument("--symbol_type", default=None, help="Symbol type: bool, int or str")
    args = parser.parse_args()

    if args.program:
        cli_main(args)
    else:
        interactive_main()

if __name__ == "__main__":
    main()
