import argparse

from rich.console import Console
from rich.table import Table

from simulator.parser import load_program
from simulator.turing_machine import render_symbol

def table_axes(machine):
    """Sorted states and symbols that appear on the cause side of the table."""
    states = sorted({state for state, _ in machine.transitions})
    symbols = sorted({symbol for _, symbol in machine.transitions}, key=render_symbol)
    return states, symbols

def describe_transition(machine, state, symbol):
    """Compact cell text: HALT for a halting fixed point, '-' when undefined."""
    effect = machine.transitions.get((state, symbol))
    if effect is None:
        return "-"
    new_state, value, direction = effect
    if new_state == state and value == symbol:
        return "HALT"
    return f"{new_state},{render_symbol(value)},{direction}"

def render_table(machine):
    """Transition table as a rich Table, one row per state."""
    states, symbols = table_axes(machine)
    table = Table(title=f"Transition Table (start {machine.starting_state})",
                  show_header=True, header_style="bold magenta")
    table.add_column("State", justify="center")
    for symbol in symbols:
        table.add_column(render_symbol(symbol), justify="center")

    for state in states:
        row = [f"[bold]{state}[/bold]" if state == machine.current_state else str(state)]
        for symbol in symbols:
            cell = describe_transition(machine, state, symbol)
            row.append(f"[red]{cell}[/red]" if cell == "HALT" else cell)
        table.add_row(*row)
    return table

def pretty_print_table(machine):
    """Tab separated plain text version of render_table."""
    states, symbols = table_axes(machine)
    print("\n=== Transition Table ===")
    print("\t".join([" "] + [render_symbol(symbol) for symbol in symbols]))
    for state in states:
        row = [f"State {state}"] + [describe_transition(machine, state, symbol) for symbol in symbols]
        print("\t".join(row))

def main():
    parser = argparse.ArgumentParser(description="Transition Table Inspector")
    parser.add_argument("program", help="Path to a transition table source")
    parser.add_argument("--symbol_type", default="bool", help="Symbol type: bool, int or str")
    parser.add_argument("--plain", action="store_true", help="Print tab separated text instead of a table")
    args = parser.parse_args()

    machine = load_program(args.program, args.symbol_type)
    print(f"[INFO] {args.program}")
    print(f"  Starting State: {machine.starting_state}")
    print(f"  Transitions: {len(machine.transitions)}")

    if args.plain:
        pretty_print_table(machine)
    else:
        Console().print(render_table(machine))

if __name__ == "__main__":
    main()
