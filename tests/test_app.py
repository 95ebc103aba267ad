from rich.table import Table

from app import render_tape_window
from simulator.parser import parse_tape, parse_turing_machine


def test_tape_window_is_centred_on_head(bit_flip_source):
    machine = parse_turing_machine(bit_flip_source)
    machine.insert_tape(parse_tape("true, false"))
    machine.step()

    table = render_tape_window(machine, 2)

    assert isinstance(table, Table)
    assert [column.header for column in table.columns] == ["-1", "0", "1", "2", "3"]
    assert table.row_count == 1
