import json
from pathlib import Path

import pytest
from rich.table import Table

from logger.logger import JSONLogger
from simulator.parser import InvalidSyntax, load_program, parse_tape, parse_turing_machine
from simulator.turing_machine import TransitionNotFound
from tools.simulate_programs import run_machine, simulate_program, simulate_programs
from tools.table_inspect import describe_transition, render_table, table_axes

PROGRAMS = Path(__file__).parent.parent / "programs"


class TestSimulateProgram:
    def test_bit_flip(self, bit_flip_file):
        entry = simulate_program(bit_flip_file, "true, false, true")
        assert entry["halted"] is True
        assert entry["steps_taken"] == 3
        assert entry["tape"] == ["false", "true", "false"]

    def test_missing_transition_recorded(self, tmp_path):
        path = tmp_path / "partial.tm"
        path.write_text("(0, true) -> (0, false, Right)", encoding="utf-8")
        entry = simulate_program(path, "true")
        assert entry["halted"] is False
        assert entry["steps_taken"] == 1
        assert "No transition for state 0" in entry["error"]

    def test_step_limit(self, tmp_path):
        path = tmp_path / "forever.tm"
        path.write_text("(0, None) -> (0, true, Right)", encoding="utf-8")
        entry = simulate_program(path, "", max_steps=100, log_frequency=30)
        assert entry["halted"] is False
        assert entry["steps_taken"] == 100

    def test_parse_error_propagates(self, tmp_path):
        path = tmp_path / "broken.tm"
        path.write_text("(0, true) -> (0, false", encoding="utf-8")
        with pytest.raises(InvalidSyntax):
            simulate_program(path)


class TestShippedPrograms:
    def test_binary_increment(self):
        entry = simulate_program(PROGRAMS / "binary_increment.tm", "true, false, true, true")
        assert entry["halted"] is True
        assert entry["steps_taken"] == 8
        assert entry["tape"] == ["true", "true", "false", "false"]

    def test_binary_increment_overflow(self):
        entry = simulate_program(PROGRAMS / "binary_increment.tm", "true, true")
        assert entry["tape"] == ["true", "false", "false"]

    def test_unary_double(self):
        entry = simulate_program(PROGRAMS / "unary_double.tm", "1, 1", symbol_type="int")
        assert entry["halted"] is True
        assert entry["tape"] == ["1", "1", None, "1", "1", "1", "1"]

    @pytest.mark.parametrize("program, halting_cells", [
        ("bit_flip.tm", [(1, None)]),
        ("binary_increment.tm", [(2, True)]),
        ("unary_double.tm", [(4, None), (4, 1)]),
    ])
    def test_only_intended_fixed_points(self, program, halting_cells):
        symbol_type = "int" if program == "unary_double.tm" else "bool"
        machine = load_program(PROGRAMS / program, symbol_type)
        fixed_points = [cause for cause in machine.transitions
                        if describe_transition(machine, *cause) == "HALT"]
        assert sorted(fixed_points, key=str) == sorted(halting_cells, key=str)


class TestSimulatePrograms:
    def test_batch_logs_every_program(self, tmp_path, bit_flip_file):
        broken = tmp_path / "broken.tm"
        broken.write_text("() -> (None)", encoding="utf-8")
        logger = JSONLogger(str(tmp_path / "logs"), "run_")

        results = simulate_programs([bit_flip_file, broken, tmp_path / "absent.tm"], "true", logger=logger)

        assert [entry["halted"] for entry in results] == [True, False, False]
        assert "error" in results[1] and "error" in results[2]
        with open(logger.current_log, "r", encoding="utf-8") as f:
            assert len([json.loads(line) for line in f]) == 3


def test_run_machine_chunks(bit_flip_source):
    machine = parse_turing_machine(bit_flip_source)
    assert run_machine(machine, max_steps=10, log_frequency=1) == (0, True)


class TestTableInspect:
    def test_axes_and_cells(self, bit_flip_source):
        machine = parse_turing_machine(bit_flip_source)
        states, symbols = table_axes(machine)
        assert states == [1]
        assert symbols == [None, False, True]
        assert describe_transition(machine, 1, True) == "1,false,Right"
        assert describe_transition(machine, 1, None) == "HALT"
        assert describe_transition(machine, 7, True) == "-"

    def test_render_table(self, bit_flip_source):
        table = render_table(parse_turing_machine(bit_flip_source))
        assert isinstance(table, Table)
        assert len(table.columns) == 4
        assert table.row_count == 1


class TestRunMachine:
    def test_missing_transition_keeps_step_count(self):
        machine = parse_turing_machine("(0, true) -> (0, false, Right)\n(0, false) -> (0, true, Right)")
        machine.insert_tape(parse_tape("true, false, true"))
        with pytest.raises(TransitionNotFound) as excinfo:
            run_machine(machine, max_steps=10)
        assert excinfo.value.steps_taken == 3
        assert excinfo.value.symbol is None

    def test_step_limit(self):
        machine = parse_turing_machine("(0, None) -> (0, true, Right)")
        assert run_machine(machine, max_steps=7, log_frequency=2) == (7, False)


def test_batch_rotates_stale_log(tmp_path, bit_flip_file):
    logger = JSONLogger(str(tmp_path), "run_")
    today = logger.today
    logger.today = "2000-01-01"
    logger.current_log = logger._get_log_filename()

    simulate_programs([bit_flip_file], "true", logger=logger)

    assert logger.today == today
    assert logger.current_log.endswith(f"run_{today}.jsonl")
    assert not (tmp_path / "run_2000-01-01.jsonl").exists()
