import pytest

from simulator.tape import Tape


BIT_FLIP_SOURCE = """
() -> (1)
(1, true) -> (1, false, Right)
(1, false) -> (1, true, Right)
(1, None) -> (1, None, Hold)
"""


@pytest.fixture
def tape():
    return Tape()


@pytest.fixture
def bit_flip_source():
    return BIT_FLIP_SOURCE


@pytest.fixture
def bit_flip_file(tmp_path):
    path = tmp_path / "bit_flip.tm"
    path.write_text(BIT_FLIP_SOURCE, encoding="utf-8")
    return path
