from types import MappingProxyType

from simulator.tape import Tape


def render_symbol(symbol):
    if symbol is None:
        return "None"
    if isinstance(symbol, bool):
        return str(symbol).lower()
    return str(symbol)


class TransitionNotFound(LookupError):
    # Steps completed before the failed lookup, filled in by drivers that count them.
    steps_taken = None

    def __init__(self, state, symbol):
        super().__init__(f"No transition for state {state} reading {render_symbol(symbol)}")
        self.state = state
        self.symbol = symbol


class TuringMachine:
    """
    Single tape deterministic Turing machine.

    The transition table maps (state, symbol) to (state, symbol, Direction),
    with None standing for the blank symbol. States are non-negative ints.
    A machine halts when the next transition would change neither the state
    nor the symbol under the head.
    """

    def __init__(self, tape=None, starting_state=0, transitions=None):
        self._tape = tape if tape is not None else Tape()
        self.starting_state = starting_state
        self.current_state = starting_state
        self._transitions = dict(transitions or {})

    @property
    def tape(self):
        return self._tape

    @property
    def transitions(self):
        return MappingProxyType(self._transitions)

    def add_transition(self, cause, effect):
        """Register a transition, returning the effect it replaced or None."""
        previous = self._transitions.get(cause)
        self._transitions[cause] = effect
        return previous

    def insert_tape(self, tape):
        self._tape = tape

    def reset(self):
        """Return to the starting state. Tape and head are left untouched."""
        self.current_state = self.starting_state

    def peek_transition(self):
        """The transition the next step would take, without taking it."""
        symbol = self._tape.read_head()
        try:
            return self._transitions[(self.current_state, symbol)]
        except KeyError:
            raise TransitionNotFound(self.current_state, symbol) from None

    def step(self):
        """
        Perform one transition. Returns True while the machine is running and
        False once a halting fixed point has been reached, in which case
        nothing is changed.
        """
        new_state, value, direction = self.peek_transition()

        if new_state == self.current_state and self._tape.read_head() == value:
            return False

        self.current_state = new_state
        self._tape.write_head(value)
        self._tape.move(direction)
        return True

    def run(self, max_steps=None):
        """Step until halted or until max_steps steps were taken. Returns (steps, halted)."""
        steps = 0
        while max_steps is None or steps < max_steps:
            if not self.step():
                return steps, True
            steps += 1
        return steps, False

    def dump(self):
        lines = [
            f"State: {self.current_state} (starting state {self.starting_state})",
            f"Head: {self._tape.head}",
            "Transitions:"
        ]
        for (state, symbol), (new_state, value, direction) in sorted(
                self._transitions.items(), key=lambda item: (item[0][0], render_symbol(item[0][1]))):
            lines.append(f"  ({state}, {render_symbol(symbol)}) -> "
                         f"({new_state}, {render_symbol(value)}, {direction})")
        tape = ", ".join(render_symbol(symbol) for symbol in self._tape.contents_trim_blanks())
        lines.append(f"Tape: [{tape}]")
        return "\n".join(lines)

    def __repr__(self):
        return (f"TuringMachine(current_state={self.current_state}, "
                f"starting_state={self.starting_state}, transitions={len(self._transitions)})")
