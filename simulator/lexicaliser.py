from collections import namedtuple
from enum import Enum


# A tuple of fields, each a string or None where the literal "None" was read.
Tuple = namedtuple("Tuple", ["fields"])


class Implication:
    """The `->` marker between a cause tuple and its effect tuple."""

    def __eq__(self, other):
        return isinstance(other, Implication)

    def __hash__(self):
        return hash(Implication)

    def __repr__(self):
        return "Implication"


IMPLICATION = Implication()


class LexState(Enum):
    BLANK = "blank"
    INSIDE_TUPLE = "inside tuple"
    IMPLICATION_START = "implication start"


class LexError(Exception):
    pass


class UnexpectedToken(LexError):
    def __init__(self, char):
        super().__init__(f"Unexpected character {char!r} in transition table")
        self.char = char


class InvalidHoldState(LexError):
    def __init__(self, state):
        reason = {
            LexState.INSIDE_TUPLE: "unclosed tuple",
            LexState.IMPLICATION_START: "dangling implication arrow"
        }.get(state, state.value)
        super().__init__(f"Input ended in state '{state.value}' ({reason})")
        self.state = state


class _Scanner:
    """Three state automaton. Errors are raised immediately, so only the first is reported."""

    def __init__(self):
        self.state = LexState.BLANK
        self.tokens = []
        self.fields = []
        self.buffer = []

    def feed(self, char):
        if self.state is LexState.BLANK:
            self.state = self._blank(char)
        elif self.state is LexState.INSIDE_TUPLE:
            self.state = self._inside_tuple(char)
        else:
            self.state = self._implication_start(char)

    def finish(self):
        if self.state is not LexState.BLANK:
            raise InvalidHoldState(self.state)
        return self.tokens

    def _blank(self, char):
        if char.isspace():
            return LexState.BLANK
        if char == "(":
            return LexState.INSIDE_TUPLE
        if char == "-":
            return LexState.IMPLICATION_START
        raise UnexpectedToken(char)

    def _close_field(self):
        value = "".join(self.buffer).strip()
        self.fields.append(None if value == "None" else value)
        self.buffer.clear()

    def _inside_tuple(self, char):
        if char == ",":
            self._close_field()
            return LexState.INSIDE_TUPLE
        if char == ")":
            # "()" is the empty tuple, so an empty last field is dropped
            if "".join(self.buffer).strip():
                self._close_field()
            self.tokens.append(Tuple(list(self.fields)))
            self.fields.clear()
            self.buffer.clear()
            return LexState.BLANK
        self.buffer.append(char)
        return LexState.INSIDE_TUPLE

    def _implication_start(self, char):
        if char == ">":
            self.tokens.append(IMPLICATION)
            return LexState.BLANK
        raise UnexpectedToken(char)


def lexicalise(text):
    """Turn transition table source into a flat list of Tuple and Implication tokens."""
    scanner = _Scanner()
    for char in text:
        scanner.feed(char)
    return scanner.finish()
