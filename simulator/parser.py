from simulator.lexicaliser import IMPLICATION, LexError, Tuple, lexicalise
from simulator.tape import Direction, Tape
from simulator.turing_machine import TuringMachine


# === Symbol types ===
def parse_bool(text):
    if text == "true":
        return True
    if text == "false":
        return False
    raise ValueError(f"not a bool: {text!r}")


SYMBOL_TYPES = {
    "bool": parse_bool,
    "int": int,
    "str": str
}


def resolve_symbol_type(symbol_type):
    """Accept a SYMBOL_TYPES name or a parser callable."""
    if callable(symbol_type):
        return symbol_type
    if symbol_type not in SYMBOL_TYPES:
        raise ValueError(f"Unknown symbol type '{symbol_type}', expected one of {sorted(SYMBOL_TYPES)}")
    return SYMBOL_TYPES[symbol_type]


def parse_state(text):
    if not text.isdigit():
        raise ValueError(f"not a state: {text!r}")
    return int(text)


# === Errors ===
class ParseError(Exception):
    pass


class NotImplicationForm(ParseError):
    def __init__(self, found):
        super().__init__(f"Expected '(cause) -> (effect)', found {found!r}")
        self.found = found


class ImplyingNothing(ParseError):
    def __init__(self, cause):
        super().__init__(f"Clause starting with {cause!r} has no effect")
        self.cause = cause


class WrongNumberOfArguments(ParseError):
    def __init__(self, cause_arity, effect_arity):
        super().__init__(
            f"Cannot interpret a clause with {cause_arity} cause and {effect_arity} effect fields "
            f"(expected 0 -> 1 or 2 -> 3)")
        self.cause_arity = cause_arity
        self.effect_arity = effect_arity


class InvalidType(ParseError):
    def __init__(self, text, expected):
        super().__init__(f"Could not read {text!r} as {expected}")
        self.text = text
        self.expected = expected


class MissingDirection(ParseError):
    def __init__(self):
        super().__init__("Transition effect has no direction")


class MustHaveStartingState(ParseError):
    def __init__(self):
        super().__init__("Starting state clause must name a state")


class InvalidSyntax(ParseError):
    def __init__(self, lex_error):
        super().__init__(f"Syntax error: {lex_error}")
        self.lex_error = lex_error


# === Clause interpretation ===
def _field(text, parser, expected):
    try:
        return parser(text)
    except ValueError:
        raise InvalidType(text, expected) from None


def _state(text):
    if text is None:
        raise InvalidType("None", "state")
    return _field(text, parse_state, "state")


def _symbol(text, symbol_parser):
    if text is None:
        return None
    return _field(text, symbol_parser, "symbol")


class _TableBuilder:
    def __init__(self, symbol_parser):
        self.symbol_parser = symbol_parser
        self.starting_state = 0
        self.transitions = {}

    def add_clause(self, cause, effect):
        if len(cause) == 0 and len(effect) == 1:
            if effect[0] is None:
                raise MustHaveStartingState()
            self.starting_state = _state(effect[0])
        elif len(cause) == 2 and len(effect) == 3:
            state = _state(cause[0])
            symbol = _symbol(cause[1], self.symbol_parser)

            new_state = _state(effect[0])
            value = _symbol(effect[1], self.symbol_parser)
            if effect[2] is None:
                raise MissingDirection()
            direction = Direction.parse(effect[2])
            if direction is None:
                raise InvalidType(effect[2], "direction")

            self.transitions[(state, symbol)] = (new_state, value, direction)
        else:
            raise WrongNumberOfArguments(len(cause), len(effect))

    def build(self):
        return TuringMachine(Tape(), starting_state=self.starting_state, transitions=self.transitions)


# === Entry points ===
def parse_tokens(tokens, symbol_type="bool"):
    """Build a machine with an empty tape from lexicalised tokens."""
    builder = _TableBuilder(resolve_symbol_type(symbol_type))
    position = 0
    while position < len(tokens):
        cause = tokens[position]
        if not isinstance(cause, Tuple):
            raise NotImplicationForm(cause)
        if position + 1 >= len(tokens):
            raise ImplyingNothing(cause)
        if tokens[position + 1] != IMPLICATION:
            raise NotImplicationForm(tokens[position + 1])
        if position + 2 >= len(tokens):
            raise ImplyingNothing(cause)
        effect = tokens[position + 2]
        if not isinstance(effect, Tuple):
            raise NotImplicationForm(effect)

        builder.add_clause(cause.fields, effect.fields)
        position += 3
    return builder.build()


def parse_turing_machine(text, symbol_type="bool"):
    """Lexicalise and parse transition table source in one go."""
    try:
        tokens = lexicalise(text)
    except LexError as e:
        raise InvalidSyntax(e) from e
    return parse_tokens(tokens, symbol_type)


def parse_tape(text, symbol_type="bool"):
    """Input tape from comma separated fields, 'None' for blank cells."""
    symbol_parser = resolve_symbol_type(symbol_type)
    if not text.strip():
        return Tape()
    values = []
    for field in text.split(","):
        field = field.strip()
        values.append(None if field == "None" else _symbol(field, symbol_parser))
    return Tape.from_values(values)


def load_program(path, symbol_type="bool"):
    """Parse a transition table source file."""
    with open(path, "r", encoding="utf-8") as f:
        return parse_turing_machine(f.read(), symbol_type)
