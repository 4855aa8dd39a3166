from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from frothy.reader.lexer import Token


class FrothyError(Exception):
    """ Base class for all Frothy errors"""

    kind = "FrothyError"

    def __init__(self, message: str, token: Token | None = None):
        super().__init__(message)
        self.message = message
        self.token = token

    @property
    def position(self) -> tuple[int, int] | None:
        """(line, column) of the token the error was raised at, if known."""
        if self.token is None:
            return None
        return self.token.line, self.token.col

    def __str__(self) -> str:
        if self.token is None:
            return self.message
        return f"{self.message} (at {self.token.line}:{self.token.col} near '{self.token.text}')"


class FrothyLexError(FrothyError):
    """ Raised when the source contains an unrecognised character sequence"""

    kind = "LexError"

    def __init__(self, text: str, offset: int, line: int, col: int):
        super().__init__(f"unrecognised input '{text}' at {line}:{col}")
        self.text = text
        self.offset = offset
        self.line = line
        self.col = col

    @property
    def position(self) -> tuple[int, int]:
        return self.line, self.col

    def __str__(self) -> str:
        return self.message


class FrothyUnbalancedBlock(FrothyError):
    """ Raised when '{' and '}' do not nest properly"""

    kind = "UnbalancedBlock"


class FrothyStackUnderflow(FrothyError):
    """ Raised when an operation needs more operands than the stack holds"""

    kind = "StackUnderflow"

    def __init__(self, expected: int, got: int, token: Token | None = None):
        super().__init__(f"expected {expected} operand(s) but the stack holds {got}", token)
        self.expected = expected
        self.got = got


class FrothyUnboundName(FrothyError):
    """ Raised when a name is resolved before anything is bound to it"""

    kind = "UnboundName"

    def __init__(self, name: str, token: Token | None = None):
        super().__init__(f"undefined variable '{name}'", token)
        self.name = name


class FrothyTypeMismatch(FrothyError):
    """ Raised when an operand is not of the variant an operation requires"""

    kind = "TypeMismatch"


class FrothyNotCallable(FrothyError):
    """ Raised when call is applied to something that is neither a function nor a builtin"""

    kind = "NotCallable"


class FrothyArithmeticError(FrothyError):
    """ Raised on division or modulo by zero"""

    kind = "ArithmeticError"


class FrothyRecursionError(FrothyError):
    """ Raised when nested calls exceed the configured depth"""

    kind = "RecursionLimit"


class FrothyStackNotEmpty(FrothyError):
    """ Raised in strict mode when values are left on the stack at end of program"""

    kind = "StackNotEmpty"
