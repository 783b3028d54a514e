"""
Error kinds raised by the expression tree operations.

Every error carries an ErrorKind so callers can branch on it without
matching message text. Each class also derives from the closest builtin
exception, so ``except ZeroDivisionError`` keeps working for callers that
do not know about this package.
"""

from enum import Enum
from typing import Optional


class ErrorKind(Enum):
    """Enumeration of failure kinds"""
    DIVISION_BY_ZERO = "division_by_zero"
    UNBOUND_VARIABLE = "unbound_variable"
    UNSUPPORTED_OPERATION = "unsupported_operation"
    UNKNOWN_OPERATOR = "unknown_operator"
    UNKNOWN_FUNCTION = "unknown_function"
    DOMAIN_MISMATCH = "domain_mismatch"
    EXPRESSION_TOO_DEEP = "expression_too_deep"
    PARSE_ERROR = "parse_error"


class CalculusError(Exception):
    """Base class for all symbolic_calculus errors"""
    kind: Optional[ErrorKind] = None

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class DivisionByZero(CalculusError, ZeroDivisionError):
    kind = ErrorKind.DIVISION_BY_ZERO


class UnboundVariable(CalculusError, LookupError):
    kind = ErrorKind.UNBOUND_VARIABLE

    def __init__(self, name: str):
        super().__init__(f"Variable '{name}' has no binding")
        self.name = name


class UnsupportedOperation(CalculusError, NotImplementedError):
    kind = ErrorKind.UNSUPPORTED_OPERATION


class UnknownOperator(CalculusError, ValueError):
    """Binary operator outside the closed set; signals a malformed tree"""
    kind = ErrorKind.UNKNOWN_OPERATOR

    def __init__(self, operator):
        super().__init__(f"Unknown operator: {operator!r}")
        self.operator = operator


class UnknownFunction(CalculusError, ValueError):
    """Unary function outside the closed set; signals a malformed tree"""
    kind = ErrorKind.UNKNOWN_FUNCTION

    def __init__(self, function):
        super().__init__(f"Unknown function: {function!r}")
        self.function = function


class DomainMismatch(CalculusError, TypeError):
    kind = ErrorKind.DOMAIN_MISMATCH


class ExpressionTooDeep(CalculusError, ValueError):
    kind = ErrorKind.EXPRESSION_TOO_DEEP

    def __init__(self, depth: int, max_depth: int):
        super().__init__(f"Expression depth {depth} exceeds limit of {max_depth}")
        self.depth = depth
        self.max_depth = max_depth


class ParseError(CalculusError, ValueError):
    kind = ErrorKind.PARSE_ERROR
