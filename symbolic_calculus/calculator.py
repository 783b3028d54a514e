"""
Symbolic Calculator

Configured front door to the expression tree operations. Holds the numeric
domain, the unbound-variable policy and the depth limit, validates incoming
trees, and logs every operation and failure through the package logger.
"""
from typing import Dict, Iterable, Mapping, Optional, Union

import numpy as np

from .errors import CalculusError
from .expression_tree import Expression, Node, NumericDomain, ExpressionValidator
from .expression_tree.utils.evaluator import check_unbound_policy
from .logging_system import LogLevel, CalculusLogger, get_logger, configure_logging

ExpressionLike = Union[Expression, Node, str]


class SymbolicCalculator:
    """Evaluate, differentiate and simplify expressions with shared settings"""

    def __init__(self,
                 domain: Union[str, NumericDomain] = 'real',
                 unbound_policy: str = 'raise',
                 max_depth: Optional[int] = 500,
                 auto_simplify: bool = True,
                 log_level: Optional[LogLevel] = None,
                 log_to_file: bool = False,
                 log_file_path: Optional[str] = None):

        self.domain = NumericDomain.resolve(domain)
        self.unbound_policy = check_unbound_policy(unbound_policy)
        if max_depth is not None and max_depth < 1:
            raise ValueError("max_depth must be a positive integer or None")
        self.max_depth = max_depth
        self.auto_simplify = auto_simplify

        # Only replace the shared logger when asked to
        if log_level is not None or log_to_file:
            configure_logging(log_level or LogLevel.MINIMAL, log_to_file, log_file_path)
        self.logger: CalculusLogger = get_logger()

    def _prepare(self, expression: ExpressionLike) -> Expression:
        if isinstance(expression, str):
            expression = Expression.from_string(expression, self.domain)
        elif isinstance(expression, Node):
            expression = Expression(expression, self.domain)
        elif not isinstance(expression, Expression):
            raise TypeError(f"Expected Expression, Node or str, got {type(expression).__name__}")
        elif expression.domain is not self.domain:
            expression = Expression(expression.root, self.domain)

        ExpressionValidator.validate(expression.root, self.max_depth)
        return expression

    def _describe(self, expression: ExpressionLike) -> str:
        if isinstance(expression, Expression):
            expression = expression.root
        if not isinstance(expression, Node):
            return repr(expression)
        if not ExpressionValidator.is_valid_expression(expression, self.max_depth):
            return "<invalid expression>"
        return Expression(expression, self.domain).to_string()

    def parse(self, text: str) -> Expression:
        try:
            expression = self._prepare(text)
        except CalculusError as e:
            self.logger.failure("parse", repr(text), e)
            raise
        self.logger.operation("parse", repr(text), expression.to_string())
        return expression

    def evaluate(self, expression: ExpressionLike, bindings: Optional[Mapping] = None):
        try:
            expression = self._prepare(expression)
            value = expression.evaluate(bindings, self.unbound_policy)
        except CalculusError as e:
            self.logger.failure("evaluate", self._describe(expression), e)
            raise
        self.logger.operation("evaluate", expression.to_string(), str(value))
        return value

    def evaluate_batch(self, expression: ExpressionLike,
                       bindings: Optional[Mapping[str, np.ndarray]] = None) -> np.ndarray:
        try:
            expression = self._prepare(expression)
            values = expression.evaluate_batch(bindings, self.unbound_policy)
        except CalculusError as e:
            self.logger.failure("evaluate_batch", self._describe(expression), e)
            raise
        self.logger.operation("evaluate_batch", expression.to_string(), f"{values.shape[0]} samples")
        return values

    def simplify(self, expression: ExpressionLike) -> Expression:
        try:
            expression = self._prepare(expression)
            result = expression.simplify()
        except CalculusError as e:
            self.logger.failure("simplify", self._describe(expression), e)
            raise
        self.logger.operation("simplify", expression.to_string(), result.to_string())
        return result

    def differentiate(self, expression: ExpressionLike, with_respect_to: str,
                      simplify: Optional[bool] = None) -> Expression:
        """Derivative w.r.t. one variable, simplified unless disabled"""
        if simplify is None:
            simplify = self.auto_simplify
        try:
            expression = self._prepare(expression)
            result = expression.diff(with_respect_to)
            if simplify:
                result = result.simplify()
        except CalculusError as e:
            self.logger.failure(f"d/d{with_respect_to}", self._describe(expression), e)
            raise
        self.logger.operation(f"d/d{with_respect_to}", expression.to_string(), result.to_string())
        return result

    def gradient(self, expression: ExpressionLike,
                 variables: Optional[Iterable[str]] = None) -> Dict[str, Expression]:
        """Partial derivative for each variable, defaulting to every variable in the tree"""
        try:
            expression = self._prepare(expression)
        except CalculusError as e:
            self.logger.failure("gradient", self._describe(expression), e)
            raise
        if variables is None:
            variables = expression.variables()
        return {name: self.differentiate(expression, name) for name in variables}

    def to_string(self, expression: ExpressionLike, compact: bool = False) -> str:
        try:
            expression = self._prepare(expression)
        except CalculusError as e:
            self.logger.failure("to_string", self._describe(expression), e)
            raise
        if compact:
            return expression.to_compact_string()
        return expression.to_string()
