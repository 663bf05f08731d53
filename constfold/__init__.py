"""
Compile-time evaluation of constant expressions.

Most callers want `is_constant` and `eval_constant_expr`,
or `fold_constants` to do a whole batch of declarations at once.
"""
from .diagnostics import EvalError, NonConstantExpressionError, Report
from .values import Numerics, STANDARD, Value
from .constancy import is_constant
from .evaluator import eval_constant_expr
from .folding import fold_constants
