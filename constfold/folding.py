"""
Fold every constant declaration in a batch, reporting what can't be folded.
One bad initializer does not stop the rest.
"""
from typing import Iterable
from . import syntax
from .constancy import is_constant
from .diagnostics import Report, EvalError
from .evaluator import Evaluator
from .values import Value, Numerics, STANDARD, render

def fold_constants(declarations:Iterable[syntax.VariableDecl], report:Report, numerics:Numerics=STANDARD) -> dict[syntax.VariableDecl, Value]:
	evaluator = Evaluator(numerics)
	folded = {}
	for decl in declarations:
		if not (decl.is_constant and decl.expr is not None): continue
		if not is_constant(decl.expr):
			report.not_constant(decl)
			continue
		try: value = evaluator.evaluate(decl.expr)
		except EvalError as ex:
			report.failed_evaluation(decl, ex)
		else:
			report.info("Folded", decl.nom.text, "=", render(value))
			folded[decl] = value
	return folded
