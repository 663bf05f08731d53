"""
Evaluate constant expressions down to values.

The classifier in `constancy` is authoritative about what may enter here.
Past that gate, this just walks the tree, delegating literals and operators.

Errors pick up the innermost expression they can: every node's evaluation
passes through `Evaluator.evaluate`, which gives an error that blames nothing
a fresh copy blaming the node at hand. So the first frame to see it wins.
"""
from boozetools.support.foundation import Visitor
from . import syntax
from .constancy import is_constant
from .diagnostics import EvalError, NonConstantExpressionError
from .literals import literal_value
from .operators import eval_unary, eval_binary
from .values import Value, Numerics, STANDARD, render

class Evaluator(Visitor):
	def __init__(self, numerics:Numerics=STANDARD):
		self._numerics = numerics
	
	def evaluate(self, expr) -> Value:
		try: return self.visit(expr)
		except EvalError as ex:
			if ex.expr is not None: raise
			raise ex.at(expr) from ex
	
	def visit_object(self, it):
		# Reaching here means the classifier let through something it should not have.
		raise EvalError("Unable to evaluate constant expression %s" % it, it)
	
	def visit_Literal(self, expr:syntax.Literal):
		return literal_value(expr, self._numerics)
	
	def visit_UnaryExp(self, expr:syntax.UnaryExp):
		return eval_unary(expr.op.text, self.evaluate(expr.arg))
	
	def visit_BinExp(self, expr:syntax.BinExp):
		lhs = self.evaluate(expr.lhs)
		rhs = self.evaluate(expr.rhs)
		return eval_binary(expr.op.text, lhs, rhs, self._numerics)
	
	def visit_TupleExp(self, expr:syntax.TupleExp):
		return self.evaluate(expr.components[0])
	
	def visit_Cond(self, expr:syntax.Cond):
		test = self.evaluate(expr.if_part)
		if not isinstance(test, bool):
			raise EvalError("Expected condition %s to be a boolean" % render(test))
		# Only the selected branch gets evaluated.
		return self.evaluate(expr.then_part if test else expr.else_part)
	
	def visit_Lookup(self, expr:syntax.Lookup):
		decl = expr.dfn
		if isinstance(decl, syntax.VariableDecl) and decl.expr is not None:
			return self.evaluate(decl.expr)
		return self.visit_object(expr)
	
	def visit_Call(self, expr:syntax.Call):
		if expr.kind != syntax.TYPE_CONVERSION:
			return self.visit_object(expr)
		# The value passes through untouched: no truncation to the
		# width or signedness of the target type happens here.
		return self.evaluate(expr.args[0])

def eval_constant_expr(expr, numerics:Numerics=STANDARD) -> Value:
	"""
	Given a constant expression, evaluate it to a concrete value.
	Raises NonConstantExpressionError if `expr` is not constant,
	or else EvalError blaming the innermost expression that went wrong.
	
	TODO: Evaluation order of some operators changed between compiler
	versions. Taking a compiler version here would let us follow each one.
	"""
	if not is_constant(expr):
		raise NonConstantExpressionError.about(expr)
	return Evaluator(numerics).evaluate(expr)
