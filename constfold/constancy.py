"""
Which expressions are constant?
This is pure structural recursion: nothing gets evaluated here.
It answers for any object at all, saying False to anything it does not recognize.

Binary operators are not checked. An operator that cannot apply to
its operands shows up as an evaluation error, not as non-constancy.

Conditionals need all three parts constant, even though evaluation
only ever looks at one branch. That's conservative, but it's also what
the type system of the source language says.
"""
from boozetools.support.foundation import Visitor
from . import syntax

MAX_DEPTH = 150

class Constancy(Visitor):
	"""
	Also keeps track of which declarations are in the middle of a check,
	so a cycle among initializers comes out non-constant rather than looping.
	"""
	def __init__(self, max_depth:int=MAX_DEPTH):
		self._max_depth = max_depth
		self._pending = set()
	
	def check(self, expr, depth:int) -> bool:
		if expr is None or depth > self._max_depth: return False
		return self.visit(expr, depth + 1)
	
	def visit_object(self, it, depth): return False
	
	def visit_Literal(self, expr:syntax.Literal, depth): return True
	
	def visit_UnaryExp(self, expr:syntax.UnaryExp, depth):
		return self.check(expr.arg, depth)
	
	def visit_BinExp(self, expr:syntax.BinExp, depth):
		return self.check(expr.lhs, depth) and self.check(expr.rhs, depth)
	
	def visit_TupleExp(self, expr:syntax.TupleExp, depth):
		if expr.is_inline_array or len(expr.components) != 1: return False
		return self.check(expr.components[0], depth)
	
	def visit_Cond(self, expr:syntax.Cond, depth):
		return all(self.check(x, depth) for x in (expr.if_part, expr.then_part, expr.else_part))
	
	def visit_Lookup(self, expr:syntax.Lookup, depth):
		decl = expr.dfn
		if not isinstance(decl, syntax.VariableDecl) or not decl.is_constant: return False
		if decl in self._pending: return False
		self._pending.add(decl)
		try: return self.check(decl.expr, depth)
		finally: self._pending.remove(decl)
	
	def visit_Call(self, expr:syntax.Call, depth):
		if expr.kind != syntax.TYPE_CONVERSION or not expr.args: return False
		return self.check(expr.args[0], depth)

def is_constant(expr, max_depth:int=MAX_DEPTH) -> bool:
	return Constancy(max_depth).check(expr, 0)
