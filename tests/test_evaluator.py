from decimal import Decimal
import unittest

from constfold import syntax
from constfold.ontology import Nom
from constfold.constancy import is_constant
from constfold.evaluator import eval_constant_expr, Evaluator
from constfold.diagnostics import EvalError, NonConstantExpressionError
from constfold.values import STANDARD

def num(text, unit=None): return syntax.number(text, unit=unit)
def binary(lhs, glyph, rhs): return syntax.BinExp(lhs, Nom(glyph), rhs)
def unary(glyph, arg): return syntax.UnaryExp(Nom(glyph), arg)
def constant(name, expr): return syntax.VariableDecl(Nom(name), True, expr)
def variable(name, expr=None): return syntax.VariableDecl(Nom(name), False, expr)
def ref(decl): return syntax.Lookup(decl.nom, decl)
def call(kind, *args): return syntax.Call(syntax.Lookup(Nom("f")), list(args), kind)
def divide_by_zero(): return binary(num("1"), "/", num("0"))

TRUE = syntax.truth(Nom("true"))
FALSE = syntax.falsehood(Nom("false"))

class ScenarioTests(unittest.TestCase):
	""" The simple, obvious cases. """
	
	def test_plain_number(self):
		self.assertEqual(123, eval_constant_expr(num("123")))
	
	def test_denominated(self):
		self.assertEqual(60, eval_constant_expr(num("1", "minutes")))
	
	def test_addition(self):
		self.assertEqual(5, eval_constant_expr(binary(num("2"), "+", num("3"))))
	
	def test_thirds(self):
		it = eval_constant_expr(binary(num("1"), "/", num("3")))
		self.assertIsInstance(it, Decimal)
		self.assertEqual(STANDARD.context.divide(Decimal(1), Decimal(3)), it)
	
	def test_unselected_branch_never_evaluates(self):
		expr = syntax.Cond(TRUE, num("1"), divide_by_zero())
		self.assertEqual(1, eval_constant_expr(expr))
		expr = syntax.Cond(FALSE, divide_by_zero(), num("2"))
		self.assertEqual(2, eval_constant_expr(expr))
	
	def test_not(self):
		self.assertIs(False, eval_constant_expr(unary("!", TRUE)))
		self.assertRaises(EvalError, eval_constant_expr, unary("!", num("1")))
	
	def test_deterministic(self):
		for lit in [num("7"), num("2.5"), num("3", "days"), TRUE, syntax.Literal(syntax.STRING, "hi")]:
			with self.subTest(str(lit)):
				self.assertEqual(eval_constant_expr(lit), eval_constant_expr(lit))

class ShapeTests(unittest.TestCase):
	
	def test_parentheses(self):
		expr = binary(syntax.parenthesized(binary(num("2"), "+", num("3"))), "*", num("4"))
		self.assertEqual(20, eval_constant_expr(expr))
	
	def test_constant_reference(self):
		interval = constant("INTERVAL", num("5", "minutes"))
		double = constant("DOUBLE", binary(ref(interval), "*", num("2")))
		self.assertEqual(600, eval_constant_expr(ref(double)))
	
	def test_shared_reference(self):
		one = constant("ONE", num("1"))
		self.assertEqual(2, eval_constant_expr(binary(ref(one), "+", ref(one))))
	
	def test_conversion_keeps_value(self):
		# No truncation to the width of uint8.
		expr = syntax.conversion(Nom("uint8"), num("300"))
		self.assertEqual(300, eval_constant_expr(expr))
	
	def test_mixed_arithmetic(self):
		expr = binary(binary(num("1.5"), "*", num("2")), "+", unary("-", num("0.5")))
		self.assertEqual(Decimal("2.5"), eval_constant_expr(expr))
	
	def test_comparison_and_logic(self):
		expr = binary(
			binary(num("1", "hours"), "==", num("60", "minutes")),
			"&&",
			binary(num("1", "gwei"), "<", num("1", "ether")),
		)
		self.assertIs(True, eval_constant_expr(expr))
	
	def test_condition_must_be_boolean(self):
		expr = syntax.Cond(num("1"), num("2"), num("3"))
		with self.assertRaises(EvalError) as cm:
			eval_constant_expr(expr)
		self.assertIs(expr, cm.exception.expr)

class BlameTests(unittest.TestCase):
	""" Errors should blame the innermost expression that went wrong. """
	
	def test_innermost_binary(self):
		inner = divide_by_zero()
		outer = binary(num("2"), "+", inner)
		with self.assertRaises(EvalError) as cm:
			eval_constant_expr(outer)
		self.assertIs(inner, cm.exception.expr)
	
	def test_literal_with_bad_unit(self):
		bad = num("1", "fortnights")
		with self.assertRaises(EvalError) as cm:
			eval_constant_expr(binary(num("1"), "+", bad))
		self.assertIs(bad, cm.exception.expr)
	
	def test_unary(self):
		expr = unary("~", num("1.5"))
		with self.assertRaises(EvalError) as cm:
			eval_constant_expr(syntax.parenthesized(expr))
		self.assertIs(expr, cm.exception.expr)
	
	def test_through_declarations(self):
		inner = divide_by_zero()
		decl = constant("BROKEN", inner)
		with self.assertRaises(EvalError) as cm:
			eval_constant_expr(binary(ref(decl), "+", num("1")))
		self.assertIs(inner, cm.exception.expr)
	
	def test_negative_shift(self):
		expr = binary(num("1"), "<<", unary("-", num("1")))
		with self.assertRaises(EvalError) as cm:
			eval_constant_expr(expr)
		self.assertIs(expr, cm.exception.expr)
	
	def test_blame_once(self):
		ex = EvalError("whatever")
		first = ex.at(TRUE)
		self.assertIsNot(ex, first)
		self.assertIsNone(ex.expr)
		self.assertIs(first, first.at(FALSE))
		self.assertIs(TRUE, first.expr)
	
	def test_unknown_shape(self):
		nom = Nom("x")
		with self.assertRaises(EvalError) as cm:
			Evaluator().evaluate(nom)
		self.assertIs(nom, cm.exception.expr)

class ConstancyTests(unittest.TestCase):
	
	def test_constant_shapes(self):
		one = constant("ONE", num("1"))
		for expr in [
			num("1"),
			unary("-", num("1")),
			binary(num("1"), "<=>", num("2")),
			syntax.parenthesized(num("1")),
			syntax.Cond(TRUE, num("1"), num("2")),
			ref(one),
			syntax.conversion(Nom("uint256"), ref(one)),
		]:
			with self.subTest(str(expr)):
				self.assertTrue(is_constant(expr))
	
	def test_non_constant_shapes(self):
		mutable = variable("counter", num("1"))
		uninitialized = syntax.VariableDecl(Nom("LATER"), True, None)
		paren = Nom("(")
		for expr in [
			ref(mutable),
			ref(uninitialized),
			syntax.Lookup(Nom("nowhere")),
			unary("-", ref(mutable)),
			binary(num("1"), "+", ref(mutable)),
			syntax.TupleExp(paren, [num("1"), num("2")], Nom(")")),
			syntax.TupleExp(paren, [None], Nom(")")),
			syntax.TupleExp(Nom("["), [num("1")], Nom("]"), is_inline_array=True),
			syntax.Cond(TRUE, num("1"), ref(mutable)),
			syntax.Cond(ref(mutable), num("1"), num("2")),
			call(syntax.FUNCTION_CALL, num("1")),
			call(syntax.STRUCT_CONSTRUCTOR_CALL, num("1")),
			call(syntax.TYPE_CONVERSION),
			syntax.conversion(Nom("uint8"), ref(mutable)),
		]:
			with self.subTest(str(expr)):
				self.assertFalse(is_constant(expr))
				with self.assertRaises(NonConstantExpressionError) as cm:
					eval_constant_expr(expr)
				self.assertIs(expr, cm.exception.expr)
	
	def test_total_over_anything(self):
		for bogon in [None, 42, "1 + 1", object(), Nom("x"), variable("v")]:
			with self.subTest(repr(bogon)):
				self.assertFalse(is_constant(bogon))
				self.assertRaises(NonConstantExpressionError, eval_constant_expr, bogon)
	
	def test_too_deep_to_print(self):
		expr = num("1")
		for _ in range(3000):
			expr = unary("-", expr)
		self.assertFalse(is_constant(expr))
		with self.assertRaises(NonConstantExpressionError) as cm:
			eval_constant_expr(expr)
		self.assertIs(expr, cm.exception.expr)
		self.assertIn("UnaryExp", cm.exception.message)
	
	def test_cycle(self):
		a = constant("A", None)
		b = constant("B", ref(a))
		a.expr = binary(ref(b), "+", num("1"))
		self.assertFalse(is_constant(ref(a)))
		self.assertRaises(NonConstantExpressionError, eval_constant_expr, ref(b))
	
	def test_self_reference(self):
		a = constant("A", None)
		a.expr = ref(a)
		self.assertFalse(is_constant(ref(a)))
	
	def test_depth_limit(self):
		expr = num("1")
		for _ in range(10):
			expr = unary("-", expr)
		self.assertTrue(is_constant(expr))
		self.assertFalse(is_constant(expr, max_depth=5))
		self.assertEqual(1, eval_constant_expr(expr))


if __name__ == '__main__':
	unittest.main()
