"""
Unary and binary operators over constant values.

Binary operators come in five fixed groups. The group decides which
operand types are acceptable before the particular operator gets a look:
	Logical and bitwise operators take their operands as they are.
	Equality compares without promotion, and refuses strings.
	Comparison and arithmetic promote both sides to decimal first.
Arithmetic results get demoted back to integer whenever they come out whole.

Deliberately, division, modulo and exponentiation follow decimal semantics
rather than the truncating integer rules of the run-time.
"""
import operator
from decimal import Decimal, Context, DecimalException
from .diagnostics import EvalError
from .values import Value, Numerics, STANDARD, is_integer, is_number, render

def _negate(value):
	return value.copy_negate() if isinstance(value, Decimal) else -value

def _is_flag(value): return isinstance(value, bool)

UNARY = {
	"!" : (_is_flag, operator.not_, "a boolean"),
	"~" : (is_integer, operator.invert, "an integer"),
	"+" : (is_number, lambda v: v, "an integer or a decimal"),
	"-" : (is_number, _negate, "an integer or a decimal"),
}

LOGICAL = {
	"&&": lambda a, b: a and b,
	"||": lambda a, b: a or b,
}

# Maps each operator to its answer when the operands are equal.
EQUALITY = {
	"==": True,
	"!=": False,
}

COMPARISON = {
	"<" : operator.lt,
	"<=": operator.le,
	">" : operator.gt,
	">=": operator.ge,
}

ARITHMETIC = {
	"+" : Context.add,
	"-" : Context.subtract,
	"*" : Context.multiply,
	"/" : Context.divide,
	"%" : Context.remainder,
	"**": Context.power,
}

BITWISE = {
	"<<": operator.lshift,
	">>": operator.rshift,
	"|" : operator.or_,
	"&" : operator.and_,
	"^" : operator.xor,
}

# Left shifts beyond this many bits are refused rather than exhausting memory.
MAX_SHIFT = 2 ** 16

BINARY_OPERATOR_GROUPS = {
	"Logical": LOGICAL,
	"Equality": EQUALITY,
	"Comparison": COMPARISON,
	"Arithmetic": ARITHMETIC,
	"Bitwise": BITWISE,
}

def operator_group(op:str):
	""" Name of the group a binary operator belongs to, or None. """
	for name, group in BINARY_OPERATOR_GROUPS.items():
		if op in group: return name

def eval_unary(op:str, value:Value) -> Value:
	try: suitable, fn, expectation = UNARY[op]
	except KeyError: raise EvalError("Unable to process %s%s" % (op, render(value))) from None
	if suitable(value):
		return fn(value)
	raise EvalError("Expected %s to be %s" % (render(value), expectation))

def eval_binary(op:str, lhs:Value, rhs:Value, numerics:Numerics=STANDARD) -> Value:
	if op in LOGICAL:
		if not (isinstance(lhs, bool) and isinstance(rhs, bool)):
			raise EvalError("%s expects booleans, not %s and %s" % (op, render(lhs), render(rhs)))
		return LOGICAL[op](lhs, rhs)
	
	if op in EQUALITY:
		if isinstance(lhs, str) or isinstance(rhs, str):
			raise EvalError("%s not allowed for strings %s and %s" % (op, render(lhs), render(rhs)))
		if isinstance(lhs, Decimal) and isinstance(rhs, Decimal):
			same = lhs == rhs
		else:
			same = type(lhs) is type(rhs) and lhs == rhs
		return same == EQUALITY[op]
	
	if op in COMPARISON:
		return COMPARISON[op](numerics.promote(lhs), numerics.promote(rhs))
	
	if op in ARITHMETIC:
		return _arithmetic(op, numerics.promote(lhs), numerics.promote(rhs), numerics)
	
	if op in BITWISE:
		if not (is_integer(lhs) and is_integer(rhs)):
			raise EvalError("%s expects integers, not %s and %s" % (op, render(lhs), render(rhs)))
		if op in ("<<", ">>") and rhs < 0:
			raise EvalError("Negative shift amount %d" % rhs)
		if op == "<<" and rhs > MAX_SHIFT:
			raise EvalError("Shift amount too large: %d" % rhs)
		if op == ">>" and rhs > lhs.bit_length():
			return -1 if lhs < 0 else 0
		return BITWISE[op](lhs, rhs)
	
	raise EvalError("Unable to process %s %s %s" % (render(lhs), op, render(rhs)))

def _arithmetic(op:str, a:Decimal, b:Decimal, numerics:Numerics):
	if op in ("/", "%") and b.is_zero():
		raise EvalError("Division by zero in %s %s %s" % (a, op, b))
	if op == "**" and a.is_zero() and b.is_zero():
		return 1
	context = numerics.context
	if op == "%":
		# The remainder needs the whole integer quotient, however long.
		context = context.copy()
		context.prec = max(context.prec, a.adjusted() - b.adjusted() + 1 + numerics.precision)
	try: result = ARITHMETIC[op](context, a, b)
	except DecimalException as ex:
		raise EvalError("Cannot compute %s %s %s (%s)" % (a, op, b, type(ex).__name__)) from ex
	if not result.is_finite():
		raise EvalError("Cannot compute %s %s %s (not finite)" % (a, op, b))
	return numerics.demote(result)
