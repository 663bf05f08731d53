"""
What a constant expression can evaluate to, and the numeric model behind it.

Rational constants in the source language behave like arbitrary-precision
decimals that collapse to integers whenever they happen to be whole.
Python's own int and decimal.Decimal cover that neatly, given a context
with enough precision. The context lives in a Numerics object which gets
passed around explicitly, so nobody ever touches the thread-local decimal context.
"""
from decimal import Decimal, Context, ROUND_HALF_UP, InvalidOperation
from typing import Union
from .diagnostics import EvalError

Value = Union[int, Decimal, bool, str]

class Numerics:
	"""
	The numeric-precision configuration.
	Build one at start-up and hand it to whatever needs it.
	Nothing here changes after construction.
	"""
	def __init__(self, precision:int=100):
		assert precision > 0, precision
		self.precision = precision
		self.context = Context(prec=precision, rounding=ROUND_HALF_UP)
	
	def __repr__(self): return "<Numerics prec=%d>" % self.precision
	
	def promote(self, value:Value) -> Decimal:
		if isinstance(value, Decimal): return value
		if isinstance(value, int) and not isinstance(value, bool):
			return Decimal(value)
		raise EvalError("Expected a number, not %s %s" % (type_name(value), render(value)))
	
	def demote(self, d:Decimal) -> Union[int, Decimal]:
		return int(d) if d == d.to_integral_value(context=self.context) else d
	
	def parse(self, text:str) -> Decimal:
		""" The text of a number literal, with any digit-separators already gone. """
		if text[:2].lower() == "0x":
			try: return Decimal(int(text[2:], 16))
			except ValueError: pass
		else:
			try: d = Decimal(text)
			except InvalidOperation: pass
			else:
				if d.is_finite(): return d
		raise EvalError("Malformed number %r" % text)

STANDARD = Numerics()

def is_integer(value:Value) -> bool:
	return isinstance(value, int) and not isinstance(value, bool)

def is_number(value:Value) -> bool:
	return is_integer(value) or isinstance(value, Decimal)

def type_name(value:Value) -> str:
	if isinstance(value, bool): return "boolean"
	if isinstance(value, int): return "integer"
	if isinstance(value, Decimal): return "decimal"
	if isinstance(value, str): return "string"
	return type(value).__name__

def render(value:Value) -> str:
	""" For messages, spelled the way the source language would spell it. """
	if isinstance(value, bool): return "true" if value else "false"
	if isinstance(value, str): return '"%s"' % value
	return str(value)
