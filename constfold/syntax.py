"""
The set of expression nodes the evaluator knows how to read.
Whatever front-end builds the tree calls these constructors bottom-up.
Class-level type annotations mark the fields a resolver fills in later.
"""
from typing import Optional, Sequence
from .ontology import ValueExpression, Nom, TermSymbol

# Literal kinds, named as the compiler's AST names them.
BOOL = "bool"
NUMBER = "number"
STRING = "string"
UNICODE_STRING = "unicodeString"
HEX_STRING = "hexString"

# Kinds of function-call expression.
FUNCTION_CALL = "functionCall"
TYPE_CONVERSION = "typeConversion"
STRUCT_CONSTRUCTOR_CALL = "structConstructorCall"

_QUOTE_PREFIX = {STRING: "", UNICODE_STRING: "unicode", HEX_STRING: "hex"}

class VariableDecl(TermSymbol):
	"""
	Only the bits of a variable declaration that matter for
	constant evaluation: whether it is declared `constant`,
	and the initializer expression if there is one.
	"""
	def __init__(self, nom:Nom, is_constant:bool, expr:Optional[ValueExpression]):
		super().__init__(nom)
		self.is_constant = is_constant
		self.expr = expr
	def __repr__(self):
		return "{%s%s}" % ("constant " if self.is_constant else "", self.nom.text)
	def right(self): return (self.expr or self.nom).right()

class Literal(ValueExpression):
	def __init__(self, kind:str, value:str, spot:int=None, hex_value:str=None, unit:Optional[str]=None):
		assert isinstance(spot, int) or spot is None, type(spot)
		self.kind, self.value, self._spot = kind, value, spot or 0
		self.hex_value = hex_value
		self.unit = unit
	
	def __str__(self):
		if self.kind in _QUOTE_PREFIX:
			return '%s"%s"' % (_QUOTE_PREFIX[self.kind], self.value)
		if self.unit:
			return "%s %s" % (self.value, self.unit)
		return self.value
	def left(self): return self._spot
	def right(self): return self._spot

def truth(token:Nom): return Literal(BOOL, "true", token.spot)
def falsehood(token:Nom): return Literal(BOOL, "false", token.spot)

def number(text:str, spot:int=None, unit:Optional[str]=None):
	return Literal(NUMBER, text, spot, unit=unit)

class Lookup(ValueExpression):
	""" A name in value context. The resolver points `dfn` at whatever it means. """
	nom: Nom
	dfn: Optional[TermSymbol]  # Resolution fills this in.
	def __init__(self, nom:Nom, dfn:Optional[TermSymbol]=None):
		self.nom, self.dfn = nom, dfn
	def __str__(self): return self.nom.text
	def left(self): return self.nom.left()
	def right(self): return self.nom.right()

class BinExp(ValueExpression):
	def __init__(self, lhs: ValueExpression, op:Nom, rhs: ValueExpression):
		self.lhs, self.op, self.rhs = lhs, op, rhs
	def __str__(self): return "%s %s %s" % (self.lhs, self.op.text, self.rhs)
	def left(self): return self.lhs.left()
	def right(self): return self.rhs.right()

class UnaryExp(ValueExpression):
	def __init__(self, op:Nom, arg: ValueExpression):
		self.op, self.arg = op, arg
	def __str__(self): return "%s%s" % (self.op.text, self.arg)
	def left(self): return self.op.left()
	def right(self): return self.arg.right()

class TupleExp(ValueExpression):
	"""
	Parentheses, tuples, and inline arrays all come out of the parser as this.
	Components may be absent, as in `(a, )`.
	"""
	def __init__(self, _open:Nom, components:Sequence[Optional[ValueExpression]], _close:Nom, is_inline_array=False):
		self._open, self._close = _open, _close
		self.components = components
		self.is_inline_array = is_inline_array
	def __str__(self):
		inner = ", ".join("" if c is None else str(c) for c in self.components)
		return ("[%s]" if self.is_inline_array else "(%s)") % inner
	def left(self): return self._open.left()
	def right(self): return self._close.right()

def parenthesized(expr:ValueExpression):
	return TupleExp(Nom("(", expr.left()), [expr], Nom(")", expr.right()))

class Cond(ValueExpression):
	def __init__(self, if_part: ValueExpression, then_part: ValueExpression, else_part: ValueExpression):
		self.if_part, self.then_part, self.else_part = if_part, then_part, else_part
	def __str__(self): return "%s ? %s : %s" % (self.if_part, self.then_part, self.else_part)
	def left(self): return self.if_part.left()
	def right(self): return self.else_part.right()

class Call(ValueExpression):
	"""
	The kind says whether this calls a function, converts a type, or builds a struct.
	For a type conversion, fn_exp names the target type.
	"""
	def __init__(self, fn_exp: ValueExpression, args: list[ValueExpression], kind:str=FUNCTION_CALL):
		self.fn_exp, self.args, self.kind = fn_exp, args, kind
	
	def __str__(self):
		return "%s(%s)" % (self.fn_exp, ', '.join(map(str, self.args)))
	
	def left(self): return self.fn_exp.left()
	def right(self): return (self.args[-1] if self.args else self.fn_exp).right()

def conversion(type_name:Nom, arg:ValueExpression):
	return Call(Lookup(type_name), [arg], TYPE_CONVERSION)
