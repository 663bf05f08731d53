"""
Turning literal tokens into values.
Number literals may carry a denomination, which just scales them.
"""
from decimal import Decimal
from typing import Optional
from . import syntax
from .diagnostics import EvalError
from .values import Value, Numerics, STANDARD

DENOMINATIONS = {
	"wei": Decimal(1),
	"gwei": Decimal(10) ** 9,
	"szabo": Decimal(10) ** 12,
	"finney": Decimal(10) ** 15,
	"ether": Decimal(10) ** 18,
	"seconds": Decimal(1),
	"minutes": Decimal(60),
	"hours": Decimal(3600),
	"days": Decimal(86400),
	"weeks": Decimal(604800),
	"years": Decimal(31536000),
}

_TEXTUAL = {syntax.STRING, syntax.UNICODE_STRING, syntax.HEX_STRING}

def eval_literal(kind:str, text:str, unit:Optional[str]=None, numerics:Numerics=STANDARD) -> Value:
	if kind == syntax.BOOL:
		return text == "true"
	
	if kind in _TEXTUAL:
		return text
	
	if kind == syntax.NUMBER:
		value = numerics.demote(numerics.parse(text.replace("_", "")))
		if unit:
			try: multiplier = DENOMINATIONS[unit]
			except KeyError: raise EvalError("Unknown denomination %r" % unit) from None
			if isinstance(value, Decimal):
				return numerics.demote(numerics.context.multiply(value, multiplier))
			return value * int(multiplier)
		return value
	
	raise EvalError("Unsupported literal kind %r" % kind)

def literal_value(node:syntax.Literal, numerics:Numerics=STANDARD) -> Value:
	""" Hex strings keep their decoded text in a separate field. """
	if node.kind == syntax.HEX_STRING and node.hex_value is not None: text = node.hex_value
	else: text = node.value
	return eval_literal(node.kind, text, node.unit, numerics)
