"""
These most-fundamental classes in the syntax class hierarchy
are separate from the rest to avoid various circular-import
scenarios. The concrete node types have fields that get filled
in during the name-resolution pass, which belongs to whoever
builds the tree. The evaluator only reads them.
"""

class Phrase:
	def left(self) -> int:
		""" Return the index of the leftmost token of this phrase """
		raise NotImplementedError(type(self))
	def right(self) -> int:
		""" Return the index of the rightmost token of this phrase """
		raise NotImplementedError(type(self))
	def span(self) -> tuple[int, int]: return self.left(), self.right()

class Nom(Phrase):
	""" Representing the occurrence of a name, or an operator glyph, anywhere. """
	spot: int  # zero-spot means no particular location.
	def __init__(self, text, spot=None):
		assert isinstance(text, str)
		assert isinstance(spot, int) or spot is None, type(spot)
		self.text, self.spot = text, spot or 0
	def __repr__(self): return "<Name %r>" % self.text
	def __str__(self): return self.text
	def left(self): return self.spot
	def right(self): return self.spot

class Symbol(Phrase):
	"""
	Any named-and-defined thing that a reference may resolve to.
	For our purposes, that mostly means variable declarations.
	"""
	nom: Nom

	def __init__(self, nom:Nom): self.nom = nom
	def __repr__(self): return "{%s:%s}" % (self.nom.text, type(self).__name__)
	
	def left(self): return self.nom.left()
	def right(self): return self.nom.right()

class TermSymbol(Symbol): pass

class ValueExpression(Phrase): pass
