"""
These most-fundamental classes in the syntax class hierarchy
are separate from the rest to avoid various circular-import
scenarios. Tokens and tree nodes alike are phrases: things
the diagnostics can point at.
"""

class Phrase:
	def left(self) -> int:
		""" Return the spot of the leftmost token of this phrase """
		raise NotImplementedError(type(self))
	def right(self) -> int:
		""" Return the spot of the rightmost token of this phrase """
		raise NotImplementedError(type(self))
	def span(self) -> tuple[int, int]: return self.left(), self.right()

class Token(Phrase):
	"""
	One lexeme of source text. The kind is an interned string:
	punctuation is its own kind, reserved words are upper-cased,
	and everything else is "name", "number", "string", or "<END>".
	"""
	__slots__ = ("kind", "text", "literal", "line", "spot")
	
	def __init__(self, kind:str, text:str, literal, line:int, spot:int):
		self.kind, self.text, self.literal, self.line, self.spot = kind, text, literal, line, spot
	def __repr__(self): return "<%s %r line %d>" % (self.kind, self.text, self.line)
	def left(self): return self.spot
	def right(self): return self.spot

class ValueExpression(Phrase):
	""" Expressions get hashed by identity: the resolver's side-table depends on it. """

class Statement:
	pass
