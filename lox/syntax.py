"""
The set of parse-nodes in simple form.
The parser calls these constructors with subordinate semantic-values in a top-down recursive descent.
Class-level type annotations make peace with pycharm.

Nodes are not modified after parsing. The resolver keeps its findings in a side-table
keyed on the (identity of the) expression nodes; see resolution.py.
"""
from pathlib import Path
from typing import Optional, Sequence, Union
from .ontology import Token, ValueExpression, Statement

class Literal(ValueExpression):
	def __init__(self, value, token:Token):
		self.value, self.token = value, token
	def left(self): return self.token.left()
	def right(self): return self.token.right()
	def __repr__(self): return "<literal %r>" % (self.value,)

class Grouping(ValueExpression):
	def __init__(self, inner:ValueExpression, opening:Token, closing:Token):
		self.inner, self._opening, self._closing = inner, opening, closing
	def left(self): return self._opening.left()
	def right(self): return self._closing.right()

class UnaryExp(ValueExpression):
	def __init__(self, op:Token, arg:ValueExpression):
		self.op, self.arg = op, arg
	def left(self): return self.op.left()
	def right(self): return self.arg.right()

class BinExp(ValueExpression):
	def __init__(self, lhs:ValueExpression, op:Token, rhs:ValueExpression):
		self.lhs, self.op, self.rhs = lhs, op, rhs
	def left(self): return self.lhs.left()
	def right(self): return self.rhs.right()

class ShortCutExp(BinExp):
	""" The "and" and "or" operators, which need not evaluate the right-hand side. """

class Lookup(ValueExpression):
	def __init__(self, name:Token):
		self.name = name
	def left(self): return self.name.left()
	def right(self): return self.name.right()
	def __repr__(self): return "<lookup %s>" % self.name.text

class Assign(ValueExpression):
	def __init__(self, name:Token, value:ValueExpression):
		self.name, self.value = name, value
	def left(self): return self.name.left()
	def right(self): return self.value.right()

class Call(ValueExpression):
	def __init__(self, fn_exp:ValueExpression, paren:Token, args:Sequence[ValueExpression]):
		# The paren is the closing one: run-time errors point there.
		self.fn_exp, self.paren, self.args = fn_exp, paren, args
	def left(self): return self.fn_exp.left()
	def right(self): return self.paren.right()

class FieldReference(ValueExpression):
	def __init__(self, lhs:ValueExpression, field_name:Token):
		self.lhs, self.field_name = lhs, field_name
	def left(self): return self.lhs.left()
	def right(self): return self.field_name.right()

class AssignField(ValueExpression):
	def __init__(self, lhs:ValueExpression, field_name:Token, value:ValueExpression):
		self.lhs, self.field_name, self.value = lhs, field_name, value
	def left(self): return self.lhs.left()
	def right(self): return self.value.right()

class ThisRef(ValueExpression):
	def __init__(self, keyword:Token):
		self.keyword = keyword
	def left(self): return self.keyword.left()
	def right(self): return self.keyword.right()

class SuperRef(ValueExpression):
	def __init__(self, keyword:Token, method_name:Token):
		self.keyword, self.method_name = keyword, method_name
	def left(self): return self.keyword.left()
	def right(self): return self.method_name.right()

###############################################################################

class ExprStmt(Statement):
	def __init__(self, expr:ValueExpression):
		self.expr = expr

class PrintStmt(Statement):
	def __init__(self, keyword:Token, expr:ValueExpression):
		self.keyword, self.expr = keyword, expr

class VarDecl(Statement):
	def __init__(self, name:Token, initializer:Optional[ValueExpression]):
		self.name, self.initializer = name, initializer

class Block(Statement):
	def __init__(self, statements:Sequence[Statement]):
		self.statements = statements

class IfStmt(Statement):
	def __init__(self, condition:ValueExpression, then_part:Statement, else_part:Optional[Statement]):
		self.condition, self.then_part, self.else_part = condition, then_part, else_part

class WhileStmt(Statement):
	""" The parser also makes these out of "for" loops. """
	def __init__(self, condition:ValueExpression, body:Statement):
		self.condition, self.body = condition, body

class FunctionDecl(Statement):
	def __init__(self, name:Token, params:Sequence[Token], body:Sequence[Statement]):
		self.name, self.params, self.body = name, params, body
	def __repr__(self): return "<fun %s/%d>" % (self.name.text, len(self.params))

class ReturnStmt(Statement):
	def __init__(self, keyword:Token, value:Optional[ValueExpression]):
		self.keyword, self.value = keyword, value

class ClassDecl(Statement):
	def __init__(self, name:Token, superclass:Optional[Lookup], methods:Sequence[FunctionDecl]):
		self.name, self.superclass, self.methods = name, superclass, methods
	def __repr__(self): return "<class %s>" % self.name.text

class Program:
	source_path: Optional[Path]
	def __init__(self, statements:list[Statement], source_path:Optional[Path]):
		self.statements = statements
		self.source_path = source_path

REFERENCE = Union[Lookup, Assign, ThisRef, SuperRef]
