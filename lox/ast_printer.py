"""
Render syntax trees as parenthesized prefix text, e.g. "(+ 1 (* 2 3))".
Handy for checking what the parser thought it saw.
"""
from typing import Sequence
from boozetools.support.foundation import Visitor
from . import syntax
from .ontology import Statement
from .tree_walker.runtime import stringify

class AstPrinter(Visitor):
	
	def print_program(self, statements:Sequence[Statement]) -> str:
		return "\n".join(self.visit(s) for s in statements)
	
	def _parenthesize(self, name:str, *parts) -> str:
		words = [name]
		for p in parts:
			words.append(p if isinstance(p, str) else self.visit(p))
		return "(%s)" % " ".join(words)
	
	def visit_Literal(self, expr:syntax.Literal):
		if isinstance(expr.value, str): return '"%s"' % expr.value
		return stringify(expr.value)
	
	def visit_Grouping(self, expr:syntax.Grouping):
		return self._parenthesize("group", expr.inner)
	
	def visit_UnaryExp(self, expr:syntax.UnaryExp):
		return self._parenthesize(expr.op.text, expr.arg)
	
	def visit_BinExp(self, expr:syntax.BinExp):
		return self._parenthesize(expr.op.text, expr.lhs, expr.rhs)
	
	def visit_ShortCutExp(self, expr:syntax.ShortCutExp):
		return self._parenthesize(expr.op.text, expr.lhs, expr.rhs)
	
	def visit_Lookup(self, expr:syntax.Lookup):
		return expr.name.text
	
	def visit_Assign(self, expr:syntax.Assign):
		return self._parenthesize("=", expr.name.text, expr.value)
	
	def visit_Call(self, expr:syntax.Call):
		return self._parenthesize("call", expr.fn_exp, *expr.args)
	
	def visit_FieldReference(self, expr:syntax.FieldReference):
		return self._parenthesize(".", expr.lhs, expr.field_name.text)
	
	def visit_AssignField(self, expr:syntax.AssignField):
		target = self._parenthesize(".", expr.lhs, expr.field_name.text)
		return self._parenthesize("=", target, expr.value)
	
	def visit_ThisRef(self, expr:syntax.ThisRef):
		return "this"
	
	def visit_SuperRef(self, expr:syntax.SuperRef):
		return self._parenthesize("super", expr.method_name.text)
	
	# Statements:
	
	def visit_ExprStmt(self, stmt:syntax.ExprStmt):
		return self._parenthesize(";", stmt.expr)
	
	def visit_PrintStmt(self, stmt:syntax.PrintStmt):
		return self._parenthesize("print", stmt.expr)
	
	def visit_VarDecl(self, stmt:syntax.VarDecl):
		if stmt.initializer is None: return self._parenthesize("var", stmt.name.text)
		return self._parenthesize("var", stmt.name.text, stmt.initializer)
	
	def visit_Block(self, stmt:syntax.Block):
		return self._parenthesize("block", *stmt.statements)
	
	def visit_IfStmt(self, stmt:syntax.IfStmt):
		if stmt.else_part is None:
			return self._parenthesize("if", stmt.condition, stmt.then_part)
		return self._parenthesize("if-else", stmt.condition, stmt.then_part, stmt.else_part)
	
	def visit_WhileStmt(self, stmt:syntax.WhileStmt):
		return self._parenthesize("while", stmt.condition, stmt.body)
	
	def visit_FunctionDecl(self, stmt:syntax.FunctionDecl):
		params = "(%s)" % " ".join(p.text for p in stmt.params)
		return self._parenthesize("fun", stmt.name.text, params, *stmt.body)
	
	def visit_ReturnStmt(self, stmt:syntax.ReturnStmt):
		if stmt.value is None: return "(return)"
		return self._parenthesize("return", stmt.value)
	
	def visit_ClassDecl(self, stmt:syntax.ClassDecl):
		head = [stmt.name.text]
		if stmt.superclass is not None: head += ["<", stmt.superclass.name.text]
		return self._parenthesize("class", *head, *stmt.methods)
