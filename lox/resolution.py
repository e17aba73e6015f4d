"""
All the variable-resolution stuff goes here.

By the time this pass is finished, every reference to a local variable
has an entry in a side-table saying how many scopes out from the point
of reference to find the declaration. References with no entry are global,
and get looked up by name at run-time.

The scopes here must line up exactly with the environments the tree-walker
creates: one per block, one per function call (for the parameters), one
around each class's methods for "this", and one more for "super" in a subclass.
"""
from enum import Enum
from pathlib import Path
from typing import Optional, Sequence
from boozetools.support.foundation import Visitor

from . import syntax
from .diagnostics import Report
from .front_end import Parser
from .ontology import Token, Statement
from .scanner import scan

class Yuck(Exception):
	"""
	The first argument will be the name of the pass fraught with error.
	The end-user might not care about this, but it's handy for testing.
	"""
	pass

class FunctionKind(Enum):
	NONE = "none"
	FUNCTION = "function"
	INITIALIZER = "initializer"
	METHOD = "method"

class ClassKind(Enum):
	NONE = "none"
	CLASS = "class"
	SUBCLASS = "subclass"

class RoadMap:
	"""
	Everything it takes to get from text to a runnable, resolved program.
	Raises Yuck if any phase finds trouble; the report knows the details.
	"""
	program: syntax.Program
	depths: dict[syntax.REFERENCE, int]
	
	def __init__(self, text:str, path:Optional[Path], report:Report):
		prior = len(report.issues)
		report.info("Scanning", path or "<input>")
		tokens = scan(text, path, report)
		scan_trouble = len(report.issues) > prior
		report.info("Parsing")
		statements = Parser(tokens, report).parse()
		if scan_trouble: raise Yuck("scan")
		if len(report.issues) > prior: raise Yuck("parse")
		self.program = syntax.Program(statements, path)
		
		report.info("Resolving")
		resolver = Resolver(report)
		resolver.resolve(statements)
		if len(report.issues) > prior: raise Yuck("resolve")
		self.depths = resolver.depths

class Resolver(Visitor):
	"""
	One top-down walk over the statements.
	
	Each scope maps a name to whether its declaration is finished.
	The global scope is not on the stack: globals are late-bound, and may be redeclared.
	"""
	depths: dict[syntax.REFERENCE, int]
	_scopes: list[dict[str, bool]]
	_function: FunctionKind
	_class: ClassKind
	
	def __init__(self, report:Report):
		self._report = report
		self._scopes = []
		self._function = FunctionKind.NONE
		self._class = ClassKind.NONE
		self.depths = {}
	
	def resolve(self, statements:Sequence[Statement]):
		for stmt in statements:
			self.visit(stmt)
	
	def _begin_scope(self): self._scopes.append({})
	def _end_scope(self): self._scopes.pop()
	
	def _declare(self, name:Token):
		if not self._scopes: return
		scope = self._scopes[-1]
		if name.text in scope:
			self._report.redefined(name)
		scope[name.text] = False
	
	def _define(self, name:Token):
		if self._scopes: self._scopes[-1][name.text] = True
	
	def _resolve_local(self, expr:syntax.REFERENCE, name:str):
		for depth, scope in enumerate(reversed(self._scopes)):
			if name in scope:
				self.depths[expr] = depth
				return
	
	def _resolve_function(self, fn:syntax.FunctionDecl, kind:FunctionKind):
		enclosing = self._function
		self._function = kind
		self._begin_scope()
		for param in fn.params:
			self._declare(param)
			self._define(param)
		self.resolve(fn.body)
		self._end_scope()
		self._function = enclosing
	
	# Statements:
	
	def visit_Block(self, block:syntax.Block):
		self._begin_scope()
		self.resolve(block.statements)
		self._end_scope()
	
	def visit_VarDecl(self, decl:syntax.VarDecl):
		self._declare(decl.name)
		if decl.initializer is not None:
			self.visit(decl.initializer)
		self._define(decl.name)
	
	def visit_FunctionDecl(self, fn:syntax.FunctionDecl):
		# Defined before the body, so the function may call itself.
		self._declare(fn.name)
		self._define(fn.name)
		self._resolve_function(fn, FunctionKind.FUNCTION)
	
	def visit_ClassDecl(self, cls:syntax.ClassDecl):
		enclosing = self._class
		self._class = ClassKind.CLASS
		self._declare(cls.name)
		self._define(cls.name)
		
		if cls.superclass is not None:
			if cls.superclass.name.text == cls.name.text:
				self._report.inherits_from_itself(cls.superclass.name)
			self._class = ClassKind.SUBCLASS
			self.visit(cls.superclass)
			self._begin_scope()
			self._scopes[-1]["super"] = True
		
		self._begin_scope()
		self._scopes[-1]["this"] = True
		for method in cls.methods:
			kind = FunctionKind.INITIALIZER if method.name.text == "init" else FunctionKind.METHOD
			self._resolve_function(method, kind)
		self._end_scope()
		
		if cls.superclass is not None: self._end_scope()
		self._class = enclosing
	
	def visit_ExprStmt(self, stmt:syntax.ExprStmt):
		self.visit(stmt.expr)
	
	def visit_PrintStmt(self, stmt:syntax.PrintStmt):
		self.visit(stmt.expr)
	
	def visit_IfStmt(self, stmt:syntax.IfStmt):
		self.visit(stmt.condition)
		self.visit(stmt.then_part)
		if stmt.else_part is not None:
			self.visit(stmt.else_part)
	
	def visit_WhileStmt(self, stmt:syntax.WhileStmt):
		self.visit(stmt.condition)
		self.visit(stmt.body)
	
	def visit_ReturnStmt(self, stmt:syntax.ReturnStmt):
		if self._function is FunctionKind.NONE:
			self._report.top_level_return(stmt.keyword)
		if stmt.value is not None:
			if self._function is FunctionKind.INITIALIZER:
				self._report.value_from_initializer(stmt.keyword)
			self.visit(stmt.value)
	
	# Expressions:
	
	def visit_Literal(self, expr:syntax.Literal): pass
	
	def visit_Grouping(self, expr:syntax.Grouping):
		self.visit(expr.inner)
	
	def visit_UnaryExp(self, expr:syntax.UnaryExp):
		self.visit(expr.arg)
	
	def visit_BinExp(self, expr:syntax.BinExp):
		self.visit(expr.lhs)
		self.visit(expr.rhs)
	
	def visit_ShortCutExp(self, expr:syntax.ShortCutExp):
		self.visit(expr.lhs)
		self.visit(expr.rhs)
	
	def visit_Lookup(self, expr:syntax.Lookup):
		if self._scopes and self._scopes[-1].get(expr.name.text) is False:
			self._report.read_in_own_initializer(expr.name)
		self._resolve_local(expr, expr.name.text)
	
	def visit_Assign(self, expr:syntax.Assign):
		self.visit(expr.value)
		self._resolve_local(expr, expr.name.text)
	
	def visit_Call(self, expr:syntax.Call):
		self.visit(expr.fn_exp)
		for a in expr.args:
			self.visit(a)
	
	def visit_FieldReference(self, expr:syntax.FieldReference):
		# Properties are looked up dynamically; only the object gets resolved.
		self.visit(expr.lhs)
	
	def visit_AssignField(self, expr:syntax.AssignField):
		self.visit(expr.value)
		self.visit(expr.lhs)
	
	def visit_ThisRef(self, expr:syntax.ThisRef):
		if self._class is ClassKind.NONE:
			self._report.this_outside_class(expr.keyword)
			return
		self._resolve_local(expr, "this")
	
	def visit_SuperRef(self, expr:syntax.SuperRef):
		if self._class is ClassKind.NONE:
			self._report.super_outside_class(expr.keyword)
		elif self._class is not ClassKind.SUBCLASS:
			self._report.super_without_superclass(expr.keyword)
		self._resolve_local(expr, "super")
