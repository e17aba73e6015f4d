"""
Recursive descent, one method per level of precedence, lowest first:

	assignment -> or -> and -> equality -> comparison -> term -> factor -> unary -> call -> primary

On a syntax error, the parser reports it, skips ahead to something that looks like
the start of the next statement, and carries on. That way one run can report several
mistakes. Whoever calls the parser must check the report before trusting the tree.
"""
from pathlib import Path
from typing import Optional
from boozetools.parsing.interface import ParseError

from . import syntax
from .diagnostics import Report
from .ontology import Token, ValueExpression, Statement
from .scanner import scan, END

class LoxParseError(ParseError):
	pass

MAX_ARGS = 255

_STATEMENT_START = frozenset(["CLASS", "FUN", "VAR", "FOR", "IF", "WHILE", "PRINT", "RETURN"])

def parse_text(text:str, path:Optional[Path], report:Report) -> Optional[syntax.Program]:
	""" Scan and parse; return the program only if nothing went wrong. """
	tokens = scan(text, path, report)
	statements = Parser(tokens, report).parse()
	if report.ok():
		return syntax.Program(statements, path)

class Parser:
	def __init__(self, tokens:list[Token], report:Report):
		assert tokens and tokens[-1].kind == END
		self._tokens = tokens
		self._current = 0
		self._report = report
	
	def parse(self) -> list[Statement]:
		statements = []
		while not self._at_end():
			try: stmt = self._declaration()
			except RecursionError:
				# Whatever follows is still inside the too-deep phrase, so give up on the rest.
				self._report.too_much_nesting(self._peek())
				self._current = len(self._tokens) - 1
				break
			if stmt is not None: statements.append(stmt)
		return statements
	
	# Declarations and statements:
	
	def _declaration(self) -> Optional[Statement]:
		try:
			if self._match("CLASS"): return self._class_declaration()
			if self._match("FUN"): return self._function("function")
			if self._match("VAR"): return self._var_declaration()
			return self._statement()
		except LoxParseError:
			self._synchronize()
	
	def _class_declaration(self) -> syntax.ClassDecl:
		name = self._consume("name", "Expect class name.")
		superclass = None
		if self._match("<"):
			superclass = syntax.Lookup(self._consume("name", "Expect superclass name."))
		self._consume("{", "Expect '{' before class body.")
		methods = []
		while not self._check("}") and not self._at_end():
			methods.append(self._function("method"))
		self._consume("}", "Expect '}' after class body.")
		return syntax.ClassDecl(name, superclass, methods)
	
	def _function(self, kind:str) -> syntax.FunctionDecl:
		name = self._consume("name", "Expect %s name." % kind)
		self._consume("(", "Expect '(' after %s name." % kind)
		params = []
		if not self._check(")"):
			while True:
				if len(params) >= MAX_ARGS:
					self._error(self._peek(), "Can't have more than %d parameters." % MAX_ARGS)
				params.append(self._consume("name", "Expect parameter name."))
				if not self._match(","): break
		self._consume(")", "Expect ')' after parameters.")
		self._consume("{", "Expect '{' before %s body." % kind)
		return syntax.FunctionDecl(name, params, self._block())
	
	def _var_declaration(self) -> syntax.VarDecl:
		name = self._consume("name", "Expect variable name.")
		initializer = self._expression() if self._match("=") else None
		self._consume(";", "Expect ';' after variable declaration.")
		return syntax.VarDecl(name, initializer)
	
	def _statement(self) -> Statement:
		if self._match("FOR"): return self._for_statement()
		if self._match("IF"): return self._if_statement()
		if self._match("PRINT"): return self._print_statement()
		if self._match("RETURN"): return self._return_statement()
		if self._match("WHILE"): return self._while_statement()
		if self._match("{"): return syntax.Block(self._block())
		return self._expression_statement()
	
	def _for_statement(self) -> Statement:
		""" There is no for-loop at run-time: It becomes a while-loop in a block. """
		keyword = self._previous()
		self._consume("(", "Expect '(' after 'for'.")
		if self._match(";"): initializer = None
		elif self._match("VAR"): initializer = self._var_declaration()
		else: initializer = self._expression_statement()
		
		condition = None if self._check(";") else self._expression()
		self._consume(";", "Expect ';' after loop condition.")
		increment = None if self._check(")") else self._expression()
		self._consume(")", "Expect ')' after for clauses.")
		body = self._statement()
		
		if increment is not None:
			body = syntax.Block([body, syntax.ExprStmt(increment)])
		if condition is None:
			condition = syntax.Literal(True, keyword)
		body = syntax.WhileStmt(condition, body)
		if initializer is not None:
			body = syntax.Block([initializer, body])
		return body
	
	def _if_statement(self) -> syntax.IfStmt:
		self._consume("(", "Expect '(' after 'if'.")
		condition = self._expression()
		self._consume(")", "Expect ')' after if condition.")
		then_part = self._statement()
		# Taking the else right here binds it to the nearest if.
		else_part = self._statement() if self._match("ELSE") else None
		return syntax.IfStmt(condition, then_part, else_part)
	
	def _print_statement(self) -> syntax.PrintStmt:
		keyword = self._previous()
		value = self._expression()
		self._consume(";", "Expect ';' after value.")
		return syntax.PrintStmt(keyword, value)
	
	def _return_statement(self) -> syntax.ReturnStmt:
		keyword = self._previous()
		value = None if self._check(";") else self._expression()
		self._consume(";", "Expect ';' after return value.")
		return syntax.ReturnStmt(keyword, value)
	
	def _while_statement(self) -> syntax.WhileStmt:
		self._consume("(", "Expect '(' after 'while'.")
		condition = self._expression()
		self._consume(")", "Expect ')' after condition.")
		return syntax.WhileStmt(condition, self._statement())
	
	def _block(self) -> list[Statement]:
		statements = []
		while not self._check("}") and not self._at_end():
			stmt = self._declaration()
			if stmt is not None: statements.append(stmt)
		self._consume("}", "Expect '}' after block.")
		return statements
	
	def _expression_statement(self) -> syntax.ExprStmt:
		expr = self._expression()
		self._consume(";", "Expect ';' after expression.")
		return syntax.ExprStmt(expr)
	
	# Expressions:
	
	def _expression(self) -> ValueExpression:
		return self._assignment()
	
	def _assignment(self) -> ValueExpression:
		expr = self._or()
		if self._match("="):
			equals = self._previous()
			value = self._assignment()  # Right-associative
			if isinstance(expr, syntax.Lookup):
				return syntax.Assign(expr.name, value)
			if isinstance(expr, syntax.FieldReference):
				return syntax.AssignField(expr.lhs, expr.field_name, value)
			# No need to panic: the parser is not confused about where it is.
			self._error(equals, "Invalid assignment target.")
		return expr
	
	def _or(self) -> ValueExpression:
		return self._left_associative(self._and, syntax.ShortCutExp, "OR")
	
	def _and(self) -> ValueExpression:
		return self._left_associative(self._equality, syntax.ShortCutExp, "AND")
	
	def _equality(self) -> ValueExpression:
		return self._left_associative(self._comparison, syntax.BinExp, "!=", "==")
	
	def _comparison(self) -> ValueExpression:
		return self._left_associative(self._term, syntax.BinExp, ">", ">=", "<", "<=")
	
	def _term(self) -> ValueExpression:
		return self._left_associative(self._factor, syntax.BinExp, "-", "+")
	
	def _factor(self) -> ValueExpression:
		return self._left_associative(self._unary, syntax.BinExp, "/", "*")
	
	def _left_associative(self, operand, node_class, *kinds) -> ValueExpression:
		expr = operand()
		while self._match(*kinds):
			op = self._previous()
			expr = node_class(expr, op, operand())
		return expr
	
	def _unary(self) -> ValueExpression:
		if self._match("!", "-"):
			op = self._previous()
			return syntax.UnaryExp(op, self._unary())
		return self._call()
	
	def _call(self) -> ValueExpression:
		expr = self._primary()
		while True:
			if self._match("("):
				expr = self._finish_call(expr)
			elif self._match("."):
				name = self._consume("name", "Expect property name after '.'.")
				expr = syntax.FieldReference(expr, name)
			else:
				return expr
	
	def _finish_call(self, callee:ValueExpression) -> syntax.Call:
		args = []
		if not self._check(")"):
			while True:
				if len(args) >= MAX_ARGS:
					self._error(self._peek(), "Can't have more than %d arguments." % MAX_ARGS)
				args.append(self._expression())
				if not self._match(","): break
		paren = self._consume(")", "Expect ')' after arguments.")
		return syntax.Call(callee, paren, args)
	
	def _primary(self) -> ValueExpression:
		if self._match("FALSE"): return syntax.Literal(False, self._previous())
		if self._match("TRUE"): return syntax.Literal(True, self._previous())
		if self._match("NIL"): return syntax.Literal(None, self._previous())
		if self._match("number", "string"):
			token = self._previous()
			return syntax.Literal(token.literal, token)
		if self._match("SUPER"):
			keyword = self._previous()
			self._consume(".", "Expect '.' after 'super'.")
			method_name = self._consume("name", "Expect superclass method name.")
			return syntax.SuperRef(keyword, method_name)
		if self._match("THIS"): return syntax.ThisRef(self._previous())
		if self._match("name"): return syntax.Lookup(self._previous())
		if self._match("("):
			opening = self._previous()
			inner = self._expression()
			closing = self._consume(")", "Expect ')' after expression.")
			return syntax.Grouping(inner, opening, closing)
		raise self._error(self._peek(), "Expect expression.")
	
	# The dreary bits:
	
	def _match(self, *kinds:str) -> bool:
		if self._peek().kind in kinds:
			self._advance()
			return True
		return False
	
	def _check(self, kind:str) -> bool:
		return self._peek().kind == kind
	
	def _consume(self, kind:str, message:str) -> Token:
		if self._check(kind): return self._advance()
		raise self._error(self._peek(), message)
	
	def _advance(self) -> Token:
		if not self._at_end(): self._current += 1
		return self._previous()
	
	def _at_end(self) -> bool:
		return self._peek().kind == END
	
	def _peek(self) -> Token:
		return self._tokens[self._current]
	
	def _previous(self) -> Token:
		return self._tokens[self._current - 1]
	
	def _error(self, token:Token, message:str) -> LoxParseError:
		""" Report the problem; hand back an exception in case the caller wants to panic. """
		self._report.syntax_error(token, message)
		return LoxParseError(token, message)
	
	def _synchronize(self):
		""" Discard tokens up to what is probably the next statement boundary. """
		self._advance()
		while not self._at_end():
			if self._previous().kind == ";": return
			if self._peek().kind in _STATEMENT_START: return
			self._advance()
