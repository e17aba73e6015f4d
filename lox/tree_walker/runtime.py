"""
One function per kind of node, gathered into the dispatch tables at the bottom.

The resolver's side-table lives here as DEPTHS. A reference with a depth
is found that many environments out; a reference without one is global.
"""
import decimal
import math
import operator
from .. import syntax
from ..environment import Environment
from ..ontology import Token
from .types import VALUE, LoxRuntimeError, ReturnValue
from .evaluator import evaluate, execute, execute_block, attach_evaluation_methods
from .values import LoxCallable, Function, LoxClass, Instance
from ..primitive import install_primitives

GLOBALS = Environment()
DEPTHS: dict[syntax.REFERENCE, int] = {}

###############################################################################

def is_truthy(value:VALUE) -> bool:
	if value is None: return False
	if isinstance(value, bool): return value
	return True

def is_equal(a:VALUE, b:VALUE) -> bool:
	# Python would have True == 1.0, but here they are different kinds of thing.
	if type(a) is not type(b): return False
	if isinstance(a, (bool, float, str)) or a is None: return a == b
	return a is b

def stringify(value:VALUE) -> str:
	if value is None: return "nil"
	if isinstance(value, bool): return "true" if value else "false"
	if isinstance(value, float): return _number_text(value)
	return str(value)

def _number_text(x:float) -> str:
	if math.isnan(x): return "NaN"
	if math.isinf(x): return "inf" if x > 0 else "-inf"
	if x == 0: return "-0" if math.copysign(1.0, x) < 0 else "0"
	if x.is_integer(): return str(int(x))
	# Shortest digits that round-trip, but never in exponent form: the scanner could not read that back.
	return format(decimal.Decimal(repr(x)), "f")

def _divide(a:float, b:float) -> float:
	# IEEE rules, rather than Python's ZeroDivisionError.
	try: return a / b
	except ZeroDivisionError:
		if a == 0 or math.isnan(a): return math.nan
		return math.copysign(math.inf, a) * math.copysign(1.0, b)

PRIMITIVE_BINARY = {
	"-"  : operator.sub,
	"*"  : operator.mul,
	"/"  : _divide,
	">"  : operator.gt,
	">=" : operator.ge,
	"<"  : operator.lt,
	"<=" : operator.le,
}

def _is_number(x:VALUE) -> bool: return type(x) is float

def _look_up(name:Token, expr:syntax.REFERENCE, env:Environment) -> VALUE:
	depth = DEPTHS.get(expr)
	if depth is None: return GLOBALS.get(name)
	return env.get_at(depth, name.text)

###############################################################################

def _eval_literal(expr:syntax.Literal, env:Environment):
	return expr.value

def _eval_grouping(expr:syntax.Grouping, env:Environment):
	return evaluate(expr.inner, env)

def _eval_unary_exp(expr:syntax.UnaryExp, env:Environment):
	arg = evaluate(expr.arg, env)
	if expr.op.kind == "!": return not is_truthy(arg)
	if not _is_number(arg): raise LoxRuntimeError(expr.op, "Operand must be a number.")
	return -arg

def _eval_bin_exp(expr:syntax.BinExp, env:Environment):
	a = evaluate(expr.lhs, env)
	b = evaluate(expr.rhs, env)
	op = expr.op.kind
	if op == "==": return is_equal(a, b)
	if op == "!=": return not is_equal(a, b)
	if op == "+":
		if _is_number(a) and _is_number(b): return a + b
		if isinstance(a, str) and isinstance(b, str): return a + b
		raise LoxRuntimeError(expr.op, "Operands must be two numbers or two strings.")
	if not (_is_number(a) and _is_number(b)):
		raise LoxRuntimeError(expr.op, "Operands must be numbers.")
	return PRIMITIVE_BINARY[op](a, b)

def _eval_shortcut_exp(expr:syntax.ShortCutExp, env:Environment):
	lhs = evaluate(expr.lhs, env)
	if expr.op.kind == "OR":
		if is_truthy(lhs): return lhs
	elif not is_truthy(lhs): return lhs
	return evaluate(expr.rhs, env)

def _eval_lookup(expr:syntax.Lookup, env:Environment):
	return _look_up(expr.name, expr, env)

def _eval_assign(expr:syntax.Assign, env:Environment):
	value = evaluate(expr.value, env)
	depth = DEPTHS.get(expr)
	if depth is None: GLOBALS.assign(expr.name, value)
	else: env.assign_at(depth, expr.name.text, value)
	return value

def _eval_call(expr:syntax.Call, env:Environment):
	callee = evaluate(expr.fn_exp, env)
	args = [evaluate(a, env) for a in expr.args]
	if not isinstance(callee, LoxCallable):
		raise LoxRuntimeError(expr.paren, "Can only call functions and classes.")
	if len(args) != callee.arity():
		raise LoxRuntimeError(expr.paren, "Expected %d arguments but got %d." % (callee.arity(), len(args)))
	try: return callee.call(args)
	except RecursionError: raise LoxRuntimeError(expr.paren, "Stack overflow.") from None

def _eval_field_ref(expr:syntax.FieldReference, env:Environment):
	lhs = evaluate(expr.lhs, env)
	if isinstance(lhs, Instance): return lhs.get(expr.field_name)
	raise LoxRuntimeError(expr.field_name, "Only instances have properties.")

def _eval_assign_field(expr:syntax.AssignField, env:Environment):
	lhs = evaluate(expr.lhs, env)
	if not isinstance(lhs, Instance):
		raise LoxRuntimeError(expr.field_name, "Only instances have fields.")
	value = evaluate(expr.value, env)
	lhs.set(expr.field_name, value)
	return value

def _eval_this_ref(expr:syntax.ThisRef, env:Environment):
	return _look_up(expr.keyword, expr, env)

def _eval_super_ref(expr:syntax.SuperRef, env:Environment):
	depth = DEPTHS[expr]
	superclass = env.get_at(depth, "super")
	# The environment binding "this" is always just inside the one binding "super".
	instance = env.get_at(depth - 1, "this")
	method = superclass.find_method(expr.method_name.text)
	if method is None:
		raise LoxRuntimeError(expr.method_name, "Undefined property '%s'." % expr.method_name.text)
	return method.bind(instance)

###############################################################################

def _exec_expr_stmt(stmt:syntax.ExprStmt, env:Environment):
	evaluate(stmt.expr, env)

def _exec_print_stmt(stmt:syntax.PrintStmt, env:Environment):
	print(stringify(evaluate(stmt.expr, env)))

def _exec_var_decl(stmt:syntax.VarDecl, env:Environment):
	value = None if stmt.initializer is None else evaluate(stmt.initializer, env)
	env.define(stmt.name.text, value)

def _exec_block(stmt:syntax.Block, env:Environment):
	return execute_block(stmt.statements, Environment(env))

def _exec_if_stmt(stmt:syntax.IfStmt, env:Environment):
	if is_truthy(evaluate(stmt.condition, env)):
		return execute(stmt.then_part, env)
	elif stmt.else_part is not None:
		return execute(stmt.else_part, env)

def _exec_while_stmt(stmt:syntax.WhileStmt, env:Environment):
	while is_truthy(evaluate(stmt.condition, env)):
		outcome = execute(stmt.body, env)
		if outcome is not None: return outcome

def _exec_function_decl(stmt:syntax.FunctionDecl, env:Environment):
	env.define(stmt.name.text, Function(stmt, env))

def _exec_return_stmt(stmt:syntax.ReturnStmt, env:Environment):
	value = None if stmt.value is None else evaluate(stmt.value, env)
	return ReturnValue(value)

def _exec_class_decl(stmt:syntax.ClassDecl, env:Environment):
	superclass = None
	if stmt.superclass is not None:
		superclass = evaluate(stmt.superclass, env)
		if not isinstance(superclass, LoxClass):
			raise LoxRuntimeError(stmt.superclass.name, "Superclass must be a class.")
	env.define(stmt.name.text, None)
	method_env = env
	if superclass is not None:
		method_env = Environment(env)
		method_env.define("super", superclass)
	methods = {
		m.name.text: Function(m, method_env, m.name.text == "init")
		for m in stmt.methods
	}
	env.define(stmt.name.text, LoxClass(stmt.name.text, superclass, methods))

attach_evaluation_methods(globals())

###############################################################################

def reset_runtime():
	""" Forget every global and every resolved depth; then install the primitives afresh. """
	GLOBALS.clear()
	DEPTHS.clear()
	install_primitives(GLOBALS)

reset_runtime()
