"""
Dispatch from node type to the function that evaluates or executes it.
The functions themselves live in runtime.py, which fills these tables.
"""

from typing import Optional, Sequence
from ..environment import Environment
from ..ontology import ValueExpression, Statement
from .types import VALUE, ReturnValue


def evaluate(expr:ValueExpression, env:Environment) -> VALUE:
	try: fn = EVALUATE[type(expr)]
	except KeyError: raise NotImplementedError(type(expr), expr)
	return fn(expr, env)

def execute(stmt:Statement, env:Environment) -> Optional[ReturnValue]:
	try: fn = EXECUTE[type(stmt)]
	except KeyError: raise NotImplementedError(type(stmt), stmt)
	return fn(stmt, env)

def execute_block(statements:Sequence[Statement], env:Environment) -> Optional[ReturnValue]:
	"""
	Run statements in order until one of them returns.
	The environment is a parameter, so there is never an outer one to restore.
	"""
	for stmt in statements:
		outcome = execute(stmt, env)
		if outcome is not None: return outcome

EVALUATE = {}
EXECUTE = {}

def attach_evaluation_methods(python_scope):
	for _k, _v in list(python_scope.items()):
		if _k.startswith("_eval_"):
			_t = _v.__annotations__["expr"]
			assert isinstance(_t, type), (_k, _t)
			EVALUATE[_t] = _v
		elif _k.startswith("_exec_"):
			_t = _v.__annotations__["stmt"]
			assert isinstance(_t, type), (_k, _t)
			EXECUTE[_t] = _v
