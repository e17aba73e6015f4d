"""
Top-level control of a run: feed a resolved program to the tree-walker,
and turn an escaping run-time error into an entry in the report.
"""
import sys
from contextlib import contextmanager
from ..diagnostics import Report
from ..resolution import RoadMap
from .evaluator import execute
from .runtime import GLOBALS, DEPTHS, reset_runtime
from .types import LoxRuntimeError

# Each call in the guest language costs several frames in the host.
DEEP_RECURSION = 10_000

@contextmanager
def deep_recursion(limit:int=DEEP_RECURSION):
	""" Raise the host's recursion limit for the duration, then put it back. """
	prior = sys.getrecursionlimit()
	sys.setrecursionlimit(max(prior, limit))
	try: yield
	finally: sys.setrecursionlimit(prior)

def run_program(roadmap:RoadMap, report:Report) -> bool:
	"""
	Run the statements against the global environment, which persists
	from one call to the next (until someone calls reset_runtime).
	A run-time error stops the run and goes in the report.
	"""
	DEPTHS.update(roadmap.depths)
	try:
		with deep_recursion():
			for stmt in roadmap.program.statements:
				execute(stmt, GLOBALS)
	except LoxRuntimeError as ex:
		report.runtime_error(ex.token, ex.message)
		return False
	finally:
		sys.stdout.flush()
	return True
