"""
The canonical list-structured environment.

Each environment maps names to values and links to the one enclosing it.
Closures hold on to the environment where they were born, so an environment
lives as long as the longest-lived of its holders. Python's memory management
takes care of the rest.

Local variables are found by walking a known number of links, as worked out
by the resolver. Only globals are ever searched for by name.
"""
from typing import Any, Optional
from .ontology import Token
from .tree_walker.types import LoxRuntimeError

class Environment:
	_values: dict[str, Any]
	enclosing: Optional["Environment"]
	
	def __init__(self, enclosing:Optional["Environment"]=None):
		self._values = {}
		self.enclosing = enclosing
	
	def __repr__(self):
		return "<Environment %s>" % sorted(self._values)
	
	def __contains__(self, name:str) -> bool:
		return name in self._values
	
	def define(self, name:str, value:Any):
		""" Bind (or re-bind) a name right here. """
		self._values[name] = value
	
	def get(self, name:Token) -> Any:
		try: return self._values[name.text]
		except KeyError: raise LoxRuntimeError(name, "Undefined variable '%s'." % name.text) from None
	
	def assign(self, name:Token, value:Any):
		if name.text not in self._values:
			raise LoxRuntimeError(name, "Undefined variable '%s'." % name.text)
		self._values[name.text] = value
	
	def ancestor(self, depth:int) -> "Environment":
		env = self
		for _ in range(depth):
			env = env.enclosing
		return env
	
	def get_at(self, depth:int, name:str) -> Any:
		# A KeyError here means the resolver and the tree-walker disagree: a bug, not a user error.
		return self.ancestor(depth)._values[name]
	
	def assign_at(self, depth:int, name:str, value:Any):
		scope = self.ancestor(depth)._values
		assert name in scope, name
		scope[name] = value
	
	def clear(self):
		self._values.clear()
