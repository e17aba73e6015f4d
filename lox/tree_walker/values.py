"""
This module defines the specialized value-types that the tree-walker operates in terms of.
Basic primitive values play themselves, but special things like closures need more help.

Method lookup walks an explicit chain of superclasses here.
None of it leans on Python's own inheritance.
"""
from abc import abstractmethod
from typing import Callable, Optional
from .. import syntax
from ..environment import Environment
from ..ontology import Token
from .types import VALUE, LoxValue, LoxRuntimeError
from .evaluator import execute_block

class LoxCallable(LoxValue):
	""" A run-time object that can be applied with arguments. """
	@abstractmethod
	def arity(self) -> int: pass
	@abstractmethod
	def call(self, args:list[VALUE]) -> VALUE: pass

class NativeFunction(LoxCallable):
	""" Something the host provides. All arguments arrive already evaluated. """
	def __init__(self, name:str, arity:int, fn:Callable):
		self.name = name
		self._arity = arity
		self._fn = fn
	
	def __str__(self): return "<native fn>"
	def arity(self) -> int: return self._arity
	def call(self, args:list[VALUE]) -> VALUE: return self._fn(*args)

class Function(LoxCallable):
	""" The run-time manifestation of a function: a callable value tied to its natal environment. """
	
	def __init__(self, declaration:syntax.FunctionDecl, closure:Environment, is_initializer:bool=False):
		self._declaration = declaration
		self._closure = closure
		self._is_initializer = is_initializer
	
	def __str__(self): return "<fn %s>" % self._declaration.name.text
	
	def arity(self) -> int: return len(self._declaration.params)
	
	def bind(self, instance:"Instance") -> "Function":
		""" A method with "this" filled in: one extra environment between the method and its class. """
		env = Environment(self._closure)
		env.define("this", instance)
		return Function(self._declaration, env, self._is_initializer)
	
	def call(self, args:list[VALUE]) -> VALUE:
		env = Environment(self._closure)
		for param, arg in zip(self._declaration.params, args):
			env.define(param.text, arg)
		outcome = execute_block(self._declaration.body, env)
		# An initializer always hands back the instance, even from an early return.
		if self._is_initializer: return self._closure.get_at(0, "this")
		if outcome is not None: return outcome.value

class LoxClass(LoxCallable):
	superclass: Optional["LoxClass"]
	methods: dict[str, Function]
	
	def __init__(self, name:str, superclass:Optional["LoxClass"], methods:dict[str, Function]):
		self.name = name
		self.superclass = superclass
		self.methods = methods
	
	def __str__(self): return self.name
	
	def find_method(self, name:str) -> Optional[Function]:
		klass = self
		while klass is not None:
			if name in klass.methods: return klass.methods[name]
			klass = klass.superclass
	
	def arity(self) -> int:
		initializer = self.find_method("init")
		return 0 if initializer is None else initializer.arity()
	
	def call(self, args:list[VALUE]) -> "Instance":
		instance = Instance(self)
		initializer = self.find_method("init")
		if initializer is not None:
			initializer.bind(instance).call(args)
		return instance

class Instance(LoxValue):
	""" Fields live on the instance. Methods stay with the class until someone asks. """
	fields: dict[str, VALUE]
	
	def __init__(self, klass:LoxClass):
		self.klass = klass
		self.fields = {}
	
	def __str__(self): return "%s instance" % self.klass.name
	
	def get(self, name:Token) -> VALUE:
		if name.text in self.fields:
			return self.fields[name.text]
		method = self.klass.find_method(name.text)
		if method is not None:
			return method.bind(self)
		raise LoxRuntimeError(name, "Undefined property '%s'." % name.text)
	
	def set(self, name:Token, value:VALUE):
		self.fields[name.text] = value
