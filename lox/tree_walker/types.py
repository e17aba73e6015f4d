"""
This module aims to express an interface agreement
between the evaluator and various kinds of data.

Nil, booleans, numbers, and strings play themselves
as None, bool, float, and str respectively.
"""

from abc import ABC
from typing import NamedTuple, Union
from ..ontology import Token

class LoxValue(ABC):
	""" Root for classes that implement specialized run-time data structures """

NATIVE_DATA = Union[None, bool, float, str]
VALUE = Union[NATIVE_DATA, LoxValue]

class LoxRuntimeError(Exception):
	""" Aborts the run. The token says where the trouble happened. """
	def __init__(self, token:Token, message:str):
		super().__init__(message)
		self.token = token
		self.message = message

class ReturnValue(NamedTuple):
	"""
	Executing a statement normally yields None. A return statement
	yields one of these instead, and every enclosing statement passes
	it along until the function call that is waiting for it.
	"""
	value: VALUE
