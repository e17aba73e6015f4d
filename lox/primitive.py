"""
Build the primitive namespace: the native functions every program can see.
"""
import time
from .environment import Environment
from .tree_walker.values import NativeFunction

def _clock() -> float:
	""" Wall-clock seconds, with a fractional part. Good enough for timing scripts. """
	return time.time()

PRIMITIVES = [
	NativeFunction("clock", 0, _clock),
]

def install_primitives(env:Environment):
	for native in PRIMITIVES:
		env.define(native.name, native)
