"""
Turn source text into a list of tokens, ending with the "<END>" token.

Trouble is reported, not raised: the scanner carries on past a bad character
or an unterminated string so that one pass can surface every such problem.
"""
import sys
from pathlib import Path
from typing import Optional

from .diagnostics import Report
from .location import start_segment, insert_token
from .ontology import Token

END = "<END>"
RESERVED = frozenset("AND CLASS ELSE FALSE FUN FOR IF NIL OR PRINT RETURN SUPER THIS TRUE VAR WHILE".split())
_KEYWORD = {word.lower(): word for word in RESERVED}

_SINGLE = frozenset("(){},.-+;*/")
_MAYBE_EQUALS = frozenset("!=<>")
_WHITESPACE = frozenset(" \r\t")

def _is_digit(c:str) -> bool: return "0" <= c <= "9"
def _is_alpha(c:str) -> bool: return "a" <= c <= "z" or "A" <= c <= "Z" or c == "_"

def scan(text:str, path:Optional[Path], report:Report) -> list[Token]:
	return Scanner(text, path, report).scan_tokens()

class Scanner:
	_tokens: list[Token]
	
	def __init__(self, text:str, path:Optional[Path], report:Report):
		self._text = text
		self._report = report
		self._start = self._current = 0
		self._line = 1
		self._tokens = []
		start_segment(path, text)
	
	def scan_tokens(self) -> list[Token]:
		while not self._at_end():
			self._start = self._current
			self._scan_token()
		self._start = self._current
		self._tokens.append(self._make(END))
		return self._tokens
	
	def _scan_token(self):
		c = self._advance()
		if c in _WHITESPACE: return
		if c == "\n":
			self._line += 1
		elif c == "/" and self._match("/"):
			while self._peek() != "\n" and not self._at_end(): self._advance()
		elif c in _SINGLE:
			self._emit(sys.intern(c))
		elif c in _MAYBE_EQUALS:
			self._emit(sys.intern(c + "=") if self._match("=") else sys.intern(c))
		elif c == '"':
			self._string()
		elif _is_digit(c):
			self._number()
		elif _is_alpha(c):
			self._word()
		else:
			self._report.unexpected_character(self._make("<ERROR>"))
	
	def _string(self):
		while self._peek() != '"' and not self._at_end():
			if self._peek() == "\n": self._line += 1
			self._advance()
		if self._at_end():
			self._report.unterminated_string(self._make("<ERROR>"))
			return
		self._advance()  # The closing quote.
		self._emit("string", self._text[self._start+1:self._current-1])
	
	def _number(self):
		while _is_digit(self._peek()): self._advance()
		if self._peek() == "." and _is_digit(self._peek_next()):
			self._advance()
			while _is_digit(self._peek()): self._advance()
		self._emit("number", float(self._text[self._start:self._current]))
	
	def _word(self):
		while _is_alpha(self._peek()) or _is_digit(self._peek()): self._advance()
		text = self._text[self._start:self._current]
		self._emit(_KEYWORD.get(text, "name"))
	
	def _emit(self, kind:str, literal=None):
		self._tokens.append(self._make(kind, literal))
	
	def _make(self, kind:str, literal=None) -> Token:
		spot = insert_token(slice(self._start, self._current))
		return Token(kind, self._text[self._start:self._current], literal, self._line, spot)
	
	def _at_end(self) -> bool: return self._current >= len(self._text)
	
	def _advance(self) -> str:
		c = self._text[self._current]
		self._current += 1
		return c
	
	def _match(self, expected:str) -> bool:
		if self._at_end() or self._text[self._current] != expected: return False
		self._current += 1
		return True
	
	def _peek(self) -> str:
		return "" if self._at_end() else self._text[self._current]
	
	def _peek_next(self) -> str:
		return self._text[self._current+1] if self._current + 1 < len(self._text) else ""
