import sys
from typing import Any
from boozetools.support.failureprone import illustration

from .location import lookup_span
from .ontology import Phrase, Token

class TooManyIssues(Exception):
	pass

SCAN, SYNTAX, RESOLVE, RUNTIME = "Scan", "Syntax", "Resolve", "Runtime"

class Report:
	""" Collects the issues of one run. Nothing gets printed until someone asks. """
	_issues : list["Pic"]
	
	def __init__(self, *, verbose:int=0, max_issues=20):
		self._verbose = verbose or 0   # Because None is incomparable.
		self._issues = []
		self._max_issues = max_issues
	
	def ok(self): return not self._issues
	def sick(self): return bool(self._issues)
	
	@property
	def issues(self) -> list["Pic"]: return list(self._issues)
	
	def issue(self, it:Any):
		self._issues.append(it)
		if len(self._issues) == self._max_issues:
			raise TooManyIssues(self)
	
	def info(self, *args):
		if self._verbose:
			print(*args, file=sys.stderr)

	def complain_to_console(self):
		""" Emit all the issues to the console. """
		_bemoan(self._issues)
			
	def assert_no_issues(self, message):
		""" Does what it says on the tin """
		if self._issues:
			self.complain_to_console()
			raise AssertionError(message)
	
	# Methods the scanner calls:
	def unexpected_character(self, token:Token):
		self.issue(Pic(SCAN, token, "Unexpected character.", where=False))
	
	def unterminated_string(self, token:Token):
		self.issue(Pic(SCAN, token, "Unterminated string.", where=False))
	
	# The parser mostly has the one complaint, but with many words:
	def syntax_error(self, token:Token, message:str):
		self.issue(Pic(SYNTAX, token, message))
	
	def too_much_nesting(self, token:Token):
		self.issue(Pic(SYNTAX, token, "Too much nesting."))
	
	# Methods the resolver calls:
	def redefined(self, name:Token):
		self.issue(Pic(RESOLVE, name, "Already a variable with this name in this scope."))
	
	def read_in_own_initializer(self, name:Token):
		self.issue(Pic(RESOLVE, name, "Can't read local variable in its own initializer."))
	
	def top_level_return(self, keyword:Token):
		self.issue(Pic(RESOLVE, keyword, "Can't return from top-level code."))
	
	def value_from_initializer(self, keyword:Token):
		self.issue(Pic(RESOLVE, keyword, "Can't return a value from an initializer."))
	
	def this_outside_class(self, keyword:Token):
		self.issue(Pic(RESOLVE, keyword, "Can't use 'this' outside of a class."))
	
	def super_outside_class(self, keyword:Token):
		self.issue(Pic(RESOLVE, keyword, "Can't use 'super' outside of a class."))
	
	def super_without_superclass(self, keyword:Token):
		self.issue(Pic(RESOLVE, keyword, "Can't use 'super' in a class with no superclass."))
	
	def inherits_from_itself(self, name:Token):
		self.issue(Pic(RESOLVE, name, "A class can't inherit from itself."))
	
	# And the run-time:
	def runtime_error(self, token:Token, message:str):
		self.issue(Pic(RUNTIME, token, message, where=False))

class Annotation:
	caption: str
	def __init__(self, node:Phrase, caption:str=""):
		span = lookup_span(*node.span())
		self.path = span.path
		self.source = span.source
		self.slice = span.slice
		self.caption = caption
	def illustrate(self):
		row, col = self.source.find_row_col(self.slice.start)
		single_line = self.source.line_of_text(row)
		width = max(1, min(self.slice.stop - self.slice.start, len(single_line) - col))
		return illustration(single_line, col, width, prefix='% 6d |' % row, caption=self.caption)

class Pic:
	"""
	One issue: what kind of trouble, on which line, and a picture of the place.
	The end-of-input token has no picture, for there is nothing there to see.
	"""
	def __init__(self, kind:str, token:Token, message:str, where=True):
		self.kind, self.line, self.message = kind, token.line, message
		if not where: self._where = ""
		elif token.kind == "<END>": self._where = " at end"
		else: self._where = " at '%s'" % token.text
		self._anns = [] if token.kind == "<END>" else [Annotation(token)]
	def headline(self):
		return "[line %d] %s error%s: %s" % (self.line, self.kind, self._where, self.message)
	def __str__(self): return self.headline()
	def as_text(self):
		lines = [self.headline()]
		path = None
		for ann in self._anns:
			if ann.path != path and ann.path is not None:
				path = ann.path
				lines.append(str(path))
			lines.append(ann.illustrate())
		return '\n'.join(lines)

def _bemoan(issues):
	""" Emit all the issues to the console. """
	for i in issues:
		print(i.as_text(), file=sys.stderr)
	sys.stderr.flush()
