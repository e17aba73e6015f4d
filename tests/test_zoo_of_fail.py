from pathlib import Path
import contextlib
import io
import unittest
from unittest import mock

from lox.diagnostics import Report, SCAN
from lox.resolution import RoadMap, Yuck
from lox.tree_walker import executive

class Silence(Report):
	def __init__(self):
		super().__init__(verbose=False, max_issues=30)
		self.complain_to_console = mock.Mock()
	pass

base_folder = Path(__file__).parent.parent
zoo_fail = base_folder/"zoo/fail"

def _attempt(folder:Path, filename:str) -> tuple[str, Report]:
	specimen_path = folder / filename
	assert specimen_path.exists(), specimen_path
	report = Silence()
	executive.reset_runtime()
	try:
		roadmap = RoadMap(specimen_path.read_text(encoding="utf-8"), specimen_path, report)
	except Yuck as ex:
		assert 0 == report.complain_to_console.call_count
		assert report.sick()
		return ex.args[0], report
	else:
		report.assert_no_issues("Problem found, but not properly signalled.")
		with contextlib.redirect_stdout(io.StringIO()):
			if executive.run_program(roadmap, report): return "failed to fail", report
		return "runtime", report

def _identify_problem(folder:Path, filename:str) -> str:
	return _attempt(folder, filename)[0]

class ZooOfFail(unittest.TestCase):
	""" Tests that assert about failure modes. """

	def expect(self, folder, cases):
		for basename in cases:
			with self.subTest(basename):
				self.assertEqual(folder, _identify_problem(zoo_fail / folder, basename + ".lox"))

	def complaint(self, folder, basename, line, headline):
		""" The first issue found in a specimen, checked for place and wording. """
		phase, report = _attempt(zoo_fail / folder, basename + ".lox")
		self.assertEqual(folder, phase)
		first = report.issues[0]
		self.assertEqual(line, first.line)
		self.assertEqual(headline, first.headline())

	def test_every_specimen_is_expected(self):
		""" A new specimen in the zoo should get a mention below. """
		for phase_folder in zoo_fail.iterdir():
			with self.subTest(phase_folder.name):
				self.assertIn(phase_folder.name, ("scan", "parse", "resolve", "runtime"))
				self.assertTrue(any(phase_folder.glob("*.lox")))

	def test_00_scan(self):
		self.expect("scan", (
			"unexpected_character",
			"unterminated_string",
			"several_bad_characters",
		))

	def test_01_parse(self):
		self.expect("parse", (
			"missing_semicolon",
			"invalid_assignment",
			"missing_expression",
			"unclosed_block",
			"missing_parameter",
			"missing_class_name",
			"too_much_nesting",
		))

	def test_02_resolve(self):
		self.expect("resolve", [
			"redeclare_local",
			"own_initializer",
			"top_level_return",
			"return_value_from_init",
			"this_outside_class",
			"super_outside_class",
			"super_without_superclass",
			"inherit_self",
			"duplicate_parameter",
		])

	def test_03_runtime(self):
		self.expect("runtime", [
			"add_number_string",
			"undefined_variable",
			"assign_undefined",
			"wrong_arity",
			"call_number",
			"undefined_property",
			"superclass_not_class",
			"stack_overflow",
			"negate_string",
			"property_on_number",
			"compare_strings",
			"field_on_string",
			"undefined_super_method",
			"loop_variable_out_of_scope",
		])

	def test_scan_messages(self):
		self.complaint("scan", "unexpected_character", 1, "[line 1] Scan error: Unexpected character.")
		self.complaint("scan", "unterminated_string", 3, "[line 3] Scan error: Unterminated string.")

	def test_scanner_reports_every_bad_character(self):
		phase, report = _attempt(zoo_fail / "scan", "several_bad_characters.lox")
		self.assertEqual("scan", phase)
		scan_issues = [pic for pic in report.issues if pic.kind == SCAN]
		self.assertEqual([2, 3], [pic.line for pic in scan_issues])

	def test_parse_messages(self):
		self.complaint("parse", "missing_semicolon", 2, "[line 2] Syntax error at end: Expect ';' after value.")
		self.complaint("parse", "invalid_assignment", 2, "[line 2] Syntax error at '=': Invalid assignment target.")
		self.complaint("parse", "missing_expression", 1, "[line 1] Syntax error at ';': Expect expression.")
		self.complaint("parse", "unclosed_block", 3, "[line 3] Syntax error at end: Expect '}' after block.")
		self.complaint("parse", "missing_parameter", 1, "[line 1] Syntax error at ')': Expect parameter name.")
		self.complaint("parse", "missing_class_name", 1, "[line 1] Syntax error at '{': Expect class name.")
		phase, report = _attempt(zoo_fail / "parse", "too_much_nesting.lox")
		self.assertEqual(["Too much nesting."], [pic.message for pic in report.issues])

	def test_resolve_messages(self):
		self.complaint("resolve", "redeclare_local", 3, "[line 3] Resolve error at 'a': Already a variable with this name in this scope.")
		self.complaint("resolve", "own_initializer", 2, "[line 2] Resolve error at 'a': Can't read local variable in its own initializer.")
		self.complaint("resolve", "top_level_return", 1, "[line 1] Resolve error at 'return': Can't return from top-level code.")
		self.complaint("resolve", "return_value_from_init", 3, "[line 3] Resolve error at 'return': Can't return a value from an initializer.")
		self.complaint("resolve", "this_outside_class", 1, "[line 1] Resolve error at 'this': Can't use 'this' outside of a class.")
		self.complaint("resolve", "super_outside_class", 2, "[line 2] Resolve error at 'super': Can't use 'super' outside of a class.")
		self.complaint("resolve", "super_without_superclass", 3, "[line 3] Resolve error at 'super': Can't use 'super' in a class with no superclass.")
		self.complaint("resolve", "inherit_self", 1, "[line 1] Resolve error at 'A': A class can't inherit from itself.")

	def test_runtime_messages(self):
		self.complaint("runtime", "add_number_string", 1, "[line 1] Runtime error: Operands must be two numbers or two strings.")
		self.complaint("runtime", "undefined_variable", 1, "[line 1] Runtime error: Undefined variable 'nope'.")
		self.complaint("runtime", "wrong_arity", 2, "[line 2] Runtime error: Expected 2 arguments but got 1.")
		self.complaint("runtime", "call_number", 2, "[line 2] Runtime error: Can only call functions and classes.")
		self.complaint("runtime", "undefined_property", 2, "[line 2] Runtime error: Undefined property 'nope'.")
		self.complaint("runtime", "superclass_not_class", 2, "[line 2] Runtime error: Superclass must be a class.")
		self.complaint("runtime", "stack_overflow", 2, "[line 2] Runtime error: Stack overflow.")
		self.complaint("runtime", "negate_string", 1, "[line 1] Runtime error: Operand must be a number.")
		self.complaint("runtime", "property_on_number", 2, "[line 2] Runtime error: Only instances have properties.")
		self.complaint("runtime", "compare_strings", 1, "[line 1] Runtime error: Operands must be numbers.")
		self.complaint("runtime", "field_on_string", 2, "[line 2] Runtime error: Only instances have fields.")
		self.complaint("runtime", "undefined_super_method", 3, "[line 3] Runtime error: Undefined property 'missing'.")

	def test_failing_run_keeps_output_so_far(self):
		""" Statements before the run-time error have already had their effect. """
		executive.reset_runtime()
		report = Silence()
		roadmap = RoadMap('print "before";\nprint nil + 1;\nprint "after";\n', None, report)
		out = io.StringIO()
		with contextlib.redirect_stdout(out):
			self.assertFalse(executive.run_program(roadmap, report))
		self.assertEqual("before\n", out.getvalue())
		self.assertEqual(1, len(report.issues))


if __name__ == '__main__':
	unittest.main()
