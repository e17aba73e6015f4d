import unittest

from lox.diagnostics import Report, RESOLVE
from lox.front_end import parse_text
from lox.resolution import Resolver, RoadMap, Yuck
from lox import syntax

def _resolve(text):
	report = Report()
	program = parse_text(text, None, report)
	assert report.ok()
	resolver = Resolver(report)
	resolver.resolve(program.statements)
	return resolver, report

def _depth_table(text):
	""" Reference name to depth, for references that got one. """
	resolver, report = _resolve(text)
	assert report.ok(), [str(pic) for pic in report.issues]
	table = {}
	for expr, depth in resolver.depths.items():
		if isinstance(expr, (syntax.Lookup, syntax.Assign)): table[expr.name.text] = depth
		elif isinstance(expr, syntax.ThisRef): table["this"] = depth
		elif isinstance(expr, syntax.SuperRef): table["super"] = depth
	return table

def _messages(text):
	resolver, report = _resolve(text)
	return [pic.message for pic in report.issues]

class ResolverTests(unittest.TestCase):

	def test_globals_get_no_depth(self):
		self.assertEqual({}, _depth_table("var g = 1; fun f() { return g; } g = 2;"))

	def test_depth_counts_scopes_outward(self):
		self.assertEqual({"a": 2}, _depth_table("{ var a = 1; { fun f() { return a; } } }"))
		self.assertEqual({"b": 0}, _depth_table("{ var b; b = 1; }"))

	def test_parameters_live_in_the_function_scope(self):
		self.assertEqual({"x": 0}, _depth_table("fun f(x) { return x; }"))

	def test_closure_over_enclosing_function(self):
		table = _depth_table("fun outer() { var n = 0; fun inner() { n = n + 1; } }")
		self.assertEqual({"n": 1}, table)

	def test_this_and_super(self):
		table = _depth_table("""
			class A { m() { return this; } }
			class B < A { m() { return super.m(); } }
		""")
		self.assertEqual({"this": 1, "super": 2}, table)

	def test_shadowing_is_resolved_statically(self):
		resolver, report = _resolve('var a = 1; { fun show() { return a; } var a = 2; }')
		self.assertTrue(report.ok())
		self.assertEqual({}, resolver.depths)

	def test_resolution_is_repeatable(self):
		text = "fun f(a) { var b = a; { var c = b; return c + a; } }"
		def summary():
			resolver, report = _resolve(text)
			return sorted((type(e).__name__, e.name.text, d) for e, d in resolver.depths.items())
		first = summary()
		self.assertEqual(first, summary())
		self.assertEqual([("Lookup", "a", 0), ("Lookup", "a", 1), ("Lookup", "b", 1), ("Lookup", "c", 0)], first)

	def test_global_redeclaration_is_fine(self):
		self.assertEqual([], _messages("var a = 1; var a = 2; fun a() {}"))

	def test_own_initializer_is_fine_for_globals(self):
		self.assertEqual([], _messages("var a = a;"))

	def test_every_problem_gets_reported(self):
		messages = _messages("return 1; print this; fun f() { var x; var x; }")
		self.assertEqual([
			"Can't return from top-level code.",
			"Can't use 'this' outside of a class.",
			"Already a variable with this name in this scope.",
		], messages)

	def test_bare_return_from_initializer(self):
		self.assertEqual([], _messages("class A { init() { return; } }"))
		self.assertEqual(["Can't return a value from an initializer."], _messages("class A { init() { return nil; } }"))

	def test_this_inside_nested_function_of_method(self):
		self.assertEqual({"this": 2}, _depth_table("class A { m() { fun inner() { return this; } } }"))

	def test_this_in_function_outside_class(self):
		self.assertEqual(["Can't use 'this' outside of a class."], _messages("fun f() { return this; }"))


class RoadMapTests(unittest.TestCase):

	def test_phases_in_order(self):
		for text, phase in [
			("print 1 @;", "scan"),
			("print 1", "parse"),
			("{ var a = a; }", "resolve"),
		]:
			with self.subTest(phase):
				report = Report()
				with self.assertRaises(Yuck) as cm:
					RoadMap(text, None, report)
				self.assertEqual(phase, cm.exception.args[0])
				self.assertTrue(report.sick())

	def test_good_program(self):
		report = Report()
		roadmap = RoadMap("var a = 1; { var b = a; print b; }", None, report)
		self.assertTrue(report.ok())
		self.assertEqual(2, len(roadmap.program.statements))
		self.assertEqual([0], list(roadmap.depths.values()))

	def test_resolve_issue_kind(self):
		report = Report()
		with self.assertRaises(Yuck):
			RoadMap("return;", None, report)
		self.assertEqual([RESOLVE], [pic.kind for pic in report.issues])


if __name__ == '__main__':
	unittest.main()
