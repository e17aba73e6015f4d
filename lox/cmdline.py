"""
This is an interpreter for the Lox programming language.

For example:

    lox program.lox

will run program.lox if possible, or else try to explain why not.

    lox

with no program starts an interactive session. Globals persist from line to line.

    lox -h

will explain all the arguments.
"""
import sys, argparse
from pathlib import Path
from typing import Optional

parser = argparse.ArgumentParser(
	prog="lox",
	description="Tree-walking interpreter for the Lox programming language.",
)
parser.add_argument("program", nargs="?", help="a Lox script. Leave it out for an interactive session.")
parser.add_argument('-c', "--check", action="store_true", help="Scan, parse, and resolve the program, but do not run it.")
parser.add_argument('-a', "--ast", action="store_true", help="Print the syntax tree instead of running the program.")
parser.add_argument('-v', "--verbose", action="count", help="Mention each phase on the way through.")

# From sysexits.h, as is the custom for Lox implementations:
EX_DATAERR = 65
EX_NOINPUT = 66
EX_SOFTWARE = 70

def run(args) -> int:
	from .diagnostics import Report
	if args.program is None:
		return repl(args)
	path = Path.cwd() / args.program
	try:
		with open(path, "r", encoding="utf-8") as fh:
			text = fh.read()
	except OSError as ex:
		print("Could not read %s: %s" % (path, ex.strerror), file=sys.stderr)
		return EX_NOINPUT
	return run_text(text, path, Report(verbose=args.verbose), args)

def run_text(text:str, path:Optional[Path], report, args) -> int:
	""" The front end recurses on nesting, as does the tree-walker, so both get the deeper stack. """
	from .tree_walker.executive import deep_recursion
	with deep_recursion():
		return _run_text(text, path, report, args)

def _run_text(text:str, path:Optional[Path], report, args) -> int:
	from .diagnostics import TooManyIssues
	from .resolution import RoadMap, Yuck
	try:
		try: roadmap = RoadMap(text, path, report)
		except Yuck:
			assert report.sick()
			report.complain_to_console()
			return EX_DATAERR
	except TooManyIssues:
		report.complain_to_console()
		print("Giving up after a few issues. One crisis at a time, eh?", file=sys.stderr)
		return EX_DATAERR
	if args.ast:
		from .ast_printer import AstPrinter
		print(AstPrinter().print_program(roadmap.program.statements))
	elif args.check:
		print("Looks plausible to me.", file=sys.stderr)
	else:
		from .tree_walker.executive import run_program
		if not run_program(roadmap, report):
			report.complain_to_console()
			return EX_SOFTWARE
	return 0

def repl(args) -> int:
	""" Read, evaluate, print, loop. A line with errors gets reported, and then life goes on. """
	from .diagnostics import Report
	while True:
		try: line = input("> ")
		except (EOFError, KeyboardInterrupt):
			print()
			return 0
		if line.strip():
			run_text(line, None, Report(verbose=args.verbose), args)

def main():
	sys.exit(run(parser.parse_args()))
