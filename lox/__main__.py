"""
So that this works from a source checkout:

    py -m lox program.lox
"""
from .cmdline import main

main()
