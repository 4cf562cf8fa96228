"""
ns-checker: forward/reverse DNS zone consistency checks.

Entry points: ns_checker.cli:main (command line) and ns_checker.app:app (HTTP).
"""

__version__ = "0.1.0"
