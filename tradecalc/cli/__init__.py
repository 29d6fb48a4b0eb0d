"""Trade Calc command-line interface."""
