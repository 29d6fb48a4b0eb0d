"""Trade Calc - payroll deduction and rigging safety calculations."""

__version__ = "0.1.0"
