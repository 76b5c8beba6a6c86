"""Payroll calculators and the engine that combines them."""
