"""Mexican payroll rules: tax configuration and calculation engine."""
