"""NominaMX - Employer cost and take-home pay calculator for Mexico."""

__version__ = "0.1.0"
