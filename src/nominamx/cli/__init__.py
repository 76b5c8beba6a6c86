"""Command-line interface of NominaMX (nmx)."""
