"""Core search domain: result types, pattern matching and the pipeline."""
