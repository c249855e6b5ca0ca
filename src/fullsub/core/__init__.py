"""Term and type model, substitution, evaluation and type checking."""
