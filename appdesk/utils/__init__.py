"""A collections of utils."""
