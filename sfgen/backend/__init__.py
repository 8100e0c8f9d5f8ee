"""Backend package - IR to Swift source text."""
