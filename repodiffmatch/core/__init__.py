"""Similarity engine and pairwise comparison."""
