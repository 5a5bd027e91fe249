"""Normalization building blocks shared by every source format."""
