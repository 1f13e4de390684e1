"""Prompt templates for CV Atlas."""
