"""CLI package for GitHub repository reports."""
