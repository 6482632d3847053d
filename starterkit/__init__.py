"""Starter kit backend — WordPress GraphQL proxy, post pages and deploy helpers."""

__version__ = "0.1.0"
