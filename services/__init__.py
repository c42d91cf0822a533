"""
Service layer for business logic.

This package contains the service that runs the parse, aggregate and
insight steps over a pasted export and enforces the rule that input
with errors never produces figures.
"""
