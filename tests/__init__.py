"""Test suite for the pytest-stepwise package.

This package contains unit and integration tests validating the case
and step models, operation dispatch, the execution engine lifecycle,
response checks, and the pytest integration.
"""
