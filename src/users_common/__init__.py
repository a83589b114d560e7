"""Shared domain code for the Users CRUD API."""
