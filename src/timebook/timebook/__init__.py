"""Timebook package.

This package is organized by feature modules (catalog, entries, management, team, ...)
with a thin Flask controller layer and service/repository layers underneath.
"""
