"""Scheduling services: rule parsing, next-date search, task date rules."""
