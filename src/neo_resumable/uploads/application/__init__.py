"""Resumable upload application layer: validators, commands, queries and services."""
