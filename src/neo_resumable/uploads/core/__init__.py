"""Resumable upload core: entities, value objects, exceptions and protocols."""
