"""Resumable chunked uploads.

Layered as core (entities, value objects, exceptions, protocols),
application (validators, commands, queries, services), infrastructure
(blob stores, streams) and api (FastAPI router and models).
"""
