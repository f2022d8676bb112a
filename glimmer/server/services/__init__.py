"""
Service layer.

Services hold the business rules behind both the REST routers and the
WebSocket relay. Each one works on a repository bundle bound to a single
session and commits once per operation.
"""
