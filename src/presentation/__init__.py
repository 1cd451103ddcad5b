"""Presentation layer.

FastAPI routers translate HTTP requests into commands and queries, hand them
to application handlers, and map Success/Failure back to responses (RFC 7807
problem details for failures). No authentication rules live here.
"""
