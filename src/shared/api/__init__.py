"""
Shared API Layer
Response models, request context middleware and actor dependencies
"""
