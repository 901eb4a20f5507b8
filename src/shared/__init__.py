"""
Shared Layer
Result type, errors, roles, persistence and logging used by every module
"""
