"""
API Service Layer

Bridges HTTP routes and the domain services: converts requests into domain
calls and viewer state into response schemas.
"""
