"""
API Routes - HTTP endpoint handlers

Structure: each area (products, viewers, system) gets its own router,
all included in the main FastAPI app under /api/v1.
"""
