"""
Route modules for the API.

Each module exports a FastAPI APIRouter with endpoints
for a specific domain/feature.
"""

from api.routes import chat, health, payments, preferences

__all__ = ["chat", "health", "payments", "preferences"]
