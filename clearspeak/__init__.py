"""
ClearSpeak — rewrites and analyzes short business messages through the
first available LLM provider. Flat structure: api/, core/, services/,
schemas/, utils/, providers/.
"""
from .main import app, create_app

__all__ = ["__version__", "app", "create_app"]
__version__ = "0.1.0"
