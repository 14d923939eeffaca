"""
Todo Manager Web Server - JSON API and front-end file serving

Provides:
- CRUD endpoints for todos under /api/todos
- Static serving of the single-page front-end (app.html by default)
"""

__version__ = "1.0.0"
