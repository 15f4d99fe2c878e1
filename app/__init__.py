# app/__init__.py
"""
BuzzNest API: backend REST de la red social (auth, posts, likes,
comentarios, follows, búsqueda de usuarios).

Arranque en dev: `python run_dev.py` (uvicorn sobre `app.main:app`).
"""
