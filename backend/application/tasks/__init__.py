"""
Application tasks - Celery entry points for background planning runs.
"""
