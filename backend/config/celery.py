"""
Celery configuration for BOM Planner project.
"""

import os

from celery import Celery

# Set the default Django settings module
os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'config.settings')

app = Celery('bomplan')

# Using a string here means the worker doesn't have to serialize
# the configuration object to child processes.
app.config_from_object('django.conf:settings', namespace='CELERY')

# Configure task routes
app.conf.task_routes = {
    'application.tasks.planning_tasks.*': {'queue': 'planning'},
}
