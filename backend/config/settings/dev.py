"""
Development settings for BOM Planner project.
"""

from .base import *

# =============================================================================
# DEBUG
# =============================================================================
DEBUG = True

# =============================================================================
# ALLOWED HOSTS
# =============================================================================
ALLOWED_HOSTS = ['*']

# =============================================================================
# CORS - Development (Allow all)
# =============================================================================
CORS_ALLOW_ALL_ORIGINS = True

# =============================================================================
# LOGGING - Development
# =============================================================================
LOGGING['root']['level'] = 'DEBUG'
LOGGING['loggers']['bomplan']['level'] = 'DEBUG'
LOGGING['handlers']['console']['formatter'] = 'verbose'

# =============================================================================
# CACHE - Development Override (No Redis required)
# =============================================================================
# Use local memory cache for development (LocMemCache doesn't require Redis)
CACHES = {
    'default': {
        'BACKEND': 'django.core.cache.backends.locmem.LocMemCache',
        'LOCATION': 'bomplan-dev-cache',
    }
}

# =============================================================================
# REST FRAMEWORK - Development Override (Disable Throttling)
# =============================================================================
REST_FRAMEWORK['DEFAULT_THROTTLE_CLASSES'] = []
REST_FRAMEWORK['DEFAULT_THROTTLE_RATES'] = {}

# =============================================================================
# CELERY - Development Override (Filesystem broker, no Redis)
# =============================================================================
import os
CELERY_BROKER_URL = 'filesystem://'
CELERY_RESULT_BACKEND = None
CELERY_BROKER_TRANSPORT_OPTIONS = {
    'data_folder_in': os.path.join(BASE_DIR, 'broker', 'out'),
    'data_folder_out': os.path.join(BASE_DIR, 'broker', 'out'),
    'data_folder_processed': os.path.join(BASE_DIR, 'broker', 'processed'),
}
# Create broker directories if they don't exist
for folder in CELERY_BROKER_TRANSPORT_OPTIONS.values():
    os.makedirs(folder, exist_ok=True)
