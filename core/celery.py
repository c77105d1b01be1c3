"""
Celery application. Workers start with: celery -A core worker -l info
"""
import os
from celery import Celery

os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'core.settings')

app = Celery('core')

# Read CELERY_* keys from Django settings.
app.config_from_object('django.conf:settings', namespace='CELERY')

# Picks up notifications/tasks.py and any other app's tasks module.
app.autodiscover_tasks()
