# shophub/celery_worker.py
from celery import Celery

from shophub.utils.settings import CELERY_BROKER_URL, CELERY_RESULT_BACKEND

celery_app = Celery(
    "shophub",
    broker=CELERY_BROKER_URL,
    backend=CELERY_RESULT_BACKEND,
)

#taski musza byc zaimportowane explicite zeby worker je zarejestrowal
celery_app.conf.imports = ("shophub.services.notification_service",)

celery_app.conf.timezone = "UTC"
celery_app.conf.task_ignore_result = True
