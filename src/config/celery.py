"""
Configuração do Celery para o ERP da malharia.

O DJANGO_SETTINGS_MODULE é definido antes da instanciação da app, para que
o Celery leia as settings do Django (prefixo CELERY_). O beat agenda a
publicação periódica do outbox (``core.publish_outbox_events``).
"""

import os

from celery import Celery

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "config.settings")

app = Celery("malharia_erp")

app.config_from_object("django.conf:settings", namespace="CELERY")

# Descobre tasks.py em cada app instalada
app.autodiscover_tasks()
