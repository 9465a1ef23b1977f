import logging

from django.apps import AppConfig
from django.conf import settings

logger = logging.getLogger(__name__)


class MocktestConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'mocktest'

    def ready(self):
        if not getattr(settings, 'GROQ_API_KEY', None):
            logger.warning(
                "GROQ_API_KEY is not set. Question generation and answer "
                "evaluation will fail until it is added to the environment."
            )
        else:
            logger.info(f"Mock test LLM configured with model {settings.MOCKTEST_LLM_MODEL}")
