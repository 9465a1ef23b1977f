import json
import logging
import re
from dataclasses import dataclass
from typing import Optional

from django.conf import settings
from langchain_core.prompts import ChatPromptTemplate
from langchain_groq import ChatGroq

from ..exceptions import MockTestError

logger = logging.getLogger(__name__)

CODE_FENCE_PATTERN = re.compile(r'```(?:json)?', re.IGNORECASE)
JSON_OBJECT_PATTERN = re.compile(r'\{.*\}', re.DOTALL)


@dataclass(frozen=True)
class LLMConfig:
    api_key: Optional[str]
    model_name: str = 'llama-3.3-70b-versatile'
    temperature: float = 0.3

    @classmethod
    def from_settings(cls):
        return cls(
            api_key=getattr(settings, 'GROQ_API_KEY', None),
            model_name=getattr(settings, 'MOCKTEST_LLM_MODEL', cls.model_name),
            temperature=getattr(settings, 'MOCKTEST_LLM_TEMPERATURE', cls.temperature),
        )


def build_chat_model(config: LLMConfig):
    if not config.api_key:
        raise ValueError('Groq API key is not configured. Please check server logs.')
    return ChatGroq(
        api_key=config.api_key,
        model_name=config.model_name,
        temperature=config.temperature,
    )


def strip_code_fences(text: str) -> str:
    return CODE_FENCE_PATTERN.sub('', text).strip()


def extract_json_object(text: str) -> dict:
    """Parse the outermost {...} span of a response that may carry extra prose."""
    json_match = JSON_OBJECT_PATTERN.search(text)
    if not json_match:
        raise ValueError('No JSON object found in response')
    return json.loads(json_match.group(0))


class ExamAgent:
    """
    Shared plumbing for the LLM-backed exam helpers.

    The chat model is built lazily from `config` so a missing API key only
    fails on first use. Pass `llm` to use a ready model instead.
    """
    error_class = MockTestError

    def __init__(self, config: Optional[LLMConfig] = None, llm=None):
        self.config = config or LLMConfig.from_settings()
        self._llm = llm

    @property
    def llm(self):
        if self._llm is None:
            self._llm = build_chat_model(self.config)
        return self._llm

    def invoke(self, prompt: ChatPromptTemplate, variables: dict) -> str:
        """Run the prompt through the model and return the raw text."""
        try:
            chain = prompt | self.llm
            response = chain.invoke(variables)
        except Exception as e:
            logger.error(f"{type(self).__name__} LLM call failed: {str(e)}")
            raise self.error_class() from e

        content = response.content
        if not isinstance(content, str):
            logger.error(f"{type(self).__name__} got non-text content from the LLM")
            raise self.error_class()
        return content
