from .base import LLMConfig
from .question_generator import QuestionGenerator
from .answer_evaluator import AnswerEvaluator

__all__ = ['LLMConfig', 'QuestionGenerator', 'AnswerEvaluator']
