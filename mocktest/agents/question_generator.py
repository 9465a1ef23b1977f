import json
import logging
from typing import Dict, List

from langchain_core.prompts import ChatPromptTemplate

from .base import ExamAgent, strip_code_fences
from ..exam import OPTION_COUNT
from ..exceptions import GenerationError

logger = logging.getLogger(__name__)

QUESTION_PROMPT = ChatPromptTemplate.from_template(
    """You are an expert technical interviewer. Based on the following Job Description (JD),
    create {count} multiple choice questions (MCQs) for a mock exam. Each question should:
    1. Be relevant to the JD and the listed skills: {skills}
    2. Have exactly 4 options (A, B, C, D)
    3. Vary in difficulty as appropriate for the JD
    4. Focus on practical, real-world scenarios
    5. Cover a range of topics from the JD

    Job Description:
    \"\"\"
    {jd_text}
    \"\"\"

    Return the result in this exact JSON format:
    {{
        "questions": [
            {{
                "question": "Question text here?",
                "options": ["Option A", "Option B", "Option C", "Option D"],
                "correctAnswer": 0,
                "skill": "skill_name"
            }}
        ]
    }}
    Note: correctAnswer should be the index (0-3) of the correct option.
    Return only the JSON object, no other text.
    """
)


class MalformedQuestions(ValueError):
    pass


def clean_question(item) -> Dict:
    """Return a normalised question dict, or None if the item is unusable."""
    if not isinstance(item, dict):
        return None
    question = item.get('question')
    options = item.get('options')
    correct = item.get('correctAnswer')
    skill = item.get('skill', '')

    if not isinstance(question, str) or not question.strip():
        return None
    if not isinstance(options, list) or len(options) != OPTION_COUNT:
        return None
    if not all(isinstance(opt, str) and opt.strip() for opt in options):
        return None
    if isinstance(correct, bool) or not isinstance(correct, int) or not 0 <= correct < OPTION_COUNT:
        return None
    if not isinstance(skill, str):
        return None

    return {
        'question': question.strip(),
        'options': [opt.strip() for opt in options],
        'correctAnswer': correct,
        'skill': skill.strip(),
    }


def parse_questions(text: str, count: int) -> List[Dict]:
    """Parse the generator response and keep exactly `count` well-formed questions."""
    try:
        data = json.loads(strip_code_fences(text))
    except json.JSONDecodeError as e:
        raise MalformedQuestions(f'Response is not valid JSON: {e}')

    if not isinstance(data, dict) or not isinstance(data.get('questions'), list):
        raise MalformedQuestions('Response has no "questions" list')

    questions = []
    for item in data['questions']:
        cleaned = clean_question(item)
        if cleaned is not None:
            questions.append(cleaned)

    dropped = len(data['questions']) - len(questions)
    if dropped:
        logger.warning(f"Dropped {dropped} malformed generated question(s)")
    if len(questions) < count:
        raise MalformedQuestions(f'Expected {count} questions, got {len(questions)} usable')
    return questions[:count]


class QuestionGenerator(ExamAgent):
    error_class = GenerationError
    max_attempts = 2

    def generate(self, jd_text: str, skills: List[str], count: int) -> List[Dict]:
        """Ask the LLM for `count` MCQs covering `skills`."""
        variables = {
            'count': count,
            'skills': ', '.join(skills),
            'jd_text': jd_text,
        }
        logger.info(f"Generating {count} questions with model {self.config.model_name}")

        for attempt in range(1, self.max_attempts + 1):
            text = self.invoke(QUESTION_PROMPT, variables)
            try:
                questions = parse_questions(text, count)
            except MalformedQuestions as e:
                logger.warning(f"Unusable question set on attempt {attempt}/{self.max_attempts}: {str(e)}")
                continue
            logger.info(f"Parsed {len(questions)} questions successfully")
            return questions

        raise GenerationError()
