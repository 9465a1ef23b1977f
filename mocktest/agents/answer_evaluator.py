import logging
from typing import Dict, List

from langchain_core.prompts import ChatPromptTemplate

from .base import ExamAgent, extract_json_object
from ..exam import NO_SUGGESTION, score
from ..exceptions import EvaluationError

logger = logging.getLogger(__name__)

EVALUATION_PROMPT = ChatPromptTemplate.from_template(
    """Evaluate the following user answers for a technical mock exam. For each question, provide:
    - Whether the answer is correct
    - The correct answer
    - A detailed explanation
    - If the user was wrong, a suggestion to improve on the specific topic/skill

    Questions and User Answers:
    {questions_block}

    Return the evaluation in this exact JSON format:
    {{
        "totalScore": 15,
        "percentage": 75.0,
        "feedback": [
            {{
                "questionIndex": 0,
                "isCorrect": true,
                "correctAnswer": "Correct answer text",
                "explanation": "Detailed explanation why this is correct",
                "suggestion": "Suggestion to improve if wrong, else empty string",
                "skillFocus": "Specific skill area to focus on"
            }}
        ],
        "overallFeedback": "Overall performance feedback",
        "areasToImprove": ["Area 1", "Area 2", "Area 3"]
    }}
    """
)

REQUIRED_KEYS = ('feedback', 'overallFeedback', 'areasToImprove')


def format_questions(questions: List[Dict], user_answers: List[Dict]) -> str:
    blocks = []
    for index, (q, answer) in enumerate(zip(questions, user_answers)):
        selected = answer['selectedOption']
        user_choice = q['options'][selected] if selected is not None else 'No answer'
        options = ', '.join(f'{i}: {opt}' for i, opt in enumerate(q['options']))
        blocks.append(
            f"Question {index + 1}: {q['question']}\n"
            f"Options: {options}\n"
            f"Correct Answer: {q['options'][q['correctAnswer']]}\n"
            f"User's Answer: {user_choice}\n"
            f"Skill: {q.get('skill', '')}"
        )
    return '\n\n'.join(blocks)


def _text(value) -> str:
    return value.strip() if isinstance(value, str) else ''


def suggestion_for(fb) -> str:
    suggestion = fb.get('suggestion')
    if isinstance(suggestion, str) and suggestion.strip():
        return suggestion
    return NO_SUGGESTION


def normalize_evaluation(data, questions: List[Dict], user_answers: List[Dict]) -> Dict:
    """
    Turn the raw LLM evaluation into the stored shape.

    Scores come from the graded answers, not from the model. Feedback is
    realigned to the question order and every entry gets a suggestion.
    """
    if not isinstance(data, dict):
        raise ValueError('Evaluation is not a JSON object')
    missing = [key for key in REQUIRED_KEYS if key not in data]
    if missing:
        raise ValueError(f'Evaluation is missing keys: {", ".join(missing)}')
    if not isinstance(data['feedback'], list):
        raise ValueError('Evaluation feedback is not a list')

    raw_feedback = [fb for fb in data['feedback'] if isinstance(fb, dict)]
    by_index = {}
    for fb in raw_feedback:
        idx = fb.get('questionIndex')
        if isinstance(idx, int) and not isinstance(idx, bool) and idx not in by_index:
            by_index[idx] = fb

    feedback = []
    for index, (q, answer) in enumerate(zip(questions, user_answers)):
        fb = by_index.get(index)
        if fb is None and index < len(raw_feedback) and 'questionIndex' not in raw_feedback[index]:
            fb = raw_feedback[index]
        fb = fb or {}
        feedback.append({
            'questionIndex': index,
            'isCorrect': answer['isCorrect'],
            'correctAnswer': q['options'][q['correctAnswer']],
            'explanation': _text(fb.get('explanation')),
            'suggestion': suggestion_for(fb),
            'skillFocus': _text(fb.get('skillFocus')) or q.get('skill', ''),
        })

    areas = data['areasToImprove']
    if isinstance(areas, str):
        areas = [areas]
    elif not isinstance(areas, list):
        areas = []

    total, percentage = score(user_answers)
    return {
        'totalScore': total,
        'percentage': percentage,
        'feedback': feedback,
        'overallFeedback': _text(data['overallFeedback']),
        'areasToImprove': [str(a) for a in areas if a],
    }


class AnswerEvaluator(ExamAgent):
    error_class = EvaluationError

    def evaluate(self, questions: List[Dict], user_answers: List[Dict]) -> Dict:
        """Ask the LLM for narrative feedback on a graded submission."""
        text = self.invoke(EVALUATION_PROMPT, {
            'questions_block': format_questions(questions, user_answers),
        })
        try:
            evaluation = normalize_evaluation(extract_json_object(text), questions, user_answers)
        except ValueError as e:
            logger.error(f"Invalid evaluation response: {str(e)}")
            raise EvaluationError() from e

        logger.info(f"Evaluation scored {evaluation['totalScore']}/{len(questions)}")
        return evaluation
