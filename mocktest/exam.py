"""Exam rules that do not need the database or the LLM."""
import math

from .exceptions import InvalidConfiguration, BadRequest

# number of questions -> time limit in minutes
TIME_LIMITS = {
    15: 20,
    20: 30,
    30: 45,
}

OPTION_COUNT = 4
NO_SUGGESTION = 'No suggestion provided.'


def validate_question_count(value):
    """Return the question count as an int, or raise InvalidConfiguration."""
    if isinstance(value, bool):
        raise InvalidConfiguration()
    try:
        count = int(value)
    except (TypeError, ValueError):
        raise InvalidConfiguration()
    if isinstance(value, float) and value != count:
        raise InvalidConfiguration()
    if count not in TIME_LIMITS:
        raise InvalidConfiguration()
    return count


def time_limit_for(count):
    return TIME_LIMITS[validate_question_count(count)]


def sanitize_questions(questions):
    """Strip the correct answers before questions go back to the candidate."""
    return [{
        'question': q['question'],
        'options': q['options'],
        'skill': q.get('skill', ''),
    } for q in questions]


def grade_answers(questions, answers):
    """
    Build the stored user answers, one per question, in question order.

    `answers` is the submitted list of {selectedOption}. A null selectedOption
    means the question was left unanswered.
    """
    if not isinstance(answers, list):
        raise BadRequest('answers must be a list')
    if len(answers) != len(questions):
        raise BadRequest(f'Expected {len(questions)} answers, got {len(answers)}')

    user_answers = []
    for index, (question, answer) in enumerate(zip(questions, answers)):
        if not isinstance(answer, dict) or 'selectedOption' not in answer:
            raise BadRequest(f'Answer {index} is missing selectedOption')
        selected = answer['selectedOption']
        if selected is not None:
            if isinstance(selected, bool) or not isinstance(selected, int) or not 0 <= selected < OPTION_COUNT:
                raise BadRequest(f'Answer {index} has an invalid selectedOption')
        user_answers.append({
            'questionIndex': index,
            'selectedOption': selected,
            'isCorrect': selected == question['correctAnswer'],
        })
    return user_answers


def score(user_answers):
    """Return (total correct, percentage rounded to 2 places)."""
    total = sum(1 for a in user_answers if a['isCorrect'])
    percentage = round(total * 100.0 / len(user_answers), 2) if user_answers else 0.0
    return total, percentage


def minutes_between(start, end):
    """Whole minutes from start to end, halves rounded up."""
    seconds = (end - start).total_seconds()
    return int(math.floor(seconds / 60 + 0.5))
