import json

from langchain_core.language_models import FakeListChatModel


def make_questions(count, correct=0):
    return [{
        'question': f'What does pattern {i} solve?',
        'options': ['Option A', 'Option B', 'Option C', 'Option D'],
        'correctAnswer': correct,
        'skill': 'Python' if i % 2 == 0 else 'Django',
    } for i in range(count)]


def questions_response(count, fenced=True):
    body = json.dumps({'questions': make_questions(count)})
    if fenced:
        return f'```json\n{body}\n```'
    return body


def evaluation_response(count, suggestion='Study X', prose=True):
    body = json.dumps({
        'totalScore': 999,
        'percentage': 12.5,
        'feedback': [{
            'questionIndex': i,
            'isCorrect': True,
            'correctAnswer': 'Option A',
            'explanation': f'Explanation {i}',
            'suggestion': suggestion,
            'skillFocus': 'Python',
        } for i in range(count)],
        'overallFeedback': 'Solid fundamentals.',
        'areasToImprove': ['Django ORM', 'Testing'],
    })
    if prose:
        return f'Here is the evaluation you asked for:\n{body}\nGood luck!'
    return body


class FailingChatModel(FakeListChatModel):
    """Chat model whose every call fails like an unreachable API."""

    def _call(self, *args, **kwargs):
        raise ConnectionError('Groq API unreachable')
