from rest_framework import status


class MockTestError(Exception):
    """Base error for the mock test flow. `message` is safe to return to the client."""
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message = 'Mock test request failed'

    def __init__(self, message=None):
        self.message = message or self.default_message
        super().__init__(self.message)


class InvalidConfiguration(MockTestError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = 'Invalid number of questions'


class BadRequest(MockTestError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = 'Bad request'


class NotFound(MockTestError):
    status_code = status.HTTP_404_NOT_FOUND
    default_message = 'Not found'


class Forbidden(MockTestError):
    status_code = status.HTTP_403_FORBIDDEN
    default_message = 'Unauthorized'


class Conflict(MockTestError):
    status_code = status.HTTP_409_CONFLICT
    default_message = 'Test already submitted'


class GenerationError(MockTestError):
    default_message = 'Failed to generate questions'


class EvaluationError(MockTestError):
    default_message = 'Failed to evaluate answers'


class PersistenceError(MockTestError):
    default_message = 'Failed to save mock test'
