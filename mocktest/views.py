import logging

from django.core.exceptions import ValidationError
from django.db import DatabaseError
from django.utils import timezone
from django.views.decorators.csrf import csrf_exempt
from rest_framework import status
from rest_framework.decorators import api_view, permission_classes, throttle_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from . import exam
from .agents import AnswerEvaluator, LLMConfig, QuestionGenerator
from .exceptions import BadRequest, Conflict, Forbidden, MockTestError, NotFound, PersistenceError
from .models import JobDescription, MockTest
from .serializers import MockTestDetailSerializer, MockTestSummarySerializer
from .throttling import ExamGenerationThrottle

logger = logging.getLogger(__name__)


def get_question_generator():
    return QuestionGenerator(LLMConfig.from_settings())


def get_answer_evaluator():
    return AnswerEvaluator(LLMConfig.from_settings())


def error_response(error):
    return Response({'error': error.message}, status=error.status_code)


def load_job_description(jd_id):
    if jd_id in (None, ''):
        raise BadRequest('jdId is required')
    try:
        return JobDescription.objects.get(pk=jd_id)
    except (JobDescription.DoesNotExist, ValueError, TypeError, ValidationError):
        raise NotFound('JD not found')
    except DatabaseError as e:
        logger.error(f"Failed to load JD {jd_id}: {str(e)}")
        raise PersistenceError()


def load_skills(jd):
    skill_set = jd.skill_sets.first()
    if skill_set is None or not isinstance(skill_set.skills, list) or not skill_set.skills:
        raise BadRequest('No skills found for this JD')
    return [str(skill) for skill in skill_set.skills]


def load_owned_mock_test(mock_test_id, user):
    """Fetch a mock test and make sure it belongs to `user`."""
    try:
        mock_test = MockTest.objects.select_related('job_description').get(pk=mock_test_id)
    except (MockTest.DoesNotExist, ValueError, TypeError, ValidationError):
        raise NotFound('Mock test not found')
    except DatabaseError as e:
        logger.error(f"Failed to load mock test {mock_test_id}: {str(e)}")
        raise PersistenceError()

    if mock_test.user_id != user.pk:
        logger.warning(f"User {user.pk} tried to access mock test {mock_test.pk} owned by user {mock_test.user_id}")
        raise Forbidden()
    return mock_test


@csrf_exempt
@api_view(['POST'])
@permission_classes([IsAuthenticated])
@throttle_classes([ExamGenerationThrottle])
def create_mock_test(request):
    """Generate questions for a JD and start a new in-progress attempt"""
    try:
        number_of_questions = exam.validate_question_count(request.data.get('numberOfQuestions'))
        jd = load_job_description(request.data.get('jdId'))
        skills = load_skills(jd)

        questions = get_question_generator().generate(jd.jd_text, skills, number_of_questions)

        try:
            mock_test = MockTest.objects.create(
                user=request.user,
                job_description=jd,
                number_of_questions=number_of_questions,
                time_limit=exam.time_limit_for(number_of_questions),
                questions=questions,
                exam_status=MockTest.IN_PROGRESS,
                start_time=timezone.now()
            )
        except DatabaseError as e:
            logger.error(f"Failed to save mock test for user {request.user.pk}: {str(e)}")
            raise PersistenceError()

        logger.info(f"Created mock test {mock_test.id} with {number_of_questions} questions for user {request.user.pk}")
        return Response({
            'success': True,
            'mockTest': {
                'id': str(mock_test.id),
                'questions': exam.sanitize_questions(mock_test.questions),
                'examConfig': mock_test.exam_config,
                'startTime': mock_test.start_time,
            }
        })
    except MockTestError as e:
        return error_response(e)
    except Exception as e:
        logger.error(f"Error creating mock test: {str(e)}")
        return Response({'error': 'Failed to create mock test'}, status=status.HTTP_500_INTERNAL_SERVER_ERROR)


@csrf_exempt
@api_view(['POST'])
@permission_classes([IsAuthenticated])
def submit_mock_test(request):
    """Grade a submission, attach the LLM evaluation and complete the attempt"""
    try:
        mock_test = load_owned_mock_test(request.data.get('mockTestId'), request.user)
        if mock_test.is_completed:
            raise Conflict()

        user_answers = exam.grade_answers(mock_test.questions, request.data.get('answers'))
        evaluation = get_answer_evaluator().evaluate(mock_test.questions, user_answers)

        end_time = timezone.now()
        time_taken = exam.minutes_between(mock_test.start_time, end_time)

        # Only one submission may move the attempt out of in-progress
        try:
            updated = MockTest.objects.filter(
                pk=mock_test.pk,
                exam_status=MockTest.IN_PROGRESS
            ).update(
                user_answers=user_answers,
                evaluation=evaluation,
                exam_status=MockTest.COMPLETED,
                end_time=end_time,
                time_taken=time_taken
            )
        except DatabaseError as e:
            logger.error(f"Failed to save submission for mock test {mock_test.pk}: {str(e)}")
            raise PersistenceError()
        if not updated:
            logger.warning(f"Concurrent submission rejected for mock test {mock_test.pk}")
            raise Conflict()

        logger.info(f"Mock test {mock_test.pk} completed: {evaluation['totalScore']}/{len(user_answers)}")
        return Response({
            'success': True,
            'result': {
                'totalScore': evaluation['totalScore'],
                'percentage': evaluation['percentage'],
                'feedback': evaluation['feedback'],
                'overallFeedback': evaluation['overallFeedback'],
                'areasToImprove': evaluation['areasToImprove'],
                'timeTaken': time_taken,
            }
        })
    except MockTestError as e:
        return error_response(e)
    except Exception as e:
        logger.error(f"Error submitting mock test: {str(e)}")
        return Response({'error': 'Failed to submit mock test'}, status=status.HTTP_500_INTERNAL_SERVER_ERROR)


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def get_mock_test_attempts(request):
    try:
        attempts = MockTest.objects.filter(user=request.user).select_related('job_description')
        jd_id = request.query_params.get('jdId')
        if jd_id:
            try:
                attempts = attempts.filter(job_description_id=int(jd_id))
            except ValueError:
                attempts = attempts.none()
        attempts = attempts.defer('questions', 'user_answers').order_by('-created_at')

        return Response({
            'success': True,
            'attempts': MockTestSummarySerializer(attempts, many=True).data
        })
    except Exception as e:
        logger.error(f"Error getting mock test attempts: {str(e)}")
        return Response({'error': 'Failed to get mock test attempts'}, status=status.HTTP_500_INTERNAL_SERVER_ERROR)


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def get_mock_test_result(request, mock_test_id):
    try:
        mock_test = load_owned_mock_test(mock_test_id, request.user)
        return Response({
            'success': True,
            'mockTest': MockTestDetailSerializer(mock_test).data
        })
    except MockTestError as e:
        return error_response(e)
    except Exception as e:
        logger.error(f"Error getting mock test result: {str(e)}")
        return Response({'error': 'Failed to get mock test result'}, status=status.HTTP_500_INTERNAL_SERVER_ERROR)
