from django.db import models
from django.contrib.auth.models import User
from django.utils import timezone
import uuid


class JobDescription(models.Model):
    jd_text = models.TextField()
    created_at = models.DateTimeField(auto_now_add=True)

    def __str__(self):
        return self.jd_text[:50]


class JDSkillSet(models.Model):
    """Skill tags extracted for a job description. The newest set wins."""
    job_description = models.ForeignKey(JobDescription, on_delete=models.CASCADE, related_name='skill_sets')
    skills = models.JSONField(default=list)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ['-created_at', '-id']


class MockTest(models.Model):
    IN_PROGRESS = 'in-progress'
    COMPLETED = 'completed'
    STATUS_CHOICES = [
        (IN_PROGRESS, 'In progress'),
        (COMPLETED, 'Completed'),
    ]

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    user = models.ForeignKey(User, on_delete=models.CASCADE, related_name='mock_tests')
    job_description = models.ForeignKey(JobDescription, on_delete=models.CASCADE, related_name='mock_tests')
    number_of_questions = models.PositiveSmallIntegerField()
    time_limit = models.PositiveSmallIntegerField()
    # [{question, options, correctAnswer, skill}]
    questions = models.JSONField(default=list)
    exam_status = models.CharField(max_length=20, choices=STATUS_CHOICES, default=IN_PROGRESS)
    start_time = models.DateTimeField(default=timezone.now)
    end_time = models.DateTimeField(null=True, blank=True)
    time_taken = models.IntegerField(null=True, blank=True)
    # [{questionIndex, selectedOption, isCorrect}]
    user_answers = models.JSONField(null=True, blank=True)
    evaluation = models.JSONField(null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ['-created_at']

    @property
    def exam_config(self):
        return {
            'numberOfQuestions': self.number_of_questions,
            'timeLimit': self.time_limit,
        }

    @property
    def is_completed(self):
        return self.exam_status == self.COMPLETED
