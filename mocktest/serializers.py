from rest_framework import serializers
from .models import MockTest


class MockTestSummarySerializer(serializers.ModelSerializer):
    jdText = serializers.CharField(source='job_description.jd_text', read_only=True)
    examConfig = serializers.DictField(source='exam_config', read_only=True)
    evaluation = serializers.SerializerMethodField()
    examStatus = serializers.CharField(source='exam_status', read_only=True)
    startTime = serializers.DateTimeField(source='start_time', read_only=True)
    endTime = serializers.DateTimeField(source='end_time', read_only=True)
    timeTaken = serializers.IntegerField(source='time_taken', read_only=True)

    class Meta:
        model = MockTest
        fields = ['id', 'jdText', 'examConfig', 'evaluation', 'examStatus', 'startTime', 'endTime', 'timeTaken']

    def get_evaluation(self, obj):
        if not obj.evaluation:
            return None
        return {
            'totalScore': obj.evaluation.get('totalScore'),
            'percentage': obj.evaluation.get('percentage'),
            'overallFeedback': obj.evaluation.get('overallFeedback'),
        }


class MockTestDetailSerializer(MockTestSummarySerializer):
    questions = serializers.JSONField(read_only=True)
    userAnswers = serializers.JSONField(source='user_answers', read_only=True)
    evaluation = serializers.JSONField(read_only=True)

    class Meta:
        model = MockTest
        fields = [
            'id', 'jdText', 'examConfig', 'questions', 'userAnswers', 'evaluation',
            'examStatus', 'startTime', 'endTime', 'timeTaken',
        ]
