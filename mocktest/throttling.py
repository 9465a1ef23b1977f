from rest_framework.throttling import SimpleRateThrottle


class ExamGenerationThrottle(SimpleRateThrottle):
    """Limits how often a user can ask the LLM for a new exam."""
    scope = 'mocktest_create'

    def get_cache_key(self, request, view):
        if not request.user or not request.user.is_authenticated:
            return None

        return self.cache_format % {
            'scope': self.scope,
            'ident': request.user.pk
        }
