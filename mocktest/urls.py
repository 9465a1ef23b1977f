from django.urls import path
from . import views

urlpatterns = [
    path('create/', views.create_mock_test, name='create_mock_test'),
    path('submit/', views.submit_mock_test, name='submit_mock_test'),
    path('attempts/', views.get_mock_test_attempts, name='get_mock_test_attempts'),
    path('result/<str:mock_test_id>/', views.get_mock_test_result, name='get_mock_test_result'),
]
