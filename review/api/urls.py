from django.urls import path
from .views import (
    DueCardsView,
    ReviewView,
    SessionCurrentView,
    SessionGradeView,
    SessionStartView,
    WordDetailView,
    WordListView,
    WordStatsView,
    initialize_data,
)

urlpatterns = [
    path("words", WordListView.as_view(), name="words"),
    path("words/stats", WordStatsView.as_view(), name="word-stats"),
    path("words/<int:word_id>", WordDetailView.as_view(), name="word-detail"),
    path("words/<int:word_id>/reviews", ReviewView.as_view(), name="review"),
    path("due", DueCardsView.as_view(), name="due-cards"),
    path("sessions", SessionStartView.as_view(), name="session-start"),
    path("sessions/current", SessionCurrentView.as_view(), name="session-current"),
    path("sessions/grade", SessionGradeView.as_view(), name="session-grade"),
    path("initialize", initialize_data, name="initialize"),
]
