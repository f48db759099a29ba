from django.core.management import call_command
from django.core.management.base import CommandError
from rest_framework import views, status
from rest_framework.decorators import api_view
from rest_framework.pagination import PageNumberPagination
from rest_framework.response import Response
import structlog
import uuid
from ..domain import session as sessions
from ..domain.errors import CardNotFound, SessionComplete
from ..domain.session import Session
from ..data.repos import get_word
from ..services.reviews import current_card, due_cards, grade_in_session, grade_word, start_session
from ..services.words import add_word, list_words, remove_word, status_counts
from .serializers import (
    CardSerializer,
    NowQuerySerializer,
    OutcomeSerializer,
    SessionGradeSerializer,
    SessionSerializer,
    WordInSerializer,
    WordQuerySerializer,
)

base_logger = structlog.get_logger()


def not_found(exc):
    return Response({"error": str(exc)}, status=status.HTTP_404_NOT_FOUND)


def session_payload(session, card):
    done, total = sessions.progress(session)
    return {
        "queue": list(session.queue),
        "cursor": session.cursor,
        "done": done,
        "total": total,
        "complete": session.is_complete,
        "current": CardSerializer(card).data if card is not None else None,
    }


class WordPagination(PageNumberPagination):
    page_size = 20
    page_size_query_param = "page_size"
    max_page_size = 100


class WordListView(views.APIView):
    def get(self, request):
        qs = WordQuerySerializer(data=request.query_params)
        qs.is_valid(raise_exception=True)
        words = list_words(
            search=qs.validated_data.get("search"),
            status=qs.validated_data.get("status"),
        )
        paginator = WordPagination()
        page = paginator.paginate_queryset(words, request, view=self)
        return paginator.get_paginated_response(CardSerializer(page, many=True).data)

    def post(self, request):
        s = WordInSerializer(data=request.data)
        s.is_valid(raise_exception=True)
        word = add_word(**s.validated_data)
        return Response(CardSerializer(word).data, status=status.HTTP_201_CREATED)


class WordDetailView(views.APIView):
    def get(self, request, word_id):
        try:
            word = get_word(word_id)
        except CardNotFound as e:
            return not_found(e)
        return Response(CardSerializer(word).data)

    def delete(self, request, word_id):
        try:
            remove_word(word_id)
        except CardNotFound as e:
            return not_found(e)
        return Response(status=status.HTTP_204_NO_CONTENT)


class WordStatsView(views.APIView):
    def get(self, request):
        return Response(status_counts())


class ReviewView(views.APIView):
    def post(self, request, word_id):
        # Create a unique request_id
        request_id = str(uuid.uuid4())
        logger = base_logger.bind(request_id=request_id)

        s = OutcomeSerializer(data=request.data)
        s.is_valid(raise_exception=True)
        outcome = s.validated_data["outcome"]
        idem = s.validated_data["idempotency_key"]

        try:
            card, was_idem = grade_word(word_id, outcome, idem)
        except CardNotFound as e:
            logger.warning("review_card_missing", card_id=str(word_id))
            return not_found(e)
        status_code = status.HTTP_200_OK if was_idem else status.HTTP_201_CREATED

        logger.info(
            "review_api_response",
            card_id=str(word_id),
            outcome=outcome,
            idempotent=was_idem,
            interval_days=card.interval_days,
            status=status_code,
        )
        return Response({**CardSerializer(card).data, "idempotent": was_idem}, status=status_code)


class DueCardsView(views.APIView):
    def get(self, request):
        request_id = str(uuid.uuid4())
        logger = base_logger.bind(request_id=request_id)

        qs = NowQuerySerializer(data=request.query_params)
        qs.is_valid(raise_exception=True)
        now = qs.validated_data.get("now")

        cards = due_cards(now)
        logger.info("due_cards_api_response", card_count=len(cards))
        return Response(
            {
                "card_ids": [c.id for c in cards],
                "cards": CardSerializer(cards, many=True).data,
            }
        )


class SessionStartView(views.APIView):
    def post(self, request):
        request_id = str(uuid.uuid4())
        logger = base_logger.bind(request_id=request_id)

        s = NowQuerySerializer(data=request.data)
        s.is_valid(raise_exception=True)

        session = start_session(s.validated_data.get("now"))
        try:
            card = current_card(session)
        except CardNotFound as e:
            return not_found(e)
        logger.info("session_api_response", card_count=len(session.queue))
        return Response(session_payload(session, card), status=status.HTTP_201_CREATED)


class SessionCurrentView(views.APIView):
    def post(self, request):
        s = SessionSerializer(data=request.data)
        s.is_valid(raise_exception=True)
        session = Session(**s.validated_data)
        try:
            card = current_card(session)
        except CardNotFound as e:
            return not_found(e)
        return Response(session_payload(session, card))


class SessionGradeView(views.APIView):
    def post(self, request):
        request_id = str(uuid.uuid4())
        logger = base_logger.bind(request_id=request_id)

        s = SessionGradeSerializer(data=request.data)
        s.is_valid(raise_exception=True)
        data = s.validated_data
        session = Session(queue=data["queue"], cursor=data["cursor"])

        try:
            card, next_session, was_idem = grade_in_session(
                session, data["outcome"], data["idempotency_key"], data.get("now")
            )
            next_card = current_card(next_session)
        except SessionComplete as e:
            logger.info("session_grade_rejected", total=e.total)
            return Response({"error": str(e)}, status=status.HTTP_409_CONFLICT)
        except CardNotFound as e:
            return not_found(e)
        status_code = status.HTTP_200_OK if was_idem else status.HTTP_201_CREATED

        return Response(
            {
                "card": CardSerializer(card).data,
                "session": session_payload(next_session, next_card),
                "idempotent": was_idem,
            },
            status=status_code,
        )


@api_view(["POST"])
def initialize_data(request):
    try:
        file_name = request.data.get("file", "MOCK_WORDS.json")
        base_logger.info("initialize_data", file=file_name)
        call_command("init_data", file=file_name)
        return Response(
            {"message": f"Data initialized successfully from {file_name}"},
            status=status.HTTP_200_OK,
        )
    except CommandError as e:
        return Response({"error": str(e)}, status=status.HTTP_400_BAD_REQUEST)
    except Exception as e:
        return Response({"error": str(e)}, status=status.HTTP_500_INTERNAL_SERVER_ERROR)
