"""
Search API views.
"""
from drf_spectacular.utils import OpenApiParameter, extend_schema
from rest_framework.permissions import AllowAny
from rest_framework.views import APIView

from shared.responses import success_response

from .serializers import SearchQuerySerializer, SearchResultSerializer
from .services import SearchService


class SearchView(APIView):
    """
    GET /api/v1/search/?query=...&page=1&limit=20
    """
    permission_classes = [AllowAny]
    authentication_classes = []
    search_service = SearchService()

    @extend_schema(
        tags=['Search'],
        summary='Search products, brands and categories',
        parameters=[
            OpenApiParameter(name='query', type=str, required=False),
            OpenApiParameter(name='page', type=int, required=False),
            OpenApiParameter(name='limit', type=int, required=False),
        ],
        responses={200: SearchResultSerializer},
    )
    def get(self, request):
        serializer = SearchQuerySerializer(data=request.query_params)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        results = self.search_service.search_all(
            query=data.get('query', ''),
            page=data['page'],
            limit=data['limit'],
        )
        message = 'Search results fetched successfully' if results['total_results'] else 'No results found'
        if not data.get('query', '').strip():
            message = 'Empty search query'
        return success_response(data=SearchResultSerializer(results).data, message=message)
