from rest_framework.decorators import api_view
from rest_framework.response import Response
from rest_framework import status
from django.http import HttpResponse

from . import store
from .exceptions import PersistenceFailure, SourceUnavailable
from .refresh import refresh
from .serializers import CountrySerializer
from .snapshot import default_slot
from .sources import COUNTRY_SOURCE, RATE_SOURCE

SOURCE_LABELS = {
    COUNTRY_SOURCE: "Countries API",
    RATE_SOURCE: "Exchange rates API",
}

LIST_FILTERS = ("region", "currency", "sort")
SORT_VALUES = ("gdp_desc",)


@api_view(['POST'])
def refresh_countries(request):
    """
    POST /countries/refresh
    Fetch countries and exchange rates, then update or create cached data.
    """
    try:
        result = refresh()
    except SourceUnavailable as exc:
        label = SOURCE_LABELS.get(exc.source, exc.source)
        return Response(
            {"error": "External data source unavailable", "details": f"Could not fetch data from {label}"},
            status=status.HTTP_503_SERVICE_UNAVAILABLE,
        )
    except PersistenceFailure:
        return Response(
            {"error": "Internal server error"},
            status=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )

    return Response(
        {
            "message": "Countries refreshed successfully",
            "total_countries": result.records_written,
            "last_refreshed_at": result.as_of.isoformat(),
        },
        status=status.HTTP_200_OK,
    )


@api_view(['GET'])
def list_countries(request):
    """
    GET /countries
    Filters:
      - region, currency (case-insensitive exact match)
    Sorting:
      - ?sort=gdp_desc (countries without an estimate last)
    Default:
      - Ordered by id ascending.
    """
    for key in request.query_params.keys():
        if key not in LIST_FILTERS:
            return Response(
                {"error": "Validation failed", "details": {key: "is not a valid filter"}},
                status=status.HTTP_400_BAD_REQUEST,
            )
        if not request.query_params.get(key):
            return Response(
                {"error": "Validation failed", "details": {key: "is required"}},
                status=status.HTTP_400_BAD_REQUEST,
            )

    sort_param = request.query_params.get("sort")
    if sort_param and sort_param not in SORT_VALUES:
        return Response(
            {"error": "Validation failed", "details": {"sort": "must be gdp_desc"}},
            status=status.HTTP_400_BAD_REQUEST,
        )

    qs = store.list_countries(
        region=request.query_params.get("region"),
        currency=request.query_params.get("currency"),
        sort_by_metric_desc=sort_param == "gdp_desc",
    )
    return Response(CountrySerializer(qs, many=True).data)


@api_view(['GET', 'DELETE'])
def country_detail(request, name):
    """
    GET /countries/:name  -> return 404 JSON if not found
    DELETE /countries/:name -> delete, return 200 or 404
    Matching is by case-insensitive substring.
    """
    if request.method == 'GET':
        country = store.find_by_name(name)
        if country is None:
            return Response({"error": "Country not found"}, status=status.HTTP_404_NOT_FOUND)
        return Response(CountrySerializer(country).data)

    if not store.delete_by_name(name):
        return Response({"error": "Country not found"}, status=status.HTTP_404_NOT_FOUND)
    return Response({"message": "Country deleted successfully"})


@api_view(['GET'])
def get_status(request):
    """
    GET /status -> { total_countries, last_refreshed_at }
    last_refreshed_at is max(last_refreshed_at) across records (or null)
    """
    last = store.max_last_refreshed_at()
    return Response({
        "total_countries": store.count(),
        "last_refreshed_at": last.isoformat() if last else None,
    })


@api_view(['GET'])
def get_summary_image(request):
    """
    GET /countries/image
    Serve the last rendered summary image, or a JSON 404 if none exists yet.
    """
    data = default_slot().read()
    if data is None:
        return Response(
            {"error": "Summary image not found", "hint": "Run POST /countries/refresh first to generate the image"},
            status=status.HTTP_404_NOT_FOUND,
        )
    return HttpResponse(data, content_type='image/png')
