from django.urls import path
from . import views


urlpatterns = [
    # GET /status → total countries and last refresh time
    path('status', views.get_status, name='get_status'),
    # POST /countries/refresh → fetch, join, persist and render
    path('countries/refresh', views.refresh_countries, name='refresh_countries'),
    # GET /countries/image → last rendered summary image
    path('countries/image', views.get_summary_image, name='get_summary_image'),
    # GET /countries → list with optional region/currency filters and sort
    path('countries', views.list_countries, name='list_countries'),
    # GET or DELETE /countries/<name> → lookup or delete by substring
    path('countries/<str:name>', views.country_detail, name='country_detail'),
]
