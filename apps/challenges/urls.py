from django.urls import path
from . import views

app_name = 'challenges'

urlpatterns = [
    # GET /api/challenges/categories/               - Catalog grouped by category
    # GET /api/challenges/{id}/eligibility/          - Completable check (?group_id=&user_id=)
    path('categories/', views.challenge_catalog, name='catalog'),
    path('<uuid:pk>/eligibility/', views.challenge_eligibility, name='eligibility'),
]
