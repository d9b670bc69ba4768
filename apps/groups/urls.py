from django.urls import path, include
from rest_framework.routers import DefaultRouter
from . import views

app_name = 'groups'

# Router for ViewSets
router = DefaultRouter()
router.register(r'', views.GroupViewSet, basename='group')

urlpatterns = [
    # Group ViewSet routes
    # GET    /api/groups/                   - List user's groups
    # POST   /api/groups/                   - Create group
    # GET    /api/groups/{id}/              - Get group details
    # POST   /api/groups/join/              - Join with invite code

    # Custom group actions
    # GET    /api/groups/{id}/leaderboard/  - Members ranked by group points
    # GET    /api/groups/{id}/challenges/   - Group challenge set by category
    # POST   /api/groups/{id}/challenges/   - Replace challenge set (admin)

    # Include router URLs
    path('', include(router.urls)),
]
