from django.urls import path, include
from rest_framework.routers import DefaultRouter
from . import views

app_name = 'completions'

router = DefaultRouter()
router.register(r'', views.ChallengeCompletionViewSet, basename='completion')

urlpatterns = [
    # POST   /api/challenge-completions/                               - Submit completion
    # POST   /api/challenge-completions/{id}/approve/                  - Approve completion
    # DELETE /api/challenge-completions/{id}/                          - Delete completion
    # GET    /api/challenge-completions/group/{groupId}/               - Group feed
    # GET    /api/challenge-completions/user/{userId}/group/{groupId}/ - User's completions in group
    path('group/<uuid:group_id>/', views.group_completions, name='group-completions'),
    path(
        'user/<uuid:user_id>/group/<uuid:group_id>/',
        views.user_group_completions,
        name='user-group-completions'
    ),

    path('', include(router.urls)),
]
