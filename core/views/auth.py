from django.views.decorators.http import require_http_methods
from core.utils import api_login_required, format_datetime, success_response


@require_http_methods(["GET"])
@api_login_required
def current_user(request):
    """Return the logged-in user's profile."""
    user = request.user
    return success_response({
        'user': {
            'id': user.pk,
            'username': user.username,
            'email': user.email,
            'first_name': user.first_name,
            'last_name': user.last_name,
            'is_staff': user.is_staff,
            'last_login': format_datetime(user.last_login),
        }
    })
