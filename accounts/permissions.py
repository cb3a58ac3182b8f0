from functools import wraps
from urllib.parse import urlencode

from django.contrib import messages
from django.shortcuts import redirect
from django.urls import reverse

from .session import SessionContext


def session_login_required(view_func):
    """
    Only lets signed-in visitors through; everyone else goes to the login page
    and comes back afterwards. The view gets ``request.session_context``.
    """
    @wraps(view_func)
    def _wrapped(request, *args, **kwargs):
        ctx = SessionContext(request.session)
        if not ctx.user_id:
            messages.info(request, "Please log in to continue.")
            return redirect(f"{reverse('login')}?{urlencode({'next': request.get_full_path()})}")
        request.session_context = ctx
        return view_func(request, *args, **kwargs)
    return _wrapped
