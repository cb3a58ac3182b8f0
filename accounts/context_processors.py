from .session import SessionContext


def session_user(request):
    ctx = SessionContext(request.session)
    return {
        "session_user": ctx.user or {},
        "is_logged_in": ctx.is_authenticated,
    }
