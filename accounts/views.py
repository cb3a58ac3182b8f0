import logging

from django.contrib import messages
from django.shortcuts import render, redirect
from django.utils.http import url_has_allowed_host_and_scheme

from core.services import ApiError, ApiHTTPError, DonorApiClient
from .forms import LoginForm, ProfileForm, RegistrationForm
from .permissions import session_login_required
from .session import SessionContext

logger = logging.getLogger(__name__)


def _next_url(request):
    nxt = request.POST.get("next") or request.GET.get("next") or ""
    if nxt and url_has_allowed_host_and_scheme(nxt, allowed_hosts={request.get_host()}):
        return nxt
    return None


def register(request):
    if request.method == "POST":
        form = RegistrationForm(request.POST)
        if form.is_valid():
            client = DonorApiClient(session_context=SessionContext(request.session))
            try:
                client.register_user(form.to_api_payload())
            except ApiError as exc:
                messages.error(request, exc.server_message or "Registration failed. Please try again later.")
            else:
                messages.success(request, "Account created successfully! Please login.")
                return redirect("login")
        else:
            messages.error(request, "Please fix the errors.")
    else:
        form = RegistrationForm()

    return render(request, "accounts/register.html", {"form": form})


def login_view(request):
    ctx = SessionContext(request.session)
    if ctx.is_authenticated:
        return redirect("home")

    if request.method == "POST":
        form = LoginForm(request.POST)
        if form.is_valid():
            # new session key for the new identity
            request.session.cycle_key()
            client = DonorApiClient(session_context=ctx)
            try:
                client.login(form.to_api_payload())
            except ApiHTTPError as exc:
                messages.error(request, exc.server_message or "Invalid email or password")
            except ApiError:
                messages.error(request, "Login failed. Please try again later.")
            else:
                if ctx.token:
                    name = (ctx.user or {}).get("name") or form.cleaned_data["email"]
                    logger.info("User %s signed in", ctx.user_id)
                    messages.success(request, f"Welcome back, {name}!")
                    return redirect(_next_url(request) or "home")
                ctx.clear()
                messages.error(request, "Invalid email or password")
    else:
        form = LoginForm()

    return render(request, "accounts/login.html", {"form": form, "next": _next_url(request) or ""})


def logout_view(request):
    DonorApiClient(session_context=SessionContext(request.session)).logout()
    messages.info(request, "You have been logged out.")
    return redirect("home")


@session_login_required
def profile(request):
    ctx = request.session_context
    client = DonorApiClient(session_context=ctx)

    if request.method == "POST":
        form = ProfileForm(request.POST)
        if form.is_valid():
            payload = form.to_api_payload()
            try:
                client.update_user_profile(ctx.user_id, payload)
            except ApiError as exc:
                messages.error(request, exc.server_message or "Failed to update profile.")
            else:
                ctx.update_user(payload)
                messages.success(request, "Your profile has been updated successfully.")
                return redirect("profile")
        else:
            messages.error(request, "Please fix the errors.")
    else:
        try:
            data = client.fetch_user_profile(ctx.user_id)
        except ApiError as exc:
            messages.error(request, exc.server_message or "Failed to load profile data.")
            data = None
        form = ProfileForm(initial=ProfileForm.initial_from_api(data))

    return render(request, "accounts/profile.html", {"form": form, "user": ctx.user or {}})
