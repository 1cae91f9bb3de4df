from accounts.handlers.views import LoginView, ProfileView, RegisterView, SubmitKycView

__all__ = [
    "LoginView",
    "ProfileView",
    "RegisterView",
    "SubmitKycView",
]
