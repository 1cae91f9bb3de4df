from django.urls import path

from accounts.handlers import LoginView, ProfileView, RegisterView, SubmitKycView

urlpatterns = [
    path("users/register", RegisterView.as_view(), name="user-register"),
    path("users/login", LoginView.as_view(), name="user-login"),
    path("users/profile", ProfileView.as_view(), name="user-profile"),
    path("users/submit-kyc", SubmitKycView.as_view(), name="user-submit-kyc"),
]
