from accounts.domain.models import KycSubmission, Profile, Registration, Role

__all__ = [
    "KycSubmission",
    "Profile",
    "Registration",
    "Role",
]
