from app.models.pro_profile.pro_profile import ProProfileModel

__all__ = [
    "ProProfileModel",
]
