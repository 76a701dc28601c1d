from .disc_scatter_view import DiscScatterView
from .profile_detail_view import ProfileDetailView
from .gradient_profiles_view import GradientProfilesView
from .landmark_view import LandmarkView

__all__ = ["DiscScatterView", "ProfileDetailView", "GradientProfilesView", "LandmarkView"]
