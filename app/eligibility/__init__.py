from .education import EducationTier, classify_education, is_below_bachelor
from .filtering import filter_recommendations, is_non_degree_title

__all__ = [
    "EducationTier",
    "classify_education",
    "is_below_bachelor",
    "filter_recommendations",
    "is_non_degree_title",
]
