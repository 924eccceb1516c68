from __future__ import annotations

from app.eligibility.education import EducationTier
from app.schemas.recommendations import UserProfile

ANALYSIS_TEMPERATURE = 0.7
ANALYSIS_MAX_TOKENS = 1500
RECOMMENDATION_TEMPERATURE = 0.5
RECOMMENDATION_MAX_TOKENS = 2500

_NOT_SPECIFIED = "Not specified"


def _text(value: str | None) -> str:
    return (value or "").strip() or _NOT_SPECIFIED


def _joined(values: list[str]) -> str:
    return ", ".join(v for v in values if v.strip()) or _NOT_SPECIFIED


def build_profile_summary(profile: UserProfile) -> str:
    lines = [
        f"- Education Level: {_text(profile.education_level)}",
        f"- Work Types: {_joined(profile.work_types)}",
        f"- Salary Expectation: {_text(profile.salary_expectation)}",
        f"- Work Motivation: {_text(profile.work_motivation)}",
        f"- Strengths: {_joined(profile.strengths)}",
        f"- Experience Level: {_text(profile.experience_level)}",
        f"- Technical Skills: {_joined(profile.technical_skills)}",
        f"- Work Setting Preference: {_text(profile.work_setting)}",
        f"- Stress Handling: {_text(profile.stress_handling)}",
        f"- Collaboration Preference: {_text(profile.collaboration)}",
    ]
    return "\n".join(lines)


def build_analysis_prompt(profile: UserProfile, tier: EducationTier) -> tuple[str, str]:
    below_bachelor = tier is EducationTier.BELOW_BACHELOR
    system = (
        "You are a career guidance expert that helps users find ideal career paths based on their "
        "education, skills, and preferences. "
        + (
            "IMPORTANT: The user has education below bachelor degree. Only recommend jobs that "
            "typically do not require a bachelor degree. "
            if below_bachelor
            else ""
        )
        + "Provide detailed, personalized analysis and recommendations."
    )
    user = (
        "Analyze this user profile for career recommendations:\n\n"
        f"User Profile:\n{build_profile_summary(profile)}\n\n"
        "Provide your analysis in clear, structured markdown format."
    )
    if below_bachelor:
        user += "\nNOTE: User has education below bachelor degree - recommend appropriate jobs only."
    return system, user


def build_recommendation_prompt(profile: UserProfile, tier: EducationTier) -> tuple[str, str]:
    system = (
        "You generate specific career recommendations for job seekers in the Philippines. "
        + (
            "The user has education below bachelor degree: ONLY recommend jobs that don't require a degree. "
            if tier is EducationTier.BELOW_BACHELOR
            else ""
        )
        + "Provide ONLY raw JSON output without any markdown formatting or additional text. "
        "All salary ranges must be in Philippine Peso (₱) and state 'per month' or 'per year'. "
        "Include a matchPercentage (85-95 for top matches, 70-84 for good matches, "
        "below 70 for alternate paths)."
    )
    user = (
        "Based on this user profile, generate 5-10 specific job recommendations with details:\n\n"
        f"User Profile:\n{build_profile_summary(profile)}\n\n"
        "For each recommendation, provide:\n"
        "- Job Title (must be realistic based on education level)\n"
        "- Industry/Sector\n"
        "- Typical Responsibilities\n"
        "- Required Skills\n"
        "- Expected Salary Range (in Philippine Peso)\n"
        "- Growth Potential\n"
        "- Why it matches the user's profile\n\n"
        "Return only raw JSON with this structure:\n"
        '{"recommendations": [{"title": "", "industry": "", "responsibilities": "", '
        '"requiredSkills": [], "salaryRange": "", "growthPotential": "", '
        '"matchReason": "", "matchPercentage": 0}]}'
    )
    return system, user
