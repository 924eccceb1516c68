from __future__ import annotations

from typing import Any

from app.eligibility.education import EducationTier, classify_education
from app.salary.repair import repair_recommendations
from app.schemas.recommendations import JobRecommendation, UserProfile

_ENTRY_LEVELS = {"junior", "entry", "entry level", "entry-level"}

_BELOW_BACHELOR_SET: tuple[dict[str, Any], ...] = (
    {
        "title": "Customer Service Representative",
        "industry": "Retail/Banking/Call Centers",
        "responsibilities": "Assist customers with inquiries, resolve complaints, provide product information",
        "required_skills": ["Communication", "Patience", "Problem Solving"],
        "salary_range": "₱15,000 - ₱25,000 per month",
        "growth_potential": "Opportunity to move into supervisory roles or specialize in technical support",
        "match_reason": "Matches your communication skills and ability to handle stress",
        "match_percentage": 88,
    },
    {
        "title": "Administrative Assistant",
        "industry": "Various Industries",
        "responsibilities": "Handle office tasks, manage schedules, organize files, assist with correspondence",
        "required_skills": ["Organization", "Computer Literacy", "Time Management"],
        "salary_range": "₱15,000 - ₱25,000 per month",
        "growth_potential": "Can lead to office manager or executive assistant roles",
        "match_reason": "Aligns with your organizational skills and work setting preferences",
        "match_percentage": 85,
    },
    {
        "title": "Retail Sales Associate",
        "industry": "Retail",
        "responsibilities": "Assist customers, process transactions, maintain store appearance",
        "required_skills": ["Customer Service", "Basic Math", "Product Knowledge"],
        "salary_range": "₱12,000 - ₱20,000 per month",
        "growth_potential": "Opportunity to become store supervisor or manager",
        "match_reason": "Matches your interpersonal skills and work motivation",
        "match_percentage": 82,
    },
    {
        "title": "Food Service Worker",
        "industry": "Hospitality",
        "responsibilities": "Prepare food, serve customers, maintain cleanliness",
        "required_skills": ["Teamwork", "Hygiene Standards", "Customer Service"],
        "salary_range": "₱12,000 - ₱18,000 per month",
        "growth_potential": "Can progress to chef or restaurant manager positions",
        "match_reason": "Aligns with your ability to work in fast-paced environments",
        "match_percentage": 78,
    },
    {
        "title": "Warehouse Associate",
        "industry": "Logistics",
        "responsibilities": "Receive and process inventory, prepare orders, maintain storage areas",
        "required_skills": ["Physical Stamina", "Attention to Detail", "Teamwork"],
        "salary_range": "₱15,000 - ₱22,000 per month",
        "growth_potential": "Can move into supervisory or logistics coordinator roles",
        "match_reason": "Matches your preference for hands-on work and collaboration style",
        "match_percentage": 80,
    },
)


def _degree_set(work_type: str, entry_level: bool) -> list[dict[str, Any]]:
    # (entry bracket, experienced bracket) per role
    return [
        {
            "title": f"{work_type} Developer",
            "industry": "Technology",
            "responsibilities": (
                "Develop and maintain software applications, collaborate with team members, "
                "write clean and efficient code"
            ),
            "required_skills": ["Programming", "Problem Solving", "Teamwork"],
            "salary_range": "₱25,000 - ₱40,000 per month" if entry_level else "₱60,000 - ₱120,000 per month",
            "growth_potential": "High demand field with opportunities to specialize or move into leadership",
            "match_reason": "Aligns with your technical skills and interest in software development",
            "match_percentage": 92,
        },
        {
            "title": "Technical Project Manager",
            "industry": "Technology",
            "responsibilities": "Lead development teams, manage project timelines, coordinate between stakeholders",
            "required_skills": ["Leadership", "Communication", "Organization"],
            "salary_range": "₱80,000 - ₱150,000 per month",
            "growth_potential": "Opportunity to move into senior management roles",
            "match_reason": "Matches your leadership potential and technical background",
            "match_percentage": 88,
        },
        {
            "title": "Data Analyst",
            "industry": "Technology/Finance",
            "responsibilities": "Analyze data trends, create reports, provide business insights",
            "required_skills": ["Data Analysis", "Statistics", "SQL"],
            "salary_range": "₱25,000 - ₱40,000 per month" if entry_level else "₱50,000 - ₱100,000 per month",
            "growth_potential": "High demand across industries with opportunities in AI/ML",
            "match_reason": "Matches your analytical skills and technical background",
            "match_percentage": 85,
        },
        {
            "title": "Digital Marketing Specialist",
            "industry": "Marketing",
            "responsibilities": "Manage online campaigns, analyze performance metrics, optimize digital presence",
            "required_skills": ["SEO", "Social Media", "Analytics"],
            "salary_range": "₱20,000 - ₱30,000 per month" if entry_level else "₱40,000 - ₱80,000 per month",
            "growth_potential": "Growing field with opportunities to become marketing manager",
            "match_reason": "Aligns with your creative and analytical skills",
            "match_percentage": 78,
        },
        {
            "title": "Cloud Engineer",
            "industry": "Technology",
            "responsibilities": "Design and implement cloud solutions, migrate systems to cloud platforms",
            "required_skills": ["AWS/Azure", "Cloud Architecture", "DevOps"],
            "salary_range": "₱40,000 - ₱60,000 per month" if entry_level else "₱90,000 - ₱180,000 per month",
            "growth_potential": "Critical role with increasing demand and high salary potential",
            "match_reason": "Matches your technical expertise and problem-solving skills",
            "match_percentage": 90,
        },
    ]


def is_entry_level(profile: UserProfile) -> bool:
    level = (profile.experience_level or "").strip().lower()
    return not level or level in _ENTRY_LEVELS


def generate_fallback_recommendations(
    profile: UserProfile,
    tier: EducationTier | None = None,
) -> list[JobRecommendation]:
    """Deterministic five-item recommendation set used when the generator is unusable."""
    tier = tier or classify_education(profile.education_level)
    if tier is EducationTier.BELOW_BACHELOR:
        raw = list(_BELOW_BACHELOR_SET)
    else:
        work_type = next((item for item in profile.work_types if item.strip()), "Software")
        raw = _degree_set(work_type.strip(), is_entry_level(profile))

    return repair_recommendations(JobRecommendation.model_validate(item) for item in raw)
