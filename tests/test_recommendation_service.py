import asyncio
import json
import sys
import unittest
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from app.ai.types import UpstreamError  # noqa: E402
from app.recommendations.service import (  # noqa: E402
    ANALYSIS_PLACEHOLDER,
    ANALYSIS_UNAVAILABLE_NOTE,
    NO_ELIGIBLE_NOTE,
    SAMPLE_DATA_NOTE,
    EmptyProfileError,
    RecommendationService,
)
from app.salary.validation import SalaryValidationError  # noqa: E402
from app.schemas.recommendations import UserProfile  # noqa: E402

_GENERATED = {
    "recommendations": [
        {
            "title": "Frontend Developer",
            "industry": "Technology",
            "salaryRange": "PHP 45k - 70k monthly",
            "requiredSkills": "React, TypeScript",
            "matchPercentage": "91%",
        },
        {"title": "QA Engineer", "industry": "Technology", "salaryRange": "negotiable"},
        {"title": "", "industry": "Technology"},
        "not an object",
    ]
}


class FakeGenerator:
    def __init__(self, analysis="Strong analytical profile.", recommendations=None):
        self.analysis = analysis
        self.recommendations = json.dumps(_GENERATED) if recommendations is None else recommendations
        self.calls = []

    async def generate(self, prompt, *, system_prompt=None, temperature=0.7, max_tokens=None, json_mode=False):
        self.calls.append({"json_mode": json_mode, "temperature": temperature, "max_tokens": max_tokens})
        result = self.recommendations if json_mode else self.analysis
        if isinstance(result, Exception):
            raise result
        return result


def _recommend(service, payload):
    return asyncio.run(service.recommend(UserProfile.model_validate(payload)))


class RecommendationServiceTests(unittest.TestCase):
    def test_generated_recommendations_are_repaired(self):
        generator = FakeGenerator()
        response = _recommend(RecommendationService(generator), {"educationLevel": "Bachelor's", "workTypes": ["Web"]})

        self.assertTrue(response.success)
        self.assertIsNone(response.note)
        self.assertEqual(response.analysis, "Strong analytical profile.")
        self.assertEqual(response.education_level, "bachelor's")
        self.assertFalse(response.is_below_bachelors)
        self.assertEqual([job.title for job in response.recommendations], ["Frontend Developer", "QA Engineer"])

        frontend, qa = response.recommendations
        self.assertEqual(frontend.salary_range, "₱45,000–₱70,000 per month")
        self.assertEqual(frontend.required_skills, ["React", "TypeScript"])
        self.assertEqual(frontend.match_percentage, 91)
        self.assertEqual(qa.salary_range, "₱40,000–₱80,000 per month")
        self.assertEqual(len(response.job_links), 2)

        self.assertEqual(sorted(call["json_mode"] for call in generator.calls), [False, True])
        json_call = next(call for call in generator.calls if call["json_mode"])
        self.assertEqual(json_call["temperature"], 0.5)
        self.assertEqual(json_call["max_tokens"], 2500)

    def test_recommendation_failure_uses_fallback_but_keeps_analysis(self):
        generator = FakeGenerator(recommendations=UpstreamError("boom"))
        response = _recommend(RecommendationService(generator), {"educationLevel": "bachelor"})

        self.assertEqual(response.note, SAMPLE_DATA_NOTE)
        self.assertEqual(response.analysis, "Strong analytical profile.")
        self.assertEqual(response.recommendations[0].title, "Software Developer")
        self.assertEqual(len(response.recommendations), 5)

    def test_analysis_failure_keeps_generated_recommendations(self):
        generator = FakeGenerator(analysis=UpstreamError("timeout"))
        response = _recommend(RecommendationService(generator), {"educationLevel": "bachelor"})

        self.assertEqual(response.note, ANALYSIS_UNAVAILABLE_NOTE)
        self.assertEqual(response.analysis, ANALYSIS_PLACEHOLDER)
        self.assertEqual(response.recommendations[0].title, "Frontend Developer")

    def test_missing_generator_uses_fallbacks(self):
        response = _recommend(RecommendationService(None), {"educationLevel": "vocational"})

        self.assertEqual(response.note, SAMPLE_DATA_NOTE)
        self.assertEqual(response.analysis, ANALYSIS_PLACEHOLDER)
        self.assertTrue(response.is_below_bachelors)
        self.assertEqual(len(response.recommendations), 5)
        self.assertEqual(len(response.job_links), 5)

    def test_invalid_json_and_unexpected_errors_fall_back(self):
        for failure in ("Sorry, I can't do that.", RuntimeError("socket closed"), '{"recommendations": []}'):
            with self.subTest(failure=failure):
                response = _recommend(
                    RecommendationService(FakeGenerator(recommendations=failure)),
                    {"educationLevel": "master's"},
                )
                self.assertEqual(response.note, SAMPLE_DATA_NOTE)
                self.assertEqual(len(response.recommendations), 5)

    def test_below_bachelor_filter_and_bounds(self):
        generated = json.dumps(
            [
                {"title": "Software Engineer", "salaryRange": "₱80,000 per month"},
                {"title": "Cashier", "salaryRange": "₱800,000 per month"},
            ]
        )
        response = _recommend(
            RecommendationService(FakeGenerator(recommendations=generated)),
            {"educationLevel": "High School"},
        )

        self.assertIsNone(response.note)
        self.assertTrue(response.is_below_bachelors)
        self.assertEqual([job.title for job in response.recommendations], ["Cashier"])
        self.assertEqual(response.recommendations[0].salary_range, "₱350,000–₱500,000 per month")

    def test_no_eligible_generated_roles(self):
        generated = json.dumps([{"title": "Software Engineer"}, {"title": "Data Scientist"}])
        response = _recommend(
            RecommendationService(FakeGenerator(recommendations=generated)),
            {"educationLevel": "high school"},
        )

        self.assertEqual(response.note, NO_ELIGIBLE_NOTE)
        self.assertEqual(response.recommendations[0].title, "Customer Service Representative")

    def test_rejections(self):
        service = RecommendationService(FakeGenerator())
        with self.assertRaises(EmptyProfileError):
            _recommend(service, {})
        with self.assertRaises(SalaryValidationError) as ctx:
            _recommend(service, {"educationLevel": "bachelor", "salaryExpectation": "₱5,000 per month"})
        self.assertIn("too low", str(ctx.exception))


if __name__ == "__main__":
    unittest.main()
