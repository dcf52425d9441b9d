import sys
import unittest
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from resume_compat.analysis.ats import (  # noqa: E402
    analyze_ats_compatibility,
    get_compatibility_level,
    get_priority_recommendations,
)
from resume_compat.parsing import parse_resume  # noqa: E402
from resume_compat.schemas import ATSRecommendation, ContactInfo, ResumeContent, WorkExperience  # noqa: E402

COMPLETE_RESUME = """Jane Doe
jane.doe@example.com | (555) 123-4567 | linkedin.com/in/janedoe
Austin, TX 78701

SUMMARY
Software engineer with 8 years of experience building scalable web platforms.

EXPERIENCE
Senior Software Engineer at Acme Corp, 2019 - Present
Led a team of 6 engineers and developed cloud services for 2 million users.
- Increased API throughput by 40% through caching improvements
- Reduced infrastructure costs by $120,000 per year
- Delivered 12 product releases on schedule

EDUCATION
Bachelor of Science in Computer Science, University of Texas, 2015

SKILLS
Python, JavaScript, SQL, AWS, Docker

CERTIFICATIONS
AWS Certified Solutions Architect, Amazon Web Services, 2021
"""


def _analyze(raw_text):
    parsed = parse_resume(raw_text)
    return analyze_ats_compatibility(parsed.content, parsed.sections)


class AtsScenarioTests(unittest.TestCase):
    def test_complete_resume_scores_high_on_every_dimension(self):
        result = _analyze(COMPLETE_RESUME)
        self.assertGreater(result.formatting_score, 80)
        self.assertGreater(result.section_organization_score, 80)
        self.assertGreater(result.readability_score, 80)
        self.assertGreater(result.professional_presentation_score, 80)
        self.assertGreater(result.overall_score, 80)
        self.assertEqual(get_compatibility_level(result.overall_score), "excellent")

    def test_name_and_email_only_reports_missing_sections(self):
        result = _analyze("Jane Doe\njane@example.com")
        self.assertLess(result.section_organization_score, 50)
        organization_issues = [issue for issue in result.issues if issue.category == "organization"]
        self.assertTrue(
            any("Missing required sections" in issue.description for issue in organization_issues)
        )
        missing = next(i for i in organization_issues if "Missing required sections" in i.description)
        self.assertIn("experience", missing.description)
        self.assertIn("skills", missing.description)
        self.assertEqual(missing.severity, "high")

    def test_mixed_date_formats_are_flagged(self):
        raw = (
            "Jane Doe\njane.doe@example.com\n\nEXPERIENCE\n"
            "Software Engineer at Acme Corp, 2020-2023\nBuilt services.\n"
            "Developer at Beta Inc, 01/2018-12/2019\nWrote code.\n"
        )
        result = _analyze(raw)
        presentation = [issue for issue in result.issues if issue.category == "presentation"]
        self.assertTrue(any("Inconsistent date formatting" in issue.description for issue in presentation))

    def test_empty_resume_is_poor_with_issues(self):
        result = _analyze("")
        self.assertEqual(result.formatting_score, 100)
        self.assertEqual(result.section_organization_score, 0)
        self.assertEqual(result.readability_score, 90)
        self.assertEqual(result.professional_presentation_score, 95)
        self.assertEqual(result.overall_score, 67)
        self.assertTrue(result.issues)
        self.assertTrue(result.recommendations)


class AtsPenaltyTests(unittest.TestCase):
    def test_complex_formatting_and_mixed_bullets(self):
        raw = COMPLETE_RESUME + "\n".join(
            [
                "\tIndented\twith\ttabs",
                "Columns    separated    by    spaces",
                "• bullet one",
                "* bullet two",
            ]
        )
        result = _analyze(raw)
        formatting_titles = [rec.title for rec in result.recommendations if rec.category == "formatting"]
        self.assertIn("Simplify Formatting", formatting_titles)
        self.assertIn("Standardize Bullet Points", formatting_titles)
        self.assertEqual(result.formatting_score, 75)

    def test_unprofessional_email_and_missing_linkedin(self):
        content = ResumeContent(
            raw_text="",
            contact_info=ContactInfo(name="Sam Lee", email="coolninja1999@hotmail.com"),
        )
        result = analyze_ats_compatibility(content, [])
        titles = [rec.title for rec in result.recommendations if rec.category == "presentation"]
        self.assertIn("Use Professional Email", titles)
        self.assertIn("Add LinkedIn Profile", titles)
        self.assertEqual(result.professional_presentation_score, 80)

    def test_capitalization_penalty_counts_fields(self):
        content = ResumeContent(
            raw_text="",
            contact_info=ContactInfo(name="SAMANTHA LEE", linkedin="linkedin.com/in/sam"),
            experience=[WorkExperience(position="software developer", company="Acme Corp")],
        )
        result = analyze_ats_compatibility(content, [])
        self.assertEqual(result.professional_presentation_score, 94)

    def test_scores_never_go_below_zero(self):
        result = _analyze("")
        for score in (
            result.overall_score,
            result.formatting_score,
            result.section_organization_score,
            result.readability_score,
            result.professional_presentation_score,
        ):
            self.assertGreaterEqual(score, 0)
            self.assertLessEqual(score, 100)


class PriorityRecommendationTests(unittest.TestCase):
    def _rec(self, title, priority):
        return ATSRecommendation(category="formatting", priority=priority, title=title, description=title)

    def test_returns_only_high_priority_items(self):
        recommendations = [
            self._rec("a", "high"),
            self._rec("b", "low"),
            self._rec("c", "high"),
            self._rec("d", "medium"),
            self._rec("e", "high"),
            self._rec("f", "low"),
        ]
        selected = get_priority_recommendations(recommendations)
        self.assertEqual([rec.title for rec in selected], ["a", "c", "e"])

    def test_caps_at_five(self):
        recommendations = [self._rec(str(index), "high") for index in range(8)]
        self.assertEqual(len(get_priority_recommendations(recommendations)), 5)

    def test_compatibility_levels(self):
        self.assertEqual(get_compatibility_level(90), "excellent")
        self.assertEqual(get_compatibility_level(75), "good")
        self.assertEqual(get_compatibility_level(60), "fair")
        self.assertEqual(get_compatibility_level(59), "poor")


if __name__ == "__main__":
    unittest.main()
