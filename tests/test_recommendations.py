import sys
import unittest
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from resume_compat.parsing import parse_resume  # noqa: E402
from resume_compat.schemas import (  # noqa: E402
    CategoryScores,
    ContentRecommendation,
    JobRequirements,
    Recommendation,
    ResumeContent,
)
from resume_compat.services.recommendation_service import (  # noqa: E402
    build_priority_breakdown,
    category_recommendations,
    dedupe_recommendations,
    from_content_recommendations,
    generate_recommendations,
    prioritize_recommendations,
    summarize_recommendations,
)


def _scores(value):
    return CategoryScores(content=value, structure=value, keywords=value, experience=value, skills=value)


def _rec(rec_id, category, priority, title=None):
    return Recommendation(
        id=rec_id,
        category=category,
        priority=priority,
        title=title or rec_id,
        description="",
    )


class CategoryTemplateTests(unittest.TestCase):
    def test_keywords_template_requires_a_job(self):
        recs = category_recommendations(_scores(30), ResumeContent())
        self.assertEqual(
            [rec.category for rec in recs],
            ["content", "structure", "experience", "skills"],
        )
        self.assertTrue(all(rec.priority == "high" for rec in recs))

    def test_keywords_template_lists_missing_keywords(self):
        job = JobRequirements(required_skills=["kubernetes", "terraform"])
        recs = category_recommendations(_scores(30), ResumeContent(), job)
        keywords = next(rec for rec in recs if rec.category == "keywords")
        self.assertEqual(
            keywords.description,
            "Include more job-relevant keywords. Missing: kubernetes, terraform",
        )
        self.assertIn("kubernetes and terraform", keywords.examples.after)

    def test_scores_between_cutoffs_are_medium(self):
        recs = category_recommendations(_scores(65), ResumeContent(), JobRequirements())
        self.assertEqual([rec.category for rec in recs], ["content", "structure", "experience"])
        self.assertTrue(all(rec.priority == "medium" for rec in recs))

    def test_no_templates_fire_for_strong_scores(self):
        self.assertEqual(category_recommendations(_scores(90), ResumeContent(), JobRequirements()), [])


class OrderingTests(unittest.TestCase):
    def test_dedupe_is_case_insensitive_per_category(self):
        recs = [
            _rec("a", "structure", "high", "Add Missing Sections"),
            _rec("b", "structure", "medium", "add missing sections"),
            _rec("c", "content", "high", "Add Missing Sections"),
        ]
        self.assertEqual([rec.id for rec in dedupe_recommendations(recs)], ["a", "c"])

    def test_priority_then_category_order(self):
        recs = [
            _rec("skills-high", "skills", "high"),
            _rec("content-low", "content", "low"),
            _rec("content-high", "content", "high"),
            _rec("keywords-medium", "keywords", "medium"),
            _rec("structure-high", "structure", "high"),
        ]
        self.assertEqual(
            [rec.id for rec in prioritize_recommendations(recs)],
            ["content-high", "structure-high", "skills-high", "keywords-medium", "content-low"],
        )

    def test_content_recommendations_map_categories(self):
        converted = from_content_recommendations(
            [
                ContentRecommendation(
                    category="ats-compatibility",
                    priority="high",
                    title="Add Missing Sections",
                    description="Add the sections",
                ),
                ContentRecommendation(
                    category="action-verbs",
                    priority="high",
                    title="Strengthen Action Verbs",
                    description="Use stronger verbs",
                    examples=['Instead of "helped", try "assisted"'],
                ),
            ]
        )
        self.assertEqual([rec.id for rec in converted], ["content-0", "content-1"])
        self.assertEqual([rec.category for rec in converted], ["structure", "content"])
        self.assertIsNone(converted[0].examples)
        self.assertEqual(converted[1].examples.after, 'Instead of "helped", try "assisted"')


class SummaryTests(unittest.TestCase):
    def test_summary_text_and_counts(self):
        recs = [
            _rec("a", "content", "high"),
            _rec("b", "skills", "high"),
            _rec("c", "structure", "low"),
        ]
        summary = summarize_recommendations(recs)
        self.assertEqual(summary.total_recommendations, 3)
        self.assertEqual((summary.high_priority, summary.medium_priority, summary.low_priority), (2, 0, 1))
        self.assertEqual(summary.category_breakdown, {"content": 1, "skills": 1, "structure": 1})
        self.assertEqual(
            summary.summary,
            "Focus on 2 high-priority improvements first. Finally, consider 1 low-priority enhancements.",
        )

    def test_priority_breakdown_groups_titles(self):
        breakdown = build_priority_breakdown([_rec("a", "content", "high"), _rec("b", "skills", "medium")])
        self.assertEqual([item.title for item in breakdown.high], ["a"])
        self.assertEqual([item.title for item in breakdown.medium], ["b"])
        self.assertEqual(breakdown.low, [])


class GenerateRecommendationTests(unittest.TestCase):
    def test_empty_resume_gets_finalized_unique_recommendations(self):
        parsed = parse_resume("")
        result = generate_recommendations(parsed.content, parsed.sections, _scores(0))

        self.assertTrue(result.recommendations)
        keys = [(rec.category, rec.title.lower()) for rec in result.recommendations]
        self.assertEqual(len(keys), len(set(keys)))
        for rec in result.recommendations:
            self.assertTrue(rec.impact)
            self.assertIsNotNone(rec.examples)

        priorities = [rec.priority for rec in result.recommendations]
        self.assertEqual(priorities, sorted(priorities, key=["high", "medium", "low"].index))
        self.assertEqual(result.summary.total_recommendations, len(result.recommendations))
        self.assertNotIn("keywords", [rec.category for rec in result.recommendations if rec.id.startswith("category-")])


if __name__ == "__main__":
    unittest.main()
