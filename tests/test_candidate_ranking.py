import sys
import unittest
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from resume_compat.features.job_type import weights_for_job_type  # noqa: E402
from resume_compat.parsing import parse_resume  # noqa: E402
from resume_compat.schemas import (  # noqa: E402
    CandidateData,
    CategoryScores,
    JobRequirements,
    ResumeContent,
    ScoredCandidate,
    ScoringResult,
)
from resume_compat.services.ranking_service import (  # noqa: E402
    default_ranking_criteria,
    detect_bias,
    generate_comparative_analysis,
    generate_hiring_recommendation,
    identify_strengths,
    identify_weaknesses,
    order_candidates,
    percentile_for_index,
    rank_candidates,
)
from resume_compat.services.scoring_service import build_breakdown, build_explanation  # noqa: E402

STRONG_RESUME = """Jane Doe
jane.doe@example.com | (555) 123-4567 | linkedin.com/in/janedoe

SUMMARY
Software engineer with 8 years of experience building scalable web platforms.

EXPERIENCE
Senior Software Engineer at Acme Corp, 2019 - Present
Led a team of 6 engineers and developed Python services for 2 million users.
- Increased API throughput by 40% through caching improvements
- Reduced infrastructure costs by $120,000 per year

EDUCATION
Bachelor of Science in Computer Science, University of Texas, 2015

SKILLS
Python, JavaScript, SQL, AWS, Docker
"""


def _scored(candidate_id, overall, confidence="medium", **category_overrides):
    values = {name: overall for name in ("content", "structure", "keywords", "experience", "skills")}
    values.update(category_overrides)
    scores = CategoryScores(**values)
    weights = weights_for_job_type("general")
    result = ScoringResult(
        overall_score=overall,
        category_scores=scores,
        weights=weights,
        explanation=build_explanation(scores, weights, overall),
        breakdown=build_breakdown(scores, weights),
        confidence_level=confidence,
    )
    return ScoredCandidate(
        candidate_id=candidate_id,
        content=ResumeContent(),
        scoring_result=result,
        strengths=identify_strengths(result),
        weaknesses=identify_weaknesses(result),
    )


def _candidate(candidate_id, raw_text, name=""):
    parsed = parse_resume(raw_text)
    return CandidateData(candidate_id=candidate_id, name=name, content=parsed.content, sections=parsed.sections)


class OrderingTests(unittest.TestCase):
    def test_higher_overall_score_ranks_first(self):
        ordered = order_candidates(
            [_scored("c", 50), _scored("a", 90), _scored("b", 70)],
            default_ranking_criteria(),
        )
        self.assertEqual([candidate.candidate_id for candidate in ordered], ["a", "b", "c"])

    def test_close_scores_fall_back_to_confidence(self):
        ordered = order_candidates(
            [_scored("slightly-higher", 82, "low"), _scored("confident", 80, "high")],
            default_ranking_criteria(),
        )
        self.assertEqual([candidate.candidate_id for candidate in ordered], ["confident", "slightly-higher"])

    def test_full_ties_keep_input_order(self):
        ordered = order_candidates(
            [_scored("first", 80), _scored("second", 80), _scored("third", 80)],
            default_ranking_criteria(),
        )
        self.assertEqual([candidate.candidate_id for candidate in ordered], ["first", "second", "third"])

    def test_percentile_for_index(self):
        self.assertEqual(percentile_for_index(0, 4), 100.0)
        self.assertEqual(percentile_for_index(3, 4), 25.0)
        self.assertEqual(percentile_for_index(0, 1), 100.0)


class StrengthWeaknessTests(unittest.TestCase):
    def test_strengths_and_weaknesses(self):
        candidate = _scored("a", 70, content=95, structure=85, keywords=30, experience=45, skills=55)
        self.assertEqual(
            [(s.category, s.impact) for s in candidate.strengths],
            [("content", "high"), ("structure", "medium")],
        )
        self.assertEqual(
            [(w.category, w.severity) for w in candidate.weaknesses],
            [("keywords", "high"), ("experience", "medium"), ("skills", "low")],
        )
        self.assertEqual(len(candidate.weaknesses[0].improvement_suggestions), 3)


class HiringRecommendationTests(unittest.TestCase):
    def test_decision_ladder(self):
        cases = [
            (90, 0, "strong_hire"),
            (78, 1, "hire"),
            (68, 2, "maybe"),
            (55, 4, "no_hire"),
            (30, 4, "strong_no_hire"),
        ]
        for score, index, expected in cases:
            with self.subTest(score=score):
                recommendation = generate_hiring_recommendation(_scored("x", score), index, 5)
                self.assertEqual(recommendation.recommendation, expected)

    def test_strong_hire_reasoning_and_confidence(self):
        recommendation = generate_hiring_recommendation(_scored("x", 90, "high"), 0, 5)
        self.assertEqual(recommendation.confidence, "high")
        self.assertIn("Ranks in top 0% of candidates", recommendation.reasoning)
        self.assertIn("Schedule interview immediately", recommendation.next_steps)
        self.assertIn("Consider for technical leadership roles", recommendation.next_steps)

    def test_high_score_with_low_percentile_is_not_strong_hire(self):
        recommendation = generate_hiring_recommendation(_scored("x", 90), 4, 5)
        self.assertEqual(recommendation.recommendation, "no_hire")

    def test_overqualification_warning_lowers_confidence(self):
        candidate = _scored("x", 98, "high")
        self.assertEqual([warning.type for warning in detect_bias(candidate)], ["overqualification_bias"])

        recommendation = generate_hiring_recommendation(candidate, 0, 3)
        self.assertEqual(recommendation.recommendation, "strong_hire")
        self.assertEqual(recommendation.confidence, "medium")
        self.assertEqual(recommendation.reasoning[-1], "Note: Potential bias factors detected - review carefully")

    def test_weak_experience_suggests_junior_roles(self):
        recommendation = generate_hiring_recommendation(_scored("x", 30, experience=10), 0, 1)
        self.assertIn("Consider for junior or mid-level positions instead", recommendation.next_steps)

    def test_no_bias_warnings_for_typical_candidate(self):
        self.assertEqual(detect_bias(_scored("x", 70)), [])


class ComparativeAnalysisTests(unittest.TestCase):
    def test_leader_and_trailer(self):
        ordered = [_scored("a", 90), _scored("b", 85), _scored("c", 60), _scored("d", 40)]

        leader = generate_comparative_analysis(0, ordered)
        self.assertEqual(leader.overall_rank, 1)
        self.assertEqual(leader.percentile_rank, 100.0)
        self.assertEqual(leader.similar_candidates_count, 1)
        self.assertEqual(leader.differentiating_factors, [])
        self.assertIn("Top 25% in content", leader.competitive_advantages)
        self.assertEqual(leader.improvement_opportunities, [])

        trailer = generate_comparative_analysis(3, ordered)
        self.assertEqual(trailer.overall_rank, 4)
        self.assertEqual(trailer.percentile_rank, 25.0)
        self.assertEqual(trailer.similar_candidates_count, 0)
        self.assertEqual(trailer.differentiating_factors, [])
        self.assertEqual(trailer.category_percentiles["skills"], 25.0)
        self.assertIn("Improvement needed in skills", trailer.improvement_opportunities)

    def test_differentiating_factors_against_similar_candidates(self):
        ordered = [
            _scored("a", 75, content=95, structure=70, keywords=70, experience=70, skills=70),
            _scored("b", 72, content=70, structure=70, keywords=70, experience=70, skills=70),
        ]
        analysis = generate_comparative_analysis(0, ordered)
        self.assertEqual(analysis.similar_candidates_count, 1)
        self.assertEqual(analysis.differentiating_factors, ["Stronger content performance than similar candidates"])


class RankCandidatesTests(unittest.TestCase):
    def test_strong_resume_outranks_empty_resume(self):
        job = JobRequirements(required_skills=["Python", "AWS"], preferred_skills=["Docker"])
        ranked = rank_candidates(
            [_candidate("empty", ""), _candidate("strong", STRONG_RESUME, "Jane Doe")],
            job,
            "Senior Python developer",
        )
        self.assertEqual([candidate.candidate_id for candidate in ranked], ["strong", "empty"])
        self.assertEqual([candidate.rank for candidate in ranked], [1, 2])
        self.assertEqual(ranked[0].name, "Jane Doe")
        self.assertEqual(ranked[0].comparative_analysis.total_candidates, 2)
        self.assertEqual(ranked[1].comparative_analysis.percentile_rank, 50.0)
        self.assertGreater(
            ranked[0].scoring_result.overall_score,
            ranked[1].scoring_result.overall_score,
        )
        self.assertEqual(ranked[1].hiring_recommendation.recommendation, "strong_no_hire")

    def test_empty_candidate_list(self):
        with self.assertLogs("resume_compat.services.ranking_service", level="WARNING"):
            self.assertEqual(rank_candidates([]), [])


if __name__ == "__main__":
    unittest.main()
