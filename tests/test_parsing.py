import sys
import unittest
from pathlib import Path

from pydantic import ValidationError

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from resume_compat.parsing import (  # noqa: E402
    detect_section_kind,
    detect_sections,
    extract_contact_info,
    extract_resume_keywords,
    extract_skills,
    parse_resume,
    reconstruct_text,
)
from resume_compat.parsing.extractors import (  # noqa: E402
    parse_certification_line,
    parse_date_range,
    parse_education_line,
    parse_job_header,
)
from resume_compat.parsing.utils import non_blank_lines  # noqa: E402

SAMPLE_RESUME = """Jane Doe
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


class SectionDetectionTests(unittest.TestCase):
    def test_detects_sections_in_document_order(self):
        sections = detect_sections(SAMPLE_RESUME)
        self.assertEqual(
            [section.kind for section in sections],
            ["contact", "summary", "experience", "education", "skills", "certifications"],
        )

    def test_sections_partition_non_blank_text(self):
        sections = detect_sections(SAMPLE_RESUME)
        self.assertEqual(sections[0].start_offset, 0)
        for previous, following in zip(sections, sections[1:]):
            self.assertLessEqual(previous.end_offset, following.start_offset)
        for section in sections:
            span = SAMPLE_RESUME[section.start_offset:section.end_offset]
            self.assertEqual("\n".join(non_blank_lines(span)), section.text)

        all_section_lines = [line for section in sections for line in section.lines]
        self.assertEqual(all_section_lines, non_blank_lines(SAMPLE_RESUME))

    def test_reparsing_reconstructed_text_is_stable(self):
        sections = detect_sections(SAMPLE_RESUME)
        reparsed = detect_sections(reconstruct_text(sections))
        self.assertEqual([s.kind for s in reparsed], [s.kind for s in sections])
        self.assertEqual([s.text for s in reparsed], [s.text for s in sections])

    def test_header_classification(self):
        self.assertEqual(detect_section_kind("Work Experience"), "experience")
        self.assertEqual(detect_section_kind("TECHNICAL SKILLS"), "skills")
        self.assertEqual(detect_section_kind("Professional Summary:"), "summary")
        self.assertEqual(detect_section_kind("- experience with python"), "unknown")
        self.assertEqual(detect_section_kind("jane@example.com"), "unknown")
        self.assertEqual(
            detect_section_kind("Gained experience across several large distributed systems teams"),
            "unknown",
        )

    def test_empty_text_has_no_sections(self):
        self.assertEqual(detect_sections(""), [])


class ExtractionTests(unittest.TestCase):
    def setUp(self):
        self.parsed = parse_resume(SAMPLE_RESUME)
        self.content = self.parsed.content

    def test_contact_info(self):
        contact = self.content.contact_info
        self.assertEqual(contact.name, "Jane Doe")
        self.assertEqual(contact.email, "jane.doe@example.com")
        self.assertEqual(contact.phone, "(555) 123-4567")
        self.assertEqual(contact.linkedin, "linkedin.com/in/janedoe")
        self.assertEqual(contact.address, "Austin, TX 78701")
        self.assertIsNone(contact.website)

    def test_summary(self):
        self.assertEqual(
            self.content.summary,
            "Software engineer with 8 years of experience building scalable web platforms.",
        )

    def test_work_experience(self):
        self.assertEqual(len(self.content.experience), 1)
        job = self.content.experience[0]
        self.assertEqual(job.position, "Senior Software Engineer")
        self.assertEqual(job.company, "Acme Corp")
        self.assertEqual(job.start_date, "2019")
        self.assertIsNone(job.end_date)
        self.assertTrue(job.is_current)
        self.assertEqual(
            job.achievements,
            [
                "Increased API throughput by 40% through caching improvements",
                "Reduced infrastructure costs by $120,000 per year",
                "Delivered 12 product releases on schedule",
            ],
        )
        self.assertIn("Led a team of 6 engineers", job.description)

    def test_education(self):
        self.assertEqual(len(self.content.education), 1)
        education = self.content.education[0]
        self.assertEqual(education.degree, "Bachelor of Science")
        self.assertEqual(education.field, "Computer Science")
        self.assertEqual(education.institution, "University of Texas")
        self.assertEqual(education.graduation_date, "2015")

    def test_skills_and_certifications(self):
        self.assertEqual(self.content.skills, ["Python", "JavaScript", "SQL", "AWS", "Docker"])
        self.assertEqual(len(self.content.certifications), 1)
        certification = self.content.certifications[0]
        self.assertEqual(certification.name, "AWS Certified Solutions Architect")
        self.assertEqual(certification.issuer, "Amazon Web Services")
        self.assertEqual(certification.date, "2021")

    def test_parsed_entities_are_frozen(self):
        with self.assertRaises(ValidationError):
            self.content.experience[0].company = "Other Corp"
        with self.assertRaises(ValidationError):
            self.content.education[0].degree = "PhD"
        with self.assertRaises(ValidationError):
            self.content.certifications[0].issuer = "Someone else"
        with self.assertRaises(ValidationError):
            self.content.contact_info.email = "other@example.com"
        self.assertEqual(self.content.experience[0].company, "Acme Corp")

    def test_resume_keywords(self):
        keywords = extract_resume_keywords(self.content)
        self.assertIn("Python", keywords)
        self.assertIn("Senior Software Engineer", keywords)
        self.assertIn("Acme Corp", keywords)
        self.assertIn("Computer Science", keywords)
        self.assertEqual(len(keywords), len(set(keywords)))


class LineParserTests(unittest.TestCase):
    def test_job_header_without_company(self):
        job = parse_job_header("Freelance Consultant 2018 - 2019")
        self.assertEqual(job.position, "Freelance Consultant")
        self.assertIsNone(job.company)
        self.assertEqual((job.start_date, job.end_date), ("2018", "2019"))

    def test_job_header_separators(self):
        self.assertEqual(parse_job_header("Designer @ Studio X").company, "Studio X")
        job = parse_job_header("Analyst, Globex (Remote)")
        self.assertEqual((job.position, job.company), ("Analyst", "Globex"))

    def test_date_range_forms(self):
        self.assertEqual(parse_date_range("Jan 2020 to Present"), ("Jan 2020", None, True))
        self.assertEqual(parse_date_range("01/2018-12/2019"), ("01/2018", "12/2019", True))
        self.assertEqual(parse_date_range("no dates here"), (None, None, False))

    def test_bare_date_line_attaches_to_previous_title(self):
        parsed = parse_resume("EXPERIENCE\nData Analyst at Initech\n2016 - 2018\nBuilt weekly reports.")
        self.assertEqual(len(parsed.content.experience), 1)
        job = parsed.content.experience[0]
        self.assertEqual(job.company, "Initech")
        self.assertEqual((job.start_date, job.end_date), ("2016", "2018"))
        self.assertEqual(job.description, "Built weekly reports.")

    def test_education_line_with_parenthetical_year(self):
        education = parse_education_line("Master of Science in Data Science from Stanford University (2019)")
        self.assertIsNotNone(education)
        self.assertEqual(education.degree, "Master of Science")
        self.assertEqual(education.field, "Data Science")
        self.assertEqual(education.institution, "Stanford University")
        self.assertEqual(education.graduation_date, "2019")
        self.assertIsNone(parse_education_line("Completed online coursework, 2020"))

    def test_certification_line(self):
        certification = parse_certification_line("PMP by Project Management Institute (2018, renewed 2021)")
        self.assertEqual(certification.name, "PMP")
        self.assertEqual(certification.issuer, "Project Management Institute")
        self.assertEqual(certification.date, "2021")

    def test_skill_labels_are_stripped(self):
        sections = detect_sections("SKILLS\nProgramming: Python, Go; Rust\nPython | SQL")
        self.assertEqual(extract_skills(sections), ["Python", "Go", "Rust", "SQL"])

    def test_contact_falls_back_to_leading_text(self):
        raw = "SUMMARY\nReach me at jane@x.io"
        contact = extract_contact_info(raw, detect_sections(raw))
        self.assertEqual(contact.email, "jane@x.io")
        self.assertIsNone(contact.name)


class EmptyInputTests(unittest.TestCase):
    def test_empty_resume_parses_to_empty_content(self):
        parsed = parse_resume("")
        self.assertEqual(parsed.sections, [])
        self.assertIsNone(parsed.content.contact_info.name)
        self.assertEqual(parsed.content.experience, [])
        self.assertEqual(parsed.content.skills, [])


if __name__ == "__main__":
    unittest.main()
