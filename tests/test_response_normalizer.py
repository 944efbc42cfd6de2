import json
import unittest

from careerforge.core.response_normalizer import analysis_fallback, normalize_analysis, normalize_content

VALID_ANALYSIS = {
    "overall_score": 72,
    "formatting_score": 80,
    "keyword_score": 55.5,
    "structure_score": 90,
    "content_score": 64,
    "issues": [
        {"title": "Missing metrics", "description": "Bullets lack numbers.", "severity": "warning"},
        {"title": "Tables used", "description": "ATS parsers skip tables.", "severity": "critical"},
    ],
    "recommended_keywords": ["Kubernetes", "CI/CD"],
    "suggestions": ["Quantify achievements.", "Remove tables."],
}


class TestAnalysisNormalizer(unittest.TestCase):

    def test_valid_analysis_is_returned_unchanged(self):
        result = normalize_analysis(json.dumps(VALID_ANALYSIS))
        self.assertEqual(result, VALID_ANALYSIS)
        self.assertEqual(json.dumps(result), json.dumps(VALID_ANALYSIS))

    def test_markdown_fenced_json_is_accepted(self):
        result = normalize_analysis("```json\n" + json.dumps(VALID_ANALYSIS) + "\n```")
        self.assertEqual(result, VALID_ANALYSIS)

    def test_invalid_json_yields_fallback(self):
        result = normalize_analysis("Sure! Here is your analysis: overall 7/10")
        self.assertEqual(result["overall_score"], 0)
        self.assertEqual(result["issues"][0]["title"], "Analysis Failure")
        self.assertEqual(result["issues"][0]["severity"], "warning")
        self.assertTrue(result["suggestions"])

    def test_empty_or_missing_text_yields_fallback(self):
        self.assertEqual(normalize_analysis(""), analysis_fallback())
        self.assertEqual(normalize_analysis(None), analysis_fallback())

    def test_schema_violations_yield_fallback(self):
        out_of_range = dict(VALID_ANALYSIS, overall_score=140)
        bad_severity = dict(VALID_ANALYSIS, issues=[{"title": "x", "description": "y", "severity": "fatal"}])
        missing_field = {k: v for k, v in VALID_ANALYSIS.items() if k != "suggestions"}
        extra_field = dict(VALID_ANALYSIS, verdict="hire")
        string_score = dict(VALID_ANALYSIS, overall_score="85")
        bool_score = dict(VALID_ANALYSIS, formatting_score=True)

        for payload in (out_of_range, bad_severity, missing_field, extra_field, string_score, bool_score, [VALID_ANALYSIS]):
            self.assertEqual(normalize_analysis(json.dumps(payload)), analysis_fallback())


class TestContentNormalizer(unittest.TestCase):

    def test_plain_text_is_wrapped_verbatim(self):
        self.assertEqual(normalize_content("foo"), {"content": "foo"})
        self.assertEqual(normalize_content("  line one\n\nline two  "), {"content": "  line one\n\nline two  "})

    def test_empty_text(self):
        self.assertEqual(normalize_content(None), {"content": ""})


if __name__ == "__main__":
    unittest.main()
