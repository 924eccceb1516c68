import unittest
import sys
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from app.core.reference_data import get_reference_data, get_reference_value


class ReferenceDataTests(unittest.TestCase):
    def test_loader_and_value_lookup(self):
        data = get_reference_data()
        self.assertIsInstance(data, dict)
        self.assertEqual(get_reference_value("salary.seniority.entry_pattern"), "assistant|junior|entry")
        self.assertEqual(get_reference_value("salary.industries.retail.default"), [12000, 20000])

    def test_missing_path_returns_default(self):
        self.assertIsNone(get_reference_value("salary.unknown.key"))
        self.assertEqual(get_reference_value("salary.roles.title", "fallback"), "fallback")
        self.assertEqual(get_reference_value("", 7), 7)

    def test_non_degree_titles_present(self):
        titles = get_reference_value("non_degree_titles")
        self.assertIn("Administrative Assistant", titles)
        self.assertIn("Warehouse Associate", titles)


if __name__ == "__main__":
    unittest.main()
