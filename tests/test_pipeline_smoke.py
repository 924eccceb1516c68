import sys
import unittest
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from fastapi.testclient import TestClient  # noqa: E402

import app.main  # noqa: E402
from app.core.reference_data import get_reference_value  # noqa: E402


class PipelineSmokeTests(unittest.TestCase):
    def test_safe_imports_and_reference_lookup(self):
        self.assertEqual(get_reference_value("salary.roles")[0]["title"], "Customer Service Representative")

    def test_routes_registered(self):
        paths = {route.path for route in app.main.app.routes}
        self.assertIn("/v1/health", paths)
        self.assertIn("/v1/job-recommendations", paths)

    def test_health(self):
        resp = TestClient(app.main.app).get("/v1/health")
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json()["status"], "healthy")


if __name__ == "__main__":
    unittest.main()
