import unittest

from taskforge_gateway.http_server.route import Route


class TestRoute(unittest.TestCase):
    def test_static_path(self):
        route = Route(verb="GET", path="/health")
        self.assertEqual(route.match("GET", "/health"), {})
        self.assertIsNone(route.match("POST", "/health"))
        self.assertIsNone(route.match("GET", "/healthz"))

    def test_path_parameter(self):
        route = Route(verb="POST", path="/invoke/:function_id")
        self.assertEqual(
            route.match("POST", "/invoke/fn-123"), {"function_id": "fn-123"}
        )

    def test_parameter_is_percent_decoded(self):
        route = Route(verb="GET", path="/jobs/:execution_id")
        self.assertEqual(
            route.match("GET", "/jobs/ex%3A9%20a"), {"execution_id": "ex:9 a"}
        )

    def test_parameter_matches_single_non_empty_segment(self):
        route = Route(verb="GET", path="/jobs/:execution_id")
        self.assertIsNone(route.match("GET", "/jobs/"))
        self.assertIsNone(route.match("GET", "/jobs"))
        self.assertIsNone(route.match("GET", "/jobs/a/b"))

    def test_trailing_slash_and_query_are_ignored(self):
        route = Route(verb="GET", path="/jobs/:execution_id")
        self.assertEqual(
            route.match("GET", "/jobs/ex-9/?verbose=1"), {"execution_id": "ex-9"}
        )
        self.assertEqual(
            Route(verb="POST", path="/functions").match("POST", "/functions/"), {}
        )


if __name__ == "__main__":
    unittest.main()
