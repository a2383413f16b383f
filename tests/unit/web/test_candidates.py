#!/usr/bin/env python3
"""
Unit tests for the candidate listing endpoints.
"""

import unittest

from core.app_context import AppContext
from core.config_loader import AppConfig
from core.exceptions import StorageError
from storage.memory import InMemoryObjectStore
from tests import FakeLLM, build_pdf


class TestCandidatesEndpoints(unittest.TestCase):

    def setUp(self):
        from fastapi.testclient import TestClient
        from web.backend.routers.candidates import router
        from web.backend.dependencies import get_app_context
        from web.backend.exceptions import add_exception_handlers
        from fastapi import FastAPI

        self.store = InMemoryObjectStore(bucket_name="test-bucket")
        self.ctx = AppContext.from_components(AppConfig(), self.store, FakeLLM())

        self.app = FastAPI()
        add_exception_handlers(self.app)
        self.app.include_router(router)
        self.app.dependency_overrides[get_app_context] = lambda: self.ctx
        self.client = TestClient(self.app, raise_server_exceptions=False)

    def test_list_empty(self):
        response = self.client.get('/candidates/all')

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json(), [])

    def test_list_after_upload(self):
        result = self.ctx.pipeline.submit(build_pdf(), 'application/pdf')

        response = self.client.get('/candidates/all')

        self.assertEqual(response.status_code, 200)
        data = response.json()
        self.assertEqual(len(data), 1)
        self.assertEqual(data[0]['name'], 'jane_q_doe')
        self.assertEqual(data[0]['fileName'], result.parsed_key)
        self.assertIn('jane.doe@example.com', data[0]['content'])
        self.assertEqual(data[0]['status'], 'ready')
        self.assertIsNone(data[0]['error'])

    def test_get_single_candidate(self):
        result = self.ctx.pipeline.submit(build_pdf(), 'application/pdf')

        response = self.client.get(f'/candidates/{result.parsed_key}')

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()['fileName'], result.parsed_key)

    def test_get_missing_candidate(self):
        response = self.client.get('/candidates/parsed/nobody-00000000.txt')

        self.assertEqual(response.status_code, 404)
        self.assertEqual(response.json()['error'], 'Candidate not found')

    def test_listing_failure_is_generic_500(self):
        def broken_list(prefix=""):
            raise StorageError("credentials rejected for bucket test-bucket")

        self.store.list = broken_list

        response = self.client.get('/candidates/all')

        self.assertEqual(response.status_code, 500)
        self.assertNotIn('credentials', response.text)


if __name__ == '__main__':
    unittest.main()
