#!/usr/bin/env python3
"""
Unit tests for the POST /parseresume endpoint.
"""

import unittest

from core.app_context import AppContext
from core.config_loader import AppConfig
from storage.memory import InMemoryObjectStore
from tests import FakeLLM, sample_profile_json


class TestParseResumeEndpoint(unittest.TestCase):

    def setUp(self):
        from fastapi.testclient import TestClient
        from web.backend.routers.ai import router
        from web.backend.dependencies import get_app_context
        from web.backend.exceptions import add_exception_handlers
        from fastapi import FastAPI

        self.store = InMemoryObjectStore(bucket_name="test-bucket")
        self.llm = FakeLLM()
        self.ctx = AppContext.from_components(AppConfig(), self.store, self.llm)

        self.app = FastAPI()
        add_exception_handlers(self.app)
        self.app.include_router(router)
        self.app.dependency_overrides[get_app_context] = lambda: self.ctx
        self.client = TestClient(self.app, raise_server_exceptions=False)

    def test_returns_profile(self):
        response = self.client.post('/parseresume', json={'rawpdf': 'Jane Q. Doe\njane.doe@example.com'})

        self.assertEqual(response.status_code, 200)
        data = response.json()
        self.assertEqual(data['name'], 'Jane Q. Doe')
        self.assertEqual(data['email'], 'jane.doe@example.com')
        self.assertEqual(data['skills'], ['Python', 'Kafka', 'SQL'])
        self.assertEqual(len(self.llm.calls), 1)
        self.assertIn('jane.doe@example.com', self.llm.calls[0]['user_message'])

    def test_nothing_is_persisted(self):
        self.client.post('/parseresume', json={'rawpdf': 'Jane Q. Doe'})

        self.assertEqual(self.store.list(), [])

    def test_invalid_model_output_is_500(self):
        self.llm.responses = [sample_profile_json(email='nope')]

        response = self.client.post('/parseresume', json={'rawpdf': 'Jane Q. Doe'})

        self.assertEqual(response.status_code, 500)
        self.assertFalse(response.json()['success'])

    def test_missing_body_field(self):
        response = self.client.post('/parseresume', json={'text': 'Jane'})

        self.assertEqual(response.status_code, 422)


if __name__ == '__main__':
    unittest.main()
