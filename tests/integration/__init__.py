"""
Integration tests: the full FastAPI app through TestClient, with the
upstream client replaced by a mock.
"""
