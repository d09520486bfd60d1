"""
Phishing classification relay.

Accepts batches of email summaries over HTTP, asks a hosted Gemini model
to judge each one, and returns the model's answer in a stable schema:
- isPhishing verdict per email
- confidence clamped to [0, 1]
- up to 8 short reasons

Architecture: FastAPI relay + Gemini REST client + response normalization
"""

__version__ = "0.1.0"
