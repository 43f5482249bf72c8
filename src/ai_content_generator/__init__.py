"""
AI Content Generator package.

Provides:
- Prompt catalog (content types and tones) with placeholder rendering
- Gemini generateContent client with bounded retry on rate limiting
- Sentence-safe content finishing for length-limited formats
- FastAPI service and a one-shot CLI
"""
