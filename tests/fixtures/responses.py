def completion_body(content):
    """Minimal OpenRouter chat-completion response."""
    return {
        "id": "gen-123",
        "model": "google/gemini-flash-1.5-8b",
        "choices": [
            {
                "index": 0,
                "finish_reason": "stop",
                "message": {"role": "assistant", "content": content},
            }
        ],
    }


SAMPLE_RESUME_TEXT = """Jordan Reyes
Senior Backend Engineer

Experience
Acme Corp, 2019-2024: built payment APIs in Python and FastAPI.

Skills
Python, PostgreSQL, Kubernetes, AWS"""
