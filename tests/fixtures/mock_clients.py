import httpx

from tests.fixtures.responses import completion_body


class FakeLLMClient:
    """Upstream mock that records POSTs and replays queued outcomes."""

    def __init__(self, outcomes=None):
        self.outcomes = list(outcomes or [])
        self.call_history = []

    async def post(self, url, json=None, headers=None, **kwargs):
        self.call_history.append({"url": url, "json": json, "headers": headers})

        outcome = self.outcomes.pop(0) if self.outcomes else completion_body("default response")
        if isinstance(outcome, Exception):
            raise outcome
        if isinstance(outcome, httpx.Response):
            return outcome
        return httpx.Response(200, json=outcome)

    @property
    def last_messages(self):
        return self.call_history[-1]["json"]["messages"]


class LLMClientBuilder:
    """Factory for configuring FakeLLMClient outcomes call by call."""

    def __init__(self):
        self.outcomes = []

    def reply(self, content):
        self.outcomes.append(completion_body(content))
        return self

    def status(self, code, body=""):
        self.outcomes.append(httpx.Response(code, text=body))
        return self

    def raw(self, json_body):
        self.outcomes.append(httpx.Response(200, json=json_body))
        return self

    def fail(self, exc=None):
        self.outcomes.append(exc or httpx.ConnectError("connection refused"))
        return self

    def build(self):
        return FakeLLMClient(self.outcomes)
