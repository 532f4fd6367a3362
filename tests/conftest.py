import pytest

from src.generate import ChatGenerator, TextBlock


class RecordingClient:
    """Stands in for a model client; returns canned blocks and records each call."""

    def __init__(self, blocks=None, usage=None, error=None):
        self.model = "recording"
        self.blocks = blocks if blocks is not None else [TextBlock(text="ok")]
        self.usage = usage if usage is not None else {"input_tokens": 1, "output_tokens": 1}
        self.error = error
        self.calls = []

    def generate(self, messages, params, system="", tools=None):
        self.calls.append({"messages": messages, "params": params, "system": system, "tools": tools})
        if self.error is not None:
            raise self.error
        return self.blocks, self.usage


@pytest.fixture
def stub_client():
    """Factory for RecordingClient instances."""
    return RecordingClient


@pytest.fixture
def make_generator():
    def _make(client, config_path=None):
        return ChatGenerator(model_client=client, config_path=config_path)
    return _make
