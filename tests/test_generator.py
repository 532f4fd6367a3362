# ===============================================
# ChatGenerator: assembly + tool declaration + extraction
# ===============================================

from src.generate import ChatGenerator, CitationSource, CitedTextBlock, EchoDevClient, Message, TextBlock
from src.generate.prompts import DEFAULT_SYSTEM_PROMPT


def test_echo_client_round_trip():
    gen = ChatGenerator(model_client=EchoDevClient())
    out = gen.chat(user_message="What is Distillery Labs?", history=[])
    assert out.text == "[ECHO RESPONSE]\nWhat is Distillery Labs?"
    assert out.searches_used == 0
    assert out.sources == []


def test_request_carries_prompt_budget_and_search_tool(stub_client, make_generator):
    model = stub_client()
    gen = make_generator(model)
    gen.chat(user_message="hi", history=[Message(role="agent", content="welcome back")])

    call = model.calls[0]
    assert call["system"] == DEFAULT_SYSTEM_PROMPT.strip()
    assert call["params"].max_tokens == 500
    assert [m.role for m in call["messages"]] == ["assistant", "user"]
    assert call["tools"] == [
        {
            "type": "web_search_20250305",
            "name": "web_search",
            "max_uses": 3,
            "user_location": {
                "type": "approximate",
                "city": "Peoria",
                "region": "Illinois",
                "country": "US",
                "timezone": "America/Chicago",
            },
        }
    ]


def test_usage_and_sources_are_reported(stub_client, make_generator):
    src = CitationSource(title="Peoria Magazine", url="https://peoriamagazine.com/demo-day")
    usage = {"input_tokens": 900, "output_tokens": 120, "server_tool_use": {"web_search_requests": 1}}
    model = stub_client(
        blocks=[TextBlock(text="Demo day is in May. "), CitedTextBlock(text="Tickets are free.", citations=[src])],
        usage=usage,
    )
    out = make_generator(model).chat(user_message="When is demo day?", history=[])
    assert out.text.startswith("Demo day is in May. Tickets are free.\n\nSources:\n")
    assert out.usage == usage
    assert out.searches_used == 1
    assert out.sources == [src]


def test_config_file_overrides_prompt_and_search(tmp_path, stub_client, make_generator):
    cfg = tmp_path / "config.yaml"
    cfg.write_text(
        "system_prompt: |\n  You are a test bot.\nmax_tokens: 64\nweb_search:\n  enabled: false\n",
        encoding="utf-8",
    )
    model = stub_client()
    make_generator(model, config_path=str(cfg)).chat(user_message="hi", history=[])
    call = model.calls[0]
    assert call["system"] == "You are a test bot."
    assert call["params"].max_tokens == 64
    assert call["tools"] == []


def test_missing_config_file_falls_back_to_defaults(tmp_path, stub_client, make_generator):
    model = stub_client()
    gen = make_generator(model, config_path=str(tmp_path / "nope.yaml"))
    assert gen.system_prompt == DEFAULT_SYSTEM_PROMPT.strip()
    assert gen.tools[0]["max_uses"] == 3


def test_max_tokens_comes_from_config_not_the_caller(tmp_path, stub_client, make_generator):
    cfg = tmp_path / "config.yaml"
    cfg.write_text("max_tokens: 200\n", encoding="utf-8")
    model = stub_client()
    gen = make_generator(model, config_path=str(cfg))
    gen.chat(user_message="one", history=[])
    gen.chat(user_message="two", history=[])
    assert [c["params"].max_tokens for c in model.calls] == [200, 200]
