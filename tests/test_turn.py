import json

import pytest

from auriga.agent import AgentId
from auriga.turn import (
    AssistantMeta,
    ImageBlock,
    ImageSource,
    ImageSourceType,
    MessageType,
    StopReason,
    SystemMeta,
    TextBlock,
    ThinkingBlock,
    TokenUsage,
    ToolResultBlock,
    ToolUseBlock,
    TurnBuilder,
    TurnId,
    TurnRole,
    TurnStatus,
    UserMeta,
    content_from_json,
    content_to_json,
    meta_from_json,
    meta_to_json,
)


def _builder(**overrides):
    values = dict(
        uuid="uuid-u1",
        parent_uuid=None,
        session_id="sess-1",
        timestamp="2026-03-01T10:00:00Z",
        message_type=MessageType.USER,
        cwd="/home/user",
        git_branch="main",
        role=TurnRole.USER,
        content="hello",
        meta=UserMeta(),
        status=TurnStatus.COMPLETE,
        extra={},
    )
    values.update(overrides)
    return TurnBuilder(**values)


def test_turn_id_equality():
    assert TurnId(1) == TurnId(1)
    assert TurnId(1) != TurnId(2)


def test_content_block_text():
    block = TextBlock(text="hello")
    assert block.text == "hello"


def test_content_block_thinking():
    block = ThinkingBlock(thinking="hmm", signature="sig")
    assert block.thinking == "hmm"
    assert block.signature == "sig"


def test_content_block_tool_use():
    block = ToolUseBlock(id="1", name="read", input={"path": "/test"})
    assert block.id == "1"
    assert block.name == "read"
    assert block.input["path"] == "/test"


def test_content_block_tool_result():
    block = ToolResultBlock(tool_use_id="1", content="result", is_error=False)
    assert block.tool_use_id == "1"
    assert block.is_error is False
    assert block.content == "result"


def test_content_block_image():
    block = ImageBlock(source=ImageSource(ImageSourceType.BASE64, "image/png", "iVBOR..."))
    assert block.source.source_type is ImageSourceType.BASE64
    assert block.source.media_type == "image/png"


def test_token_usage_total():
    usage = TokenUsage(100, 50, cache_creation_input_tokens=10)
    assert usage.input_tokens == 100
    assert usage.output_tokens == 50
    assert usage.total() == 150


def test_token_usage_dict_round_trip():
    usage = TokenUsage(500, 200, cache_creation_input_tokens=10)
    data = usage.to_dict()
    assert data["cache_read_input_tokens"] is None
    assert TokenUsage.from_dict(data) == usage


def test_token_usage_optional_fields_may_be_missing():
    usage = TokenUsage.from_dict({"input_tokens": 1, "output_tokens": 2})
    assert usage.cache_creation_input_tokens is None
    assert usage.cache_read_input_tokens is None


@pytest.mark.parametrize(
    "data",
    [
        {"output_tokens": 2},
        {"input_tokens": -1, "output_tokens": 2},
        {"input_tokens": "1", "output_tokens": 2},
        [1, 2],
    ],
)
def test_token_usage_rejects_bad_data(data):
    with pytest.raises(ValueError):
        TokenUsage.from_dict(data)


def test_text_content_json_format():
    assert content_to_json("hello") == {"Text": "hello"}
    assert content_from_json({"Text": "hello"}) == "hello"


def test_blocks_content_json_format():
    data = content_to_json([TextBlock("hello")])
    assert data == {"Blocks": [{"Text": {"text": "hello"}}]}


def test_all_blocks_round_trip_through_json_text():
    content = [
        TextBlock("hello"),
        ThinkingBlock("hmm", None),
        ToolUseBlock("t1", "Bash", {"command": "ls"}),
        ToolResultBlock("t1", [TextBlock("nested")], is_error=True),
        ToolResultBlock("t2", "plain", is_error=False),
        ImageBlock(ImageSource(ImageSourceType.BASE64, "image/png", "iVBOR...")),
    ]
    text = json.dumps(content_to_json(content))
    assert content_from_json(json.loads(text)) == content


@pytest.mark.parametrize(
    "data",
    [
        {"Bogus": "x"},
        {"Text": "a", "Blocks": []},
        {"Text": 5},
        {"Blocks": [{"Text": {}}]},
        {"Blocks": [{"ToolUse": {"id": "1", "name": "x"}}]},
        "hello",
    ],
)
def test_content_from_json_rejects_malformed(data):
    with pytest.raises(ValueError):
        content_from_json(data)


def test_content_to_json_rejects_non_content():
    with pytest.raises(TypeError):
        content_to_json(42)


def test_user_meta_json_format():
    data = meta_to_json(UserMeta(is_meta=False, is_compact_summary=False))
    assert data == {
        "User": {
            "is_meta": False,
            "is_compact_summary": False,
            "source_tool_assistant_uuid": None,
        }
    }


def test_assistant_meta_round_trip():
    meta = AssistantMeta(
        model="claude-opus-4-6",
        stop_reason=StopReason.END_TURN,
        usage=TokenUsage(500, 200, cache_creation_input_tokens=10),
        request_id="req-1",
    )
    data = meta_to_json(meta)
    assert data["Assistant"]["stop_reason"] == "EndTurn"
    assert meta_from_json(json.loads(json.dumps(data))) == meta


def test_system_meta_round_trip():
    meta = SystemMeta(subtype="compact", level="info")
    assert meta_from_json(meta_to_json(meta)) == meta


@pytest.mark.parametrize(
    "data",
    [
        {"User": {"is_meta": True}},
        {"Assistant": {"stop_reason": "Sideways"}},
        {"Other": {}},
        {"System": "x"},
    ],
)
def test_meta_from_json_rejects_malformed(data):
    with pytest.raises(ValueError):
        meta_from_json(data)


def test_builder_build_assigns_identity():
    agent = AgentId.from_u128(1)
    turn = _builder(extra={"permissionMode": "auto"}).build(TurnId(3), agent, 2)
    assert turn.id == TurnId(3)
    assert turn.agent_id == agent
    assert turn.number == 2
    assert turn.uuid == "uuid-u1"
    assert turn.cwd == "/home/user"
    assert turn.role is TurnRole.USER
    assert turn.status is TurnStatus.COMPLETE
    assert turn.content == "hello"
    assert turn.extra["permissionMode"] == "auto"