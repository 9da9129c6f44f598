from auriga.messages import (
    CommandSpec,
    GenerateRequest,
    GenerateResponse,
    Message,
    Role,
    SkillStatus,
    ToolDefinition,
    ToolOutput,
    extract_tool_calls,
)
from auriga.turn import StopReason, TextBlock, ThinkingBlock, TokenUsage, ToolResultBlock, ToolUseBlock


def test_extract_tool_calls_keeps_only_tool_use_in_order():
    blocks = [
        TextBlock("before"),
        ToolUseBlock("call-1", "read_file", {"path": "/tmp/a"}),
        ThinkingBlock("hmm"),
        ToolResultBlock("call-0", "done"),
        ToolUseBlock("call-2", "bash", {"command": "ls"}),
    ]
    calls = extract_tool_calls(blocks)
    assert [call.id for call in calls] == ["call-1", "call-2"]
    assert [call.name for call in calls] == ["read_file", "bash"]
    assert calls[0].input == {"path": "/tmp/a"}


def test_extract_tool_calls_empty_when_no_tools():
    assert extract_tool_calls([TextBlock("hi")]) == []
    assert extract_tool_calls([]) == []


def test_extract_tool_calls_accepts_generator():
    calls = extract_tool_calls(b for b in [ToolUseBlock("x", "bash", {})])
    assert [call.id for call in calls] == ["x"]


def test_generate_request_defaults_are_independent():
    first = GenerateRequest(model="m", max_tokens=10)
    second = GenerateRequest(model="m", max_tokens=10)
    first.tools.append(ToolDefinition("bash", "Run a command", {"type": "object"}))
    first.messages.append(Message(Role.USER, "hi"))
    assert second.tools == []
    assert second.messages == []
    assert second.system is None
    assert second.temperature is None
    assert second.resume_session_id is None


def test_generate_response_carries_usage():
    usage = TokenUsage(10, 5)
    response = GenerateResponse(
        content=[TextBlock("ok")],
        model="m",
        stop_reason=StopReason.END_TURN,
        usage=usage,
    )
    assert response.usage.total() == usage.input_tokens + usage.output_tokens
    assert response.request_id is None
    assert response.provider_session_id is None


def test_command_spec_defaults():
    spec = CommandSpec("claude")
    assert spec.program == "claude"
    assert spec.args == []
    assert spec.env == []


def test_tool_output_defaults_to_success():
    output = ToolOutput("call-1", "done")
    assert output.is_error is False
    assert output.tool_call_id == "call-1"


def test_skill_status_defaults_to_not_downloaded():
    skill = SkillStatus("commit", "Write commits")
    assert skill.downloaded is False
    assert skill.name == "commit"