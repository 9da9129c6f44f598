# auriga

Auriga is a library of building blocks for tools that run LLM coding agents and keep track of them. It uses only the standard library.

## What is in the package

| Module | Contents |
| --- | --- |
| `auriga.agent` | `AgentId`, `AgentStatus`, `DisplayMode`, `Agent` |
| `auriga.turn` | `Turn`, `TurnBuilder`, content blocks (`TextBlock`, `ThinkingBlock`, `ToolUseBlock`, `ToolResultBlock`, `ImageBlock`), `TokenUsage`, turn metadata, and JSON conversion (`content_to_json`, `content_from_json`, `meta_to_json`, `meta_from_json`) |
| `auriga.trace` | `TraceId`, `TraceStatus`, `Trace` |
| `auriga.session` | `SessionId`, `SessionStatus` |
| `auriga.files` | `FileEntry` (file tree rows) and `FileActivity` (recently modified files) |
| `auriga.messages` | `ToolDefinition`, `ToolCall`, `ToolOutput`, `extract_tool_calls`, `Role`, `Message`, `GenerateRequest`, `GenerateResponse`, `CommandSpec`, `SkillStatus` |
| `auriga.errors` | `GenerateError` and its subclasses: `ApiError`, `RateLimitedError`, `SerializationError`, `NetworkError`, `ContentFilteredError`, `ContextLengthExceededError`, `AuthenticationError` |
| `auriga.classifier` | `TriggerPhase`, `TurnFilter`, `ClassifierTrigger`, `Notification`, `ClassificationResult`, `ClassifierStatus`, `ClassifierConfig`, `trigger_from_config` |
| `auriga.agent_config` | `AgentMode`, `AgentConfig`, `SystemPromptBuilder` |
| `auriga.claude` | `ClaudeCliConfig`, `PermissionMode`, `OutputFormat`, `EffortLevel` |
| `auriga.claude_settings` | `ClaudeSettings`, `PermissionsConfig`, `AttributionConfig`, `WorktreeConfig` |
| `auriga.codex` | `CodexCliConfig`, `SandboxMode`, `ApprovalPolicy` |
| `auriga.schema` | `init` and `get_version` for the SQLite schema |
| `auriga.traces` | `TraceOperations`: save and load traces and their turns |
| `auriga.database` | `Database`, `DbMetadata`, `TableInfo`, `QueryResult`, `quote_identifier` |
| `auriga.storage_thread` | `start_storage_thread` and `StorageHandle` |

## Installation

```
pip install .
```

To install the test dependencies as well:

```
pip install ".[test]"
```

## Building CLI arguments

```python
from auriga.claude import ClaudeCliConfig, EffortLevel

config = ClaudeCliConfig(model="opus", effort=EffortLevel.HIGH)
config.to_args()  # ["--model", "opus", "--effort", "high"]
```

```python
from auriga.codex import CodexCliConfig

CodexCliConfig().to_exec_args()         # ["--json"]
CodexCliConfig().to_interactive_args()  # []
```

`ClaudeCliConfig`, `ClaudeSettings` and `CodexCliConfig` each have a `to_dict` method and a `from_dict` class method, which convert to and from plain JSON-style dicts. `from_dict` raises `ValueError` on malformed data. `ClaudeCliConfig.from_dict` also accepts the MCP config path under the older key `mcp_config_path`. When `settings` is set on a `ClaudeCliConfig`, `to_args` passes it as compact JSON after `--settings`.

## Composing a system prompt

```python
from auriga.agent_config import SystemPromptBuilder

prompt = (
    SystemPromptBuilder()
    .section("Be concise.")
    .titled_section("Rules", "Never delete files.")
    .build()
)
```

Sections are joined with `\n\n---\n\n`. Empty sections are skipped. If no section has any content, `build()` returns `None`.

## Classifier triggers

```python
from auriga.classifier import trigger_from_config

trigger = trigger_from_config({"on": "incremental", "tools": ["Bash"], "tool_error": True})
trigger.display_name()  # "Incremental, tools=Bash, errors"
```

`filter_turns` keeps the turns that match the trigger's filter. A trigger with no filter keeps every turn.

## Storing traces

```python
from auriga.agent import AgentId
from auriga.database import Database
from auriga.trace import Trace, TraceId, TraceStatus
from auriga.turn import TokenUsage

db = Database.open_in_memory()
trace = Trace(
    id=TraceId.from_u128(1),
    agent_id=AgentId.from_u128(1),
    session_id="sess-1",
    status=TraceStatus.COMPLETE,
    started_at="2026-03-01T10:00:00Z",
    completed_at=None,
    turn_count=0,
    token_usage=TokenUsage(input_tokens=0, output_tokens=0),
    provider="claude",
)
db.save_trace(trace, [])
db.load_trace(trace.id)        # the Trace, or None
db.list_traces(10, 0)          # most recently started first
db.list_agent_traces(trace.agent_id)
db.load_turns(trace.id)        # ordered by turn id
db.close()
```

`Database.open(path)` creates the file if it is missing. Both `open` and `open_in_memory` create or migrate the schema. A `Database` can also be used as a context manager, which closes it on exit.

To inspect the database:

```python
meta = db.metadata("project.db")   # file size (0 if unreadable), tables, row counts
page = db.query_table("traces", limit=20, offset=0)
```

`query_table` raises `LookupError` for a table that does not exist, and `ValueError` for a negative limit or offset. In its results, NULL appears as `"NULL"`. Text longer than 60 characters is cut to 57 characters followed by `...`. Blobs appear as `<blob N bytes>`.

## Writing in the background

```python
from auriga.storage_thread import start_storage_thread

handle = start_storage_thread("project.db")
handle.save_trace(trace, [])
handle.shutdown()
```

`save_trace` queues the write and returns at once. If a write fails, the error is logged and the thread keeps running. `shutdown` waits until every queued write is done, then closes the database. The handle can also be used as a context manager. The thread also shuts down when the handle is garbage-collected.

## What the package does not do

The package has no command-line program, no terminal user interface and no screen or navigation state. It never starts agent processes itself: `CommandSpec`, `ClaudeCliConfig` and `CodexCliConfig` only describe programs and build their argument lists. `GenerateRequest`, `GenerateResponse` and the errors in `auriga.errors` are data types only, and the package contains no client that talks to a model provider.

## Running the tests

```
pytest
```