"""Integration tests for the CLI, the MCP tool handlers and configuration."""

import asyncio
import json
import logging
import tempfile
from pathlib import Path

import pytest
from typer.testing import CliRunner

from graphwalk.cli import app
from graphwalk.core.config import LoggingSettings, Settings, get_settings
from graphwalk.core.logging import get_logger, setup_logging
from graphwalk.mcp.server import handle_tool, list_tools

runner = CliRunner()

PENDANT_CYCLE = "0: 1 3\n1: 0 2 4\n2: 1 3\n3: 2 0\n4: 1\n"
CYCLE_WITH_TAIL = "0: 1\n1: 2\n2: 0 3\n3:\n"
CHAIN_EDGES = "0 1 10\n1 2 5\n2 3 7\n"
CYCLE_DIRECTIONS = "0 1\n1 2\n2 0\n2 3\n"


@pytest.fixture
def temp_dir():
    """Create a temporary directory for tests."""
    with tempfile.TemporaryDirectory() as td:
        yield Path(td)


@pytest.fixture
def pendant_file(temp_dir: Path) -> Path:
    """Write the pendant-cycle adjacency list."""
    path = temp_dir / "pendant.txt"
    path.write_text(PENDANT_CYCLE)
    return path


@pytest.fixture
def directed_files(temp_dir: Path) -> tuple[Path, Path]:
    """Write a directed adjacency list and its capacity file."""
    adjacency = temp_dir / "directed.txt"
    adjacency.write_text("0: 1\n1: 2\n2: 3\n3:\n")
    edges = temp_dir / "edges.txt"
    edges.write_text(CHAIN_EDGES)
    return adjacency, edges


def invoke_json(*args: str) -> dict:
    """Run a CLI command with --json and decode its stdout."""
    result = runner.invoke(app, [*args, "--json"])
    assert result.exit_code == 0, result.output
    return json.loads(result.stdout)


class TestCli:
    """Tests for the typer application."""

    def test_traverse_bfs_from_start(self, pendant_file: Path) -> None:
        data = invoke_json("traverse", str(pendant_file), "--start", "0")
        assert data["order"] == "bfs"
        assert [s["node"] for s in data["steps"]] == [0, 1, 3, 2, 4]
        assert data["steps"][1]["visited"] == [0, 1]

    def test_traverse_dfs_whole_graph(self, temp_dir: Path) -> None:
        path = temp_dir / "two.txt"
        path.write_text("3: 4\n0: 1\n")
        data = invoke_json("traverse", str(path), "--order", "dfs")
        assert [s["node"] for s in data["steps"]] == [0, 1, 3, 4]

    def test_traverse_table_output(self, pendant_file: Path) -> None:
        result = runner.invoke(app, ["traverse", str(pendant_file), "-s", "0", "-o", "dfs"])
        assert result.exit_code == 0
        assert "Order: 0 -> 1 -> 2 -> 3 -> 4" in result.output

    def test_traverse_unknown_order(self, pendant_file: Path) -> None:
        result = runner.invoke(app, ["traverse", str(pendant_file), "--order", "zigzag"])
        assert result.exit_code != 0

    def test_traverse_missing_start(self, pendant_file: Path) -> None:
        result = runner.invoke(app, ["traverse", str(pendant_file), "--start", "42"])
        assert result.exit_code == 1
        assert "not found" in result.output

    def test_components(self, temp_dir: Path) -> None:
        path = temp_dir / "split.txt"
        path.write_text("0: 1\n2: 3\n4:\n")
        data = invoke_json("components", str(path))
        assert data["components"] == [[0, 1], [2, 3], [4]]

    def test_articulation(self, pendant_file: Path) -> None:
        data = invoke_json("articulation", str(pendant_file))
        assert data["points"] == [1]
        assert data["bridges"] == [[1, 4]]

    def test_articulation_show_removal(self, pendant_file: Path) -> None:
        data = invoke_json("articulation", str(pendant_file), "--show-removal")
        assert data["after_removal"] == [[0, 2, 3], [4]]

    def test_articulation_text_output(self, pendant_file: Path) -> None:
        result = runner.invoke(app, ["articulation", str(pendant_file)])
        assert result.exit_code == 0
        assert "Articulation points: 1" in result.output
        assert "1-4" in result.output

    def test_biconnected(self, pendant_file: Path) -> None:
        data = invoke_json("biconnected", str(pendant_file))
        assert data["components"] == [[1, 4], [0, 1, 2, 3]]

    def test_scc(self, temp_dir: Path) -> None:
        path = temp_dir / "scc.txt"
        path.write_text(CYCLE_WITH_TAIL)
        edges = temp_dir / "scc_edges.txt"
        edges.write_text(CYCLE_DIRECTIONS)
        data = invoke_json("scc", str(path), "--edges", str(edges))
        assert data["components"] == [[0, 1, 2], [3]]

    def test_maxflow(self, directed_files: tuple[Path, Path]) -> None:
        adjacency, edges = directed_files
        data = invoke_json(
            "maxflow", str(adjacency), "--edges", str(edges), "--source", "0", "--sink", "3"
        )
        assert data == {"kind": "max_flow", "value": 5, "source": 0, "sink": 3}

    def test_maxflow_requires_edges(self, directed_files: tuple[Path, Path]) -> None:
        adjacency, _ = directed_files
        result = runner.invoke(app, ["maxflow", str(adjacency), "-s", "0", "-t", "3"])
        assert result.exit_code == 2

    def test_directed_without_edges_fails(self, directed_files: tuple[Path, Path]) -> None:
        adjacency, _ = directed_files
        result = runner.invoke(app, ["components", str(adjacency), "--directed"])
        assert result.exit_code == 1
        assert "edge directions" in result.output
        assert "'from to [capacity]' lines" in result.output

    def test_edge_outside_adjacency_fails(
        self, directed_files: tuple[Path, Path], temp_dir: Path
    ) -> None:
        adjacency, _ = directed_files
        edges = temp_dir / "stray.txt"
        edges.write_text("0 1\n3 0\n")
        result = runner.invoke(
            app, ["maxflow", str(adjacency), "-e", str(edges), "-s", "0", "-t", "3"]
        )
        assert result.exit_code == 1
        assert "Line 2" in result.output

    def test_maxflow_same_node_fails(self, directed_files: tuple[Path, Path]) -> None:
        adjacency, edges = directed_files
        result = runner.invoke(
            app, ["maxflow", str(adjacency), "-e", str(edges), "-s", "1", "-t", "1"]
        )
        assert result.exit_code == 1
        assert "different" in result.output

    def test_analyze_directed(self, directed_files: tuple[Path, Path]) -> None:
        adjacency, edges = directed_files
        data = invoke_json(
            "analyze", str(adjacency), "-D", "-e", str(edges), "-s", "0", "-t", "3"
        )
        assert set(data) == {
            "connected_components",
            "articulation_points",
            "biconnected_components",
            "strongly_connected_components",
            "max_flow",
        }
        assert data["max_flow"]["value"] == 5

    def test_analyze_undirected_skips_directed_only(self, pendant_file: Path) -> None:
        data = invoke_json("analyze", str(pendant_file))
        assert "strongly_connected_components" not in data
        assert data["articulation_points"]["points"] == [1]

    def test_bad_input_file(self, temp_dir: Path) -> None:
        path = temp_dir / "bad.txt"
        path.write_text("0 1 2\n")
        result = runner.invoke(app, ["components", str(path)])
        assert result.exit_code == 1
        assert "Line 1" in result.output


class TestMcpTools:
    """Tests for the MCP tool handlers."""

    def test_list_tools(self) -> None:
        tools = asyncio.run(list_tools())
        names = {tool.name for tool in tools}
        assert names == {
            "graphwalk_traverse",
            "graphwalk_components",
            "graphwalk_articulation",
            "graphwalk_biconnected",
            "graphwalk_scc",
            "graphwalk_maxflow",
        }

    def test_traverse(self) -> None:
        result = handle_tool(
            "graphwalk_traverse", {"adjacency": PENDANT_CYCLE, "order": "dfs", "start": 0}
        )
        assert [s["node"] for s in result["steps"]] == [0, 1, 2, 3, 4]

    def test_articulation(self) -> None:
        result = handle_tool("graphwalk_articulation", {"adjacency": PENDANT_CYCLE})
        assert result["points"] == [1]
        assert result["bridges"] == [[1, 4]]

    def test_scc(self) -> None:
        result = handle_tool(
            "graphwalk_scc",
            {"adjacency": CYCLE_WITH_TAIL, "directed": True, "edges": CYCLE_DIRECTIONS},
        )
        assert result["components"] == [[0, 1, 2], [3]]

    def test_directed_without_edges(self) -> None:
        result = handle_tool("graphwalk_scc", {"adjacency": CYCLE_WITH_TAIL, "directed": True})
        assert result["error_type"] == "ParseError"

    def test_scc_undirected_reports_error(self) -> None:
        result = handle_tool("graphwalk_scc", {"adjacency": PENDANT_CYCLE})
        assert result["error_type"] == "NotApplicableError"

    def test_maxflow(self) -> None:
        result = handle_tool(
            "graphwalk_maxflow",
            {
                "adjacency": "0: 1\n1: 2\n2: 3\n3:",
                "directed": True,
                "edges": CHAIN_EDGES,
                "source": 0,
                "sink": 3,
            },
        )
        assert result["value"] == 5

    def test_missing_argument(self) -> None:
        result = handle_tool(
            "graphwalk_maxflow", {"adjacency": "0: 1", "directed": True, "edges": "0 1"}
        )
        assert result == {"error": "Missing argument: source"}

    def test_parse_error(self) -> None:
        result = handle_tool("graphwalk_components", {"adjacency": "nonsense"})
        assert result["error_type"] == "ParseError"

    def test_unknown_tool(self) -> None:
        assert handle_tool("graphwalk_nope", {}) == {"error": "Unknown tool: graphwalk_nope"}


class TestSettings:
    """Tests for configuration and logging setup."""

    def test_defaults(self) -> None:
        settings = Settings()
        assert settings.default_order == "bfs"
        assert settings.logging.level == "WARNING"

    def test_environment_overrides(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("GRAPHWALK_DEFAULT_ORDER", "dfs")
        monkeypatch.setenv("GRAPHWALK_LOG_LEVEL", "debug")
        settings = Settings()
        assert settings.default_order == "dfs"
        assert settings.logging.level == "DEBUG"

    def test_get_settings_is_cached(self) -> None:
        assert get_settings() is get_settings()

    def test_setup_logging_level(self) -> None:
        setup_logging(LoggingSettings(level="ERROR", format="json"))
        assert logging.getLogger().level == logging.ERROR
        logger = get_logger("graphwalk.test", run="integration")
        logger.debug("not emitted")
