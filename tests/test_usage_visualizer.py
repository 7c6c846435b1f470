"""
Tests for the usage graph visualizer
"""

import os
import sys
from pathlib import Path

import plotly.graph_objects as go

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'src'))

from usage_analyzer import SQLUsageAnalyzer, TableUsage, UsageReport
from usage_analyzer.usage_visualizer import UsageVisualizer

DATA_DIR = Path(__file__).parent / "data"


def make_report(usages):
    analyzer = SQLUsageAnalyzer()
    return UsageReport(
        directory="sql",
        statements_map=analyzer.init_statements_map(),
        table_map={},
        usages=usages,
        unread_tables=[],
        unwritten_tables=[],
        files=[],
        warnings=[],
    )


class TestUsageVisualizer:
    """Test cases for the UsageVisualizer class"""

    def setup_method(self):
        """Set up test fixtures"""
        self.visualizer = UsageVisualizer()
        self.report = SQLUsageAnalyzer().analyze_directory(DATA_DIR)

    def test_build_usage_graph(self):
        G = self.visualizer.build_usage_graph(self.report)

        assert G.number_of_nodes() == 4
        assert G.number_of_edges() == 3
        assert G.nodes["video_games"]["type"] == "table"

        writer = str(DATA_DIR / "insert_vg.sql")
        assert G.nodes[writer]["type"] == "writer"
        assert G.edges[writer, "video_games"]["operation_type"] == "writes"
        assert G.out_degree("video_games") == 2

    def test_unread_table_has_no_reader_edges(self):
        report = make_report([TableUsage(table="scores", writer="w.sql", readers=[])])

        G = self.visualizer.build_usage_graph(report)

        assert list(G.edges()) == [("w.sql", "scores")]

    def test_create_usage_visualization(self, tmp_path):
        output_file = tmp_path / "usage.html"

        fig = self.visualizer.create_usage_visualization(self.report, str(output_file))

        assert isinstance(fig, go.Figure)
        assert output_file.exists()
        node_trace = fig.data[-1]
        assert "video_games" in node_trace.text
        assert "select_vg.sql" in node_trace.text

    def test_empty_report(self):
        assert self.visualizer.create_usage_visualization(make_report([])) is None
