#!/usr/bin/env python3
"""
SQL Table Usage Visualizer

Draws a usage report as a network: INSERT files point at the tables they write
and tables point at the SELECT files that read them. Rendered with NetworkX
and Plotly as a standalone HTML page.
"""

from pathlib import Path
from typing import Optional

import networkx as nx
import plotly.graph_objects as go

from .usage import UsageReport


class UsageVisualizer:
    """Creates network visualizations of SQL table usage"""

    def __init__(self):
        self.node_colors = {
            'table': '#2E86AB',      # Blue for tables
            'writer': '#A23B72',     # Purple for INSERT files
            'reader': '#F18F01',     # Orange for SELECT files
        }

        self.edge_colors = {
            'writes': '#4ECDC4',
            'reads': '#45B7D1',
        }

    def build_usage_graph(self, report: UsageReport) -> nx.DiGraph:
        """Build a NetworkX directed graph from a usage report"""
        G = nx.DiGraph()

        for usage in report.usages:
            G.add_node(usage.table, type='table', color=self.node_colors['table'])
            G.add_node(usage.writer, type='writer', color=self.node_colors['writer'])
            G.add_edge(usage.writer, usage.table, operation_type='writes')

            for reader in usage.readers:
                G.add_node(reader, type='reader', color=self.node_colors['reader'])
                G.add_edge(usage.table, reader, operation_type='reads')

        return G

    def _label(self, node: str, node_type: str) -> str:
        if node_type == 'table':
            return node
        return Path(node).name

    def create_usage_visualization(self, report: UsageReport, output_file: Optional[str] = None) -> Optional[go.Figure]:
        """Create a network visualization using NetworkX and Plotly"""
        G = self.build_usage_graph(report)

        if len(G.nodes()) == 0:
            return None

        pos = nx.spring_layout(G, k=3, iterations=50, seed=42)

        fig = go.Figure()

        # One edge trace per edge type
        for op_type, edge_color in self.edge_colors.items():
            edge_x = []
            edge_y = []
            for source, target, data in G.edges(data=True):
                if data['operation_type'] != op_type:
                    continue
                x0, y0 = pos[source]
                x1, y1 = pos[target]
                edge_x.extend([x0, x1, None])
                edge_y.extend([y0, y1, None])

            if not edge_x:
                continue

            fig.add_trace(go.Scatter(
                x=edge_x,
                y=edge_y,
                mode='lines',
                line=dict(width=3, color=edge_color),
                hoverinfo='skip',
                opacity=0.7,
                name=op_type
            ))

        node_x = []
        node_y = []
        node_colors = []
        node_labels = []
        node_tooltips = []

        for node in G.nodes():
            x, y = pos[node]
            node_type = G.nodes[node]['type']
            node_x.append(x)
            node_y.append(y)
            node_colors.append(G.nodes[node]['color'])
            node_labels.append(self._label(node, node_type))

            tooltip = f"<b>{node}</b><br>"
            tooltip += f"Type: {node_type.title()}<br>"
            tooltip += f"Incoming: {G.in_degree(node)}<br>"
            tooltip += f"Outgoing: {G.out_degree(node)}"
            node_tooltips.append(tooltip)

        fig.add_trace(go.Scatter(
            x=node_x,
            y=node_y,
            mode='markers+text',
            marker=dict(
                size=20,
                color=node_colors,
                line=dict(width=2, color='white')
            ),
            text=node_labels,
            textposition="bottom center",
            textfont=dict(size=10),
            hoverinfo='text',
            hovertext=node_tooltips,
            showlegend=False
        ))

        fig.update_layout(
            title=f"Table Usage: {report.directory}",
            title_x=0.5,
            hovermode='closest',
            margin=dict(b=20, l=5, r=5, t=40),
            xaxis=dict(showgrid=False, zeroline=False, showticklabels=False),
            yaxis=dict(showgrid=False, zeroline=False, showticklabels=False),
            plot_bgcolor='white'
        )

        if output_file:
            fig.write_html(output_file, include_plotlyjs='cdn')
            print(f"📈 Usage graph saved to: {output_file}")

        return fig
