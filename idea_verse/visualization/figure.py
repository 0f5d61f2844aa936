"""
Interactive Plotly rendering of the idea map scene.
Boxes are drawn as wireframes, edges as quadratic path shapes and ideas as
one marker trace in painter's order, with click selection support.

Plotly puts every layout shape in one layer under (or over) all traces, so
edges keep their painter's order among themselves but always sit beneath
boxes and nodes, even when an edge is nearer than a node.
"""

from typing import Optional

import plotly.graph_objects as go

from idea_verse.visualization.scene import Scene, SceneBox, SceneNode


class IdeaMapFigureBuilder:
    """
    Builds Plotly figures from a Scene.

    Features:
    - Keyword group boxes as translucent wireframes with labels
    - Curved edges (dotted for weak same-keyword ties)
    - Node markers sized by connection tier and perspective
    - Two-keyword ideas outlined in their secondary keyword color
    - Bookmarked ideas drawn as stars, selected idea ringed
    """

    COLORS = {
        "selected": "#10b981",    # Emerald
        "outline": "#ffffff",
        "label": "#e2e8f0",
        "background": "rgba(17,17,17,0.8)",
    }

    def __init__(
        self,
        show_boxes: bool = True,
        show_edges: bool = True,
        show_labels: bool = True,
    ):
        """
        Initialize the figure builder.

        Args:
            show_boxes: Draw keyword group boxes
            show_edges: Draw connections
            show_labels: Draw node labels next to markers
        """
        self.show_boxes = show_boxes
        self.show_edges = show_edges
        self.show_labels = show_labels

    def build(self, scene: Scene, selected_id: Optional[str] = None) -> go.Figure:
        """
        Build the figure.

        Args:
            scene: Scene in painter's order
            selected_id: ID of the currently selected idea (optional)

        Returns:
            Plotly Figure object
        """
        fig = go.Figure()

        if self.show_boxes:
            for box in scene.boxes:
                self._add_box(fig, box)

        if self.show_edges:
            for edge in scene.edges:
                fig.add_shape(
                    type="path",
                    path=edge.svg_path(),
                    line=dict(
                        color=edge.color,
                        width=edge.width,
                        dash="dot" if edge.dotted else "solid",
                    ),
                    opacity=0.7,
                    layer="below",
                )

        if scene.nodes:
            self._add_nodes(fig, scene.nodes)

        if selected_id:
            selected = [n for n in scene.nodes if n.id == selected_id]
            if selected:
                self._add_selection(fig, selected[0])

        fig.update_layout(
            height=scene.height,
            template="plotly_dark",
            paper_bgcolor="rgba(0,0,0,0)",
            plot_bgcolor=self.COLORS["background"],
            showlegend=True,
            legend=dict(
                yanchor="top",
                y=0.99,
                xanchor="left",
                x=0.01,
                bgcolor="rgba(0,0,0,0.5)",
                font=dict(size=10)
            ),
            margin=dict(l=0, r=0, t=10, b=0),
            xaxis=dict(
                range=[0, scene.width],
                showgrid=False,
                showticklabels=False,
                zeroline=False,
                fixedrange=True,
                title="",
            ),
            # Screen coordinates grow downward
            yaxis=dict(
                range=[scene.height, 0],
                showgrid=False,
                showticklabels=False,
                zeroline=False,
                fixedrange=True,
                scaleanchor="x",
                title="",
            ),
            hovermode="closest",
            dragmode=False,
        )

        return fig

    def _add_box(self, fig: go.Figure, box: SceneBox) -> None:
        xs, ys = [], []
        for start, end in box.segments():
            xs.extend([start[0], end[0], None])
            ys.extend([start[1], end[1], None])

        fig.add_trace(go.Scatter(
            x=xs,
            y=ys,
            mode="lines",
            line=dict(color=box.color, width=1),
            opacity=0.35,
            hoverinfo="skip",
            name=f"{box.keyword} ({box.member_count})",
            legendgroup=box.keyword,
        ))
        fig.add_trace(go.Scatter(
            x=[box.label_x],
            y=[box.label_y - 10],
            mode="text",
            text=[f"<b>{box.keyword}</b>"],
            textfont=dict(color=box.color, size=12),
            hoverinfo="skip",
            showlegend=False,
            legendgroup=box.keyword,
        ))

    def _add_nodes(self, fig: go.Figure, nodes: list[SceneNode]) -> None:
        fig.add_trace(go.Scatter(
            x=[n.x for n in nodes],
            y=[n.y for n in nodes],
            mode="markers+text" if self.show_labels else "markers",
            marker=dict(
                color=[n.color for n in nodes],
                size=[max(2.0, n.radius * 2.0) for n in nodes],
                symbol=["star" if n.bookmarked else "circle" for n in nodes],
                opacity=1.0,
                line=dict(
                    color=[n.secondary_color or self.COLORS["outline"] for n in nodes],
                    width=[3 if n.secondary_color else 1 for n in nodes],
                ),
            ),
            text=[n.label for n in nodes] if self.show_labels else None,
            textposition="top center",
            textfont=dict(color=self.COLORS["label"], size=10),
            hovertext=self._build_hover_text(nodes),
            hovertemplate="%{hovertext}<extra></extra>",
            name="Ideas",
            showlegend=False,
            customdata=[n.id for n in nodes],
        ))

    def _add_selection(self, fig: go.Figure, node: SceneNode) -> None:
        fig.add_trace(go.Scatter(
            x=[node.x],
            y=[node.y],
            mode="markers",
            marker=dict(
                color="rgba(0,0,0,0)",
                size=max(2.0, node.radius * 2.0) + 10,
                line=dict(color=self.COLORS["selected"], width=3),
            ),
            hoverinfo="skip",
            name="Selected",
            customdata=[node.id],
        ))

    @staticmethod
    def _build_hover_text(nodes: list[SceneNode]) -> list[str]:
        """Build hover text for nodes."""
        texts = []
        for node in nodes:
            title = node.title
            if len(title) > 60:
                title = title[:60] + "..."
            text = f"<b>{title}</b><br>{node.keyword} · {node.connection_count} connections"
            if node.bookmarked:
                text += "<br><i>(bookmarked)</i>"
            texts.append(text)
        return texts

    @staticmethod
    def get_selected_id(selection: Optional[dict]) -> Optional[str]:
        """
        Extract the clicked idea id from Streamlit's plotly selection state.

        Args:
            selection: Return value of st.plotly_chart(on_select="rerun")

        Returns:
            Idea id of the first selected point, or None
        """
        if not selection or "selection" not in selection:
            return None
        for point in selection["selection"].get("points", []):
            customdata = point.get("customdata")
            if isinstance(customdata, list):
                customdata = customdata[0] if customdata else None
            if customdata:
                return str(customdata)
        return None
