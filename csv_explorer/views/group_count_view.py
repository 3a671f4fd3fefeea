from __future__ import annotations

from typing import Optional, Sequence

import pandas as pd
import plotly.express as px
import plotly.graph_objects as go

from csv_explorer.core.aggregator import NO_DATA_KEY, GroupCount
from csv_explorer.core.base_view import BaseView
from csv_explorer.core.state import ExplorerState


class GroupCountView(BaseView):
    """
    Bar chart: number of filtered rows per distinct value of the group column.
    """

    id = "group_count"
    label = "Group count"

    def compute_data(self, state: ExplorerState) -> Optional[pd.DataFrame]:
        # recompute() already counted the filtered rows
        if state.group_column is None:
            return None
        return self.to_frame(self.derived.chart)

    @staticmethod
    def to_frame(groups: Optional[Sequence[GroupCount]]) -> Optional[pd.DataFrame]:
        """Aggregator output -> the frame render_figure expects (None = no chart)."""
        if groups is None:
            return None
        return pd.DataFrame(
            {
                "key": [g.key for g in groups],
                "count": [g.count for g in groups],
            }
        )

    def render_figure(self, data: Optional[pd.DataFrame], state: ExplorerState) -> go.Figure:
        if data is None:
            return self.empty_figure("Pick a column to group by")

        fig = px.bar(data, x="key", y="count")

        is_empty = len(data) == 1 and data["key"].iloc[0] == NO_DATA_KEY and data["count"].iloc[0] == 0
        title = "No rows match the current filters" if is_empty else f"Rows per {state.group_column}"

        fig.update_layout(
            height=400,
            margin=dict(l=40, r=40, t=60, b=40),
            title=title,
            xaxis_title=state.group_column,
            yaxis_title="# rows",
            showlegend=False,
        )
        # categorical axis keeps first-appearance order and numeric-looking keys as labels
        fig.update_xaxes(type="category", categoryorder="array", categoryarray=list(data["key"]))
        return fig
