from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, ClassVar

import plotly.graph_objs as go

from csv_explorer.core.state import DerivedView, ExplorerState


class BaseView(ABC):
    """
    A chart drawn from the DerivedView of the last recompute().

    Subclasses set `id` / `label` and split their work in two steps so the
    numbers can be tested without plotly:

    - compute_data(state): pick what the chart needs out of the derived view
    - render_figure(data, state): turn that into a plotly Figure
    """

    id: ClassVar[str] = ""
    label: ClassVar[str] = ""

    def __init__(self, derived: DerivedView):
        self.derived = derived

    @abstractmethod
    def compute_data(self, state: ExplorerState) -> Any:
        """:return: chart input, or None when the state asks for no chart"""
        raise NotImplementedError()

    @abstractmethod
    def render_figure(self, data: Any, state: ExplorerState) -> go.Figure:
        raise NotImplementedError()

    def figure(self, state: ExplorerState) -> go.Figure:
        return self.render_figure(self.compute_data(state), state)

    @staticmethod
    def empty_figure(message: str) -> go.Figure:
        """Blank figure with axes hidden and `message` as its title."""
        fig = go.Figure()
        fig.update_layout(
            title=message,
            xaxis={"visible": False},
            yaxis={"visible": False},
            height=400,
        )
        return fig
