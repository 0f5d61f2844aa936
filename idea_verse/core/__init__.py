"""
Core components for Idea-Verse.

IdeaMap lives in idea_verse.core.idea_map; it depends on the store package,
which in turn depends on the models here.
"""

from .models import Idea, IdeaDraft, Graph, KeywordGroup, IdeaNode, Connection
from .similarity import similarity
from .graph_builder import GraphBuilder
from .layout import SpatialLayoutEngine
from .camera import CameraState, CameraProjector
from .controller import InteractionController, DragMode

__all__ = [
    "Idea",
    "IdeaDraft",
    "Graph",
    "KeywordGroup",
    "IdeaNode",
    "Connection",
    "similarity",
    "GraphBuilder",
    "SpatialLayoutEngine",
    "CameraState",
    "CameraProjector",
    "InteractionController",
    "DragMode",
]
