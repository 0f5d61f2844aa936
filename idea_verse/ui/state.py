"""
Centralized session state management for Idea-Verse.
Provides typed accessors and clear state transition methods.
"""

from dataclasses import dataclass
from typing import Optional, Any
import streamlit as st


@dataclass
class StateDefaults:
    """Default values for all session state variables."""
    selected_idea_id: Optional[str] = None
    idea_map: Optional[Any] = None
    controller: Optional[Any] = None
    show_boxes: bool = True
    show_edges: bool = True
    show_labels: bool = True
    animate: bool = False
    last_error: Optional[str] = None
    last_notice: Optional[str] = None


class AppState:
    """
    Wrapper around Streamlit session state with type hints and defaults.
    Provides clear API for state transitions.
    """

    @classmethod
    def init(cls) -> None:
        """Initialize all session state with defaults."""
        defaults = StateDefaults()
        for field_name in defaults.__dataclass_fields__:
            if field_name not in st.session_state:
                st.session_state[field_name] = getattr(defaults, field_name)

    @classmethod
    def clear_selection(cls) -> None:
        """Clear current selection state."""
        st.session_state.selected_idea_id = None

    @classmethod
    def set_selected_idea(cls, idea_id: Optional[str]) -> None:
        st.session_state.selected_idea_id = idea_id

    @classmethod
    def set_error(cls, message: str) -> None:
        """Record an error for display."""
        st.session_state.last_error = message

    @classmethod
    def clear_error(cls) -> None:
        """Clear any recorded error."""
        st.session_state.last_error = None

    @classmethod
    def set_notice(cls, message: str) -> None:
        """Record a success message for display on the next run."""
        st.session_state.last_notice = message

    @classmethod
    def pop_notice(cls) -> Optional[str]:
        notice = st.session_state.get("last_notice")
        st.session_state.last_notice = None
        return notice

    @staticmethod
    def is_animating() -> bool:
        return st.session_state.get("animate", False)


def init_session_state() -> None:
    """Convenience function to initialize session state."""
    AppState.init()
